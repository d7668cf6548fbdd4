"""
Study Session State Machine.

Every user action maps to a pure transition ``(StudyState, Action) -> StudyState``.
Rendering and persistence happen outside, in whoever calls ``dispatch``.

Phases:
    IDLE --start--> IN_SESSION --rate/end--> COMPLETED --restart--> IDLE
"""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

from flashdrill.domain.entities.card import Card
from flashdrill.domain.entities.session import SessionConfig, SessionState
from flashdrill.domain.errors import InvalidTransitionError, SessionConflictError
from flashdrill.domain.services import session_queue
from flashdrill.domain.value_objects.rating import Rating
from flashdrill.domain.value_objects.reinsertion_policy import ReinsertionPolicy
from flashdrill.domain.value_objects.session_mode import SessionMode
from flashdrill.domain.value_objects.session_phase import SessionPhase
from flashdrill.domain.value_objects.session_summary import SessionSummary

logger = logging.getLogger(__name__)


class ActionType(str, Enum):
    """User actions understood by the state machine."""

    START = "start"
    FLIP = "flip"
    RATE = "rate"
    END = "end"
    RESTART = "restart"


@dataclass(frozen=True)
class Action:
    """A user action (immutable value object).

    ``config`` is set for START, ``rating`` for RATE.
    """

    type: ActionType
    config: SessionConfig | None = None
    rating: Rating | None = None

    @classmethod
    def start(cls, config: SessionConfig) -> "Action":
        return cls(ActionType.START, config=config)

    @classmethod
    def flip(cls) -> "Action":
        return cls(ActionType.FLIP)

    @classmethod
    def rate(cls, rating: Rating) -> "Action":
        return cls(ActionType.RATE, rating=rating)

    @classmethod
    def end(cls) -> "Action":
        return cls(ActionType.END)

    @classmethod
    def restart(cls) -> "Action":
        return cls(ActionType.RESTART)


@dataclass(frozen=True)
class StudyState:
    """Everything the study screen needs, as one value.

    Attributes:
        phase: Current lifecycle phase
        config: Active session config (None when idle)
        session: Active queue state (None when idle)
        flipped: Whether the answer side of the current card is showing
        summary: Completion report (set once completed)
    """

    phase: SessionPhase = SessionPhase.IDLE
    config: SessionConfig | None = None
    session: SessionState | None = None
    flipped: bool = False
    summary: SessionSummary | None = None

    def current_card(self) -> Card | None:
        """Get the card being reviewed, if any."""
        if self.phase is not SessionPhase.IN_SESSION or self.session is None:
            return None
        return self.session.current_card()

    def progress(self) -> float:
        """Progress percentage of the active or finished session."""
        if self.session is None or self.config is None:
            return 0.0
        return session_queue.progress(self.session, self.config)

    def to_dict(self) -> dict:
        """Convert to dictionary for snapshot serialization."""
        return {
            "phase": self.phase.value,
            "config": self.config.to_dict() if self.config else None,
            "session": self.session.to_dict() if self.session else None,
            "flipped": self.flipped,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StudyState":
        """Create from snapshot dictionary.

        Raises:
            ValueError: If the config and queue state contradict each other
        """
        phase = SessionPhase(data["phase"])
        config = SessionConfig.from_dict(data["config"]) if data.get("config") else None
        session = SessionState.from_dict(data["session"]) if data.get("session") else None
        if phase is not SessionPhase.IDLE and (config is None or session is None):
            raise ValueError(f"{phase} snapshot needs both config and session")
        if config is not None and session is not None:
            session_queue.check_consistent(session, config)
        return cls(
            phase=phase,
            config=config,
            session=session,
            flipped=data.get("flipped", False),
        )


# Actions allowed in each phase
VALID_ACTIONS: dict[SessionPhase, set[ActionType]] = {
    SessionPhase.IDLE: {ActionType.START},
    SessionPhase.IN_SESSION: {ActionType.FLIP, ActionType.RATE, ActionType.END},
    SessionPhase.COMPLETED: {ActionType.RESTART},
}


def dispatch(
    study: StudyState,
    action: Action,
    *,
    deck: Sequence[Card],
    rng: random.Random,
    policy: ReinsertionPolicy = session_queue.DEFAULT_POLICY,
) -> StudyState:
    """Apply a user action and return the next study state.

    Args:
        study: Current study state
        action: Action to apply
        deck: Loaded cards (used by START)
        rng: Random source for shuffling and reinsertion
        policy: Reinsertion offsets for unlimited sessions

    Returns:
        New study state; ``study`` is left untouched

    Raises:
        SessionConflictError: If START arrives while a session is running
        InvalidTransitionError: If the action is not valid in the current phase
        FlashdrillError: Whatever the queue operation raises (e.g. insufficient cards)
    """
    if action.type is ActionType.START and study.phase is SessionPhase.IN_SESSION:
        raise SessionConflictError()
    if action.type not in VALID_ACTIONS[study.phase]:
        raise InvalidTransitionError(study.phase.value, action.type.value)

    if action.type is ActionType.START:
        return _start(action.config, deck, rng)
    if action.type is ActionType.FLIP:
        return replace(study, flipped=not study.flipped)
    if action.type is ActionType.RATE:
        return _rate(study, action.rating, rng, policy)
    if action.type is ActionType.END:
        if study.config.mode is not SessionMode.UNLIMITED:
            raise InvalidTransitionError(study.phase.value, "end a fixed session early")
        return _finish(study)
    # RESTART
    return StudyState()


def _start(config: SessionConfig | None, deck: Sequence[Card], rng: random.Random) -> StudyState:
    if config is None:
        raise ValueError("start action requires a session config")
    session = session_queue.start(deck, config, rng)
    study = StudyState(phase=SessionPhase.IN_SESSION, config=config, session=session)
    if session_queue.is_complete(session, config):
        # Nothing to review, e.g. an unlimited session over zero matching cards
        return _finish(study)
    return study


def _rate(
    study: StudyState,
    rating: Rating | None,
    rng: random.Random,
    policy: ReinsertionPolicy,
) -> StudyState:
    if rating is None:
        raise ValueError("rate action requires a rating")
    session = session_queue.rate(study.session, study.config, rating, rng, policy)
    rated = replace(study, session=session, flipped=False)
    if session_queue.is_complete(session, study.config):
        return _finish(rated)
    return rated


def _finish(study: StudyState) -> StudyState:
    summary = session_queue.complete(study.session, study.config)
    logger.info(f"Session completed: {summary.message}")
    return replace(study, phase=SessionPhase.COMPLETED, flipped=False, summary=summary)
