"""Session manager service: the single controller of the study flow."""

import asyncio
import logging
import random
from collections.abc import Iterable

from flashdrill.domain.constants import (
    DEFAULT_SIZE_PRESETS,
    SNAPSHOT_VERSION,
    UNLIMITED_SIZE_CHOICE,
)
from flashdrill.domain.entities.card import Card
from flashdrill.domain.entities.session import SessionConfig
from flashdrill.domain.errors import DeckLoadError, InvalidSessionSizeError
from flashdrill.domain.services import session_queue
from flashdrill.domain.services.session_machine import Action, ActionType, StudyState, dispatch
from flashdrill.domain.value_objects.rating import Rating
from flashdrill.domain.value_objects.reinsertion_policy import ReinsertionPolicy
from flashdrill.domain.value_objects.session_phase import SessionPhase
from flashdrill.domain.value_objects.session_summary import SessionSummary
from flashdrill.ports.deck_source import DeckSource
from flashdrill.ports.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


class SessionManager:
    """Manages the study session lifecycle.

    Responsibilities:
    - Deck loading and section listing
    - Turning user choices into a SessionConfig
    - Applying user actions through the state machine
    - Saving the snapshot after each transition that needs it

    Holds exactly one StudyState; commands are serialised so two requests
    can never interleave a transition.
    """

    def __init__(
        self,
        deck_source: DeckSource,
        snapshot_store: SnapshotStore,
        size_presets: Iterable[int] = DEFAULT_SIZE_PRESETS,
        policy: ReinsertionPolicy | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize session manager.

        Args:
            deck_source: Port for loading the deck
            snapshot_store: Persistence for the in-progress session
            size_presets: Session sizes the user may pick (plus unlimited)
            policy: Reinsertion offsets for unlimited sessions
            rng: Random source (seed it for reproducible sessions)
        """
        self._deck_source = deck_source
        self._snapshot_store = snapshot_store
        self._size_presets = tuple(size_presets)
        self._policy = policy or ReinsertionPolicy()
        self._rng = rng or random.Random()
        self._deck: tuple[Card, ...] = ()
        self._deck_error: DeckLoadError | None = None
        self._study = StudyState()
        self._lock = asyncio.Lock()

    # --- Deck ---

    async def load_deck(self) -> int:
        """Load the deck from the deck source.

        A failure is logged and remembered; the deck stays empty so no
        session can start until the deck is loaded again.

        Returns:
            Number of cards loaded (0 on failure)
        """
        try:
            cards = await self._deck_source.load()
        except DeckLoadError as e:
            logger.error(f"Deck load failed: {e}")
            self._deck = ()
            self._deck_error = e
            return 0

        self._deck = tuple(cards)
        self._deck_error = None
        return len(self._deck)

    @property
    def deck(self) -> tuple[Card, ...]:
        return self._deck

    @property
    def deck_error(self) -> DeckLoadError | None:
        """Error from the last deck load, if it failed."""
        return self._deck_error

    def sections(self) -> list[str]:
        """Get the sections the user can choose from.

        Raises:
            DeckLoadError: If the deck failed to load
        """
        if self._deck_error is not None:
            raise self._deck_error
        return session_queue.available_sections(self._deck)

    @property
    def size_presets(self) -> tuple[int, ...]:
        return self._size_presets

    # --- Study state ---

    @property
    def study(self) -> StudyState:
        return self._study

    @property
    def phase(self) -> SessionPhase:
        return self._study.phase

    def current_card(self) -> Card | None:
        return self._study.current_card()

    def progress(self) -> float:
        return self._study.progress()

    def summary(self) -> SessionSummary | None:
        return self._study.summary

    def build_config(self, selected_tags: Iterable[str], size_choice: int | str) -> SessionConfig:
        """Turn the user's section and size choice into a session config.

        Args:
            selected_tags: Checked sections
            size_choice: One of the size presets, or "unlimited"

        Raises:
            InvalidSessionSizeError: If the size is not on offer
        """
        if isinstance(size_choice, str):
            choice = size_choice.strip().lower()
            if choice == UNLIMITED_SIZE_CHOICE:
                return SessionConfig.unlimited(selected_tags)
            if not choice.isdecimal():
                raise InvalidSessionSizeError(size_choice, self._size_presets)
            size_choice = int(choice)

        if size_choice not in self._size_presets:
            raise InvalidSessionSizeError(size_choice, self._size_presets)
        return SessionConfig.fixed(selected_tags, size_choice)

    # --- Commands ---

    async def start(self, selected_tags: Iterable[str], size_choice: int | str) -> StudyState:
        """Start a new session.

        Raises:
            DeckLoadError: If the deck failed to load
            NoSectionsSelectedError: If no sections are selected
            InsufficientCardsError: If the sections hold fewer cards than requested
            InvalidSessionSizeError: If the size is not on offer
            SessionConflictError: If a session is already in progress
        """
        if self._deck_error is not None:
            raise self._deck_error
        config = self.build_config(selected_tags, size_choice)
        return await self._apply(Action.start(config))

    async def flip(self) -> StudyState:
        """Reveal (or hide again) the answer of the current card."""
        return await self._apply(Action.flip())

    async def rate(self, rating: Rating) -> StudyState:
        """Rate the current card and move on."""
        return await self._apply(Action.rate(rating))

    async def end(self) -> StudyState:
        """End an unlimited session now."""
        return await self._apply(Action.end())

    async def restart(self) -> StudyState:
        """Leave the completion screen for a new selection."""
        return await self._apply(Action.restart())

    async def restore(self) -> bool:
        """Resume the session stored in the snapshot, if there is one.

        Unreadable or finished snapshots are discarded.

        Returns:
            True if a session was resumed
        """
        payload = await self._snapshot_store.load()
        if payload is None:
            return False

        try:
            if payload.get("version") != SNAPSHOT_VERSION:
                raise ValueError(f"unsupported snapshot version {payload.get('version')!r}")
            study = StudyState.from_dict(payload["study"])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Discarding unreadable session snapshot: {e}")
            await self._snapshot_store.clear()
            return False

        if study.phase is not SessionPhase.IN_SESSION or study.current_card() is None:
            logger.warning(f"Discarding snapshot in phase {study.phase}")
            await self._snapshot_store.clear()
            return False

        async with self._lock:
            self._study = study
        logger.info(
            f"Resumed {study.config.mode} session at position {study.session.position} "
            f"of {len(study.session.queue)}"
        )
        return True

    async def _apply(self, action: Action) -> StudyState:
        """Run an action through the state machine and persist the result."""
        async with self._lock:
            study = dispatch(
                self._study,
                action,
                deck=self._deck,
                rng=self._rng,
                policy=self._policy,
            )
            await self._persist(action, study)
            self._study = study
            logger.debug(f"{action.type.value}: phase={study.phase.value}")
            return study

    async def _persist(self, action: Action, study: StudyState) -> None:
        """Snapshot port: save after start and ratings, remove on completion."""
        if study.phase is SessionPhase.IN_SESSION:
            if action.type in (ActionType.START, ActionType.RATE):
                await self._snapshot_store.save(
                    {"version": SNAPSHOT_VERSION, "study": study.to_dict()}
                )
        else:
            await self._snapshot_store.clear()
