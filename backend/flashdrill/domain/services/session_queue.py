"""Session queue operations: filtering, building and advancing a review queue.

All functions here are pure with respect to session data. Randomness comes
from an injected ``random.Random`` so callers can seed it.
"""

import logging
import random
from collections.abc import Iterable, Sequence
from dataclasses import replace

from flashdrill.domain.entities.card import Card
from flashdrill.domain.entities.session import RatingRecord, SessionConfig, SessionState
from flashdrill.domain.errors import (
    InsufficientCardsError,
    NoSectionsSelectedError,
    SessionCompleteError,
)
from flashdrill.domain.value_objects.rating import Rating
from flashdrill.domain.value_objects.reinsertion_policy import ReinsertionPolicy
from flashdrill.domain.value_objects.session_summary import SessionSummary

logger = logging.getLogger(__name__)

DEFAULT_POLICY = ReinsertionPolicy()


def available_sections(deck: Iterable[Card]) -> list[str]:
    """Get every section label used in the deck, sorted."""
    tags: set[str] = set()
    for card in deck:
        tags.update(card.tags)
    return sorted(tags)


def filter_cards(deck: Iterable[Card], selected_tags: Iterable[str]) -> list[Card]:
    """Keep cards tagged with at least one selected section, in deck order."""
    selected = frozenset(selected_tags)
    return [card for card in deck if card.has_any_tag(selected)]


def shuffle_cards(cards: Sequence[Card], rng: random.Random) -> list[Card]:
    """Return a uniformly shuffled copy of ``cards`` (Fisher-Yates)."""
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def start(deck: Sequence[Card], config: SessionConfig, rng: random.Random) -> SessionState:
    """Build the initial queue for a new session.

    Args:
        deck: All loaded cards
        config: Sections, mode and size chosen by the user
        rng: Random source for the shuffle

    Returns:
        Fresh session state with the cursor at the first card

    Raises:
        NoSectionsSelectedError: If no sections are selected
        InsufficientCardsError: If a fixed session asks for more cards than match
    """
    if not config.selected_tags:
        raise NoSectionsSelectedError()

    filtered = filter_cards(deck, config.selected_tags)
    if not config.is_unlimited and len(filtered) < config.size:
        raise InsufficientCardsError(requested=config.size, available=len(filtered))

    shuffled = shuffle_cards(filtered, rng)
    queue = shuffled if config.is_unlimited else shuffled[: config.size]

    logger.debug(
        f"Starting {config.mode} session over {len(filtered)} cards, queue length {len(queue)}"
    )
    return SessionState(queue=tuple(queue))


def is_complete(state: SessionState, config: SessionConfig) -> bool:
    """Check if the session has no more cards to show."""
    if config.is_unlimited:
        return state.position >= len(state.queue)
    return state.position >= config.size


def rate(
    state: SessionState,
    config: SessionConfig,
    rating: Rating,
    rng: random.Random,
    policy: ReinsertionPolicy = DEFAULT_POLICY,
) -> SessionState:
    """Record a rating for the current card and advance the cursor.

    In unlimited mode the rated card is also put back ahead of the cursor
    at an offset drawn from the rating's range, or appended when that
    index falls past the end of the queue.

    Raises:
        SessionCompleteError: If there is no card left to rate
    """
    if is_complete(state, config):
        raise SessionCompleteError()

    card = state.queue[state.position]
    history = state.history + (RatingRecord(card_id=card.id, rating=rating),)
    easy_count = state.easy_count + (1 if rating is Rating.EASY else 0)

    queue = state.queue
    if config.is_unlimited:
        offset = policy.draw_offset(rating, rng)
        index = state.position + offset
        if index < len(queue):
            queue = queue[:index] + (card,) + queue[index:]
        else:
            queue = queue + (card,)

    return replace(
        state,
        queue=queue,
        position=state.position + 1,
        history=history,
        easy_count=easy_count,
    )


def progress(state: SessionState, config: SessionConfig) -> float:
    """Percentage of the session done.

    Unlimited sessions have no bound, so they always report 100.
    """
    if config.is_unlimited:
        return 100.0
    return min(state.position / config.size, 1.0) * 100


def complete(state: SessionState, config: SessionConfig) -> SessionSummary:
    """Build the completion report for a session."""
    total = len(state.history) if config.is_unlimited else config.size
    return SessionSummary(easy_count=state.easy_count, total_considered=total)


def check_consistent(state: SessionState, config: SessionConfig) -> None:
    """Verify that a session state read back from storage fits its config.

    Every rating advances the cursor by one and Easy ratings are counted,
    so history, cursor and easy count must agree. A fixed queue always
    holds exactly ``size`` cards.

    Raises:
        ValueError: If the state could not have been produced by this config
    """
    if len(state.history) != state.position:
        raise ValueError(
            f"history has {len(state.history)} ratings but cursor is at {state.position}"
        )
    easy_in_history = sum(1 for record in state.history if record.rating is Rating.EASY)
    if state.easy_count != easy_in_history:
        raise ValueError(
            f"easy count {state.easy_count} does not match {easy_in_history} Easy ratings"
        )
    if not config.is_unlimited and len(state.queue) != config.size:
        raise ValueError(f"fixed queue holds {len(state.queue)} cards, expected {config.size}")
