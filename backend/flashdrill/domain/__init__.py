# Domain layer - Business logic (NO external dependencies)

from .entities import Card, RatingRecord, SessionConfig, SessionState
from .errors import (
    DeckLoadError,
    FlashdrillError,
    InsufficientCardsError,
    InvalidSessionSizeError,
    InvalidTransitionError,
    NoSectionsSelectedError,
    SessionCompleteError,
    SessionConflictError,
)
from .value_objects import (
    Rating,
    ReinsertionPolicy,
    SessionMode,
    SessionPhase,
    SessionSummary,
)

__all__ = [
    "Card",
    "RatingRecord",
    "SessionConfig",
    "SessionState",
    "DeckLoadError",
    "FlashdrillError",
    "InsufficientCardsError",
    "InvalidSessionSizeError",
    "InvalidTransitionError",
    "NoSectionsSelectedError",
    "SessionCompleteError",
    "SessionConflictError",
    "Rating",
    "ReinsertionPolicy",
    "SessionMode",
    "SessionPhase",
    "SessionSummary",
]
