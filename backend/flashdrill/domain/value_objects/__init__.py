"""Domain value objects - immutable objects without identity."""

from .rating import Rating
from .reinsertion_policy import ReinsertionPolicy
from .session_mode import SessionMode
from .session_phase import SessionPhase
from .session_summary import SessionSummary

__all__ = [
    "Rating",
    "ReinsertionPolicy",
    "SessionMode",
    "SessionPhase",
    "SessionSummary",
]
