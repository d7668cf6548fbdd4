"""Domain entities - objects with identity."""

from .card import Card
from .session import RatingRecord, SessionConfig, SessionState

__all__ = ["Card", "RatingRecord", "SessionConfig", "SessionState"]
