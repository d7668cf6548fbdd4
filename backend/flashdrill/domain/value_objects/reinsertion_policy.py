"""Reinsertion policy value object for unlimited sessions."""

import random
from dataclasses import dataclass

from flashdrill.domain.constants import (
    DEFAULT_EASY_OFFSETS,
    DEFAULT_HARD_OFFSETS,
    DEFAULT_MEDIUM_OFFSETS,
)
from flashdrill.domain.value_objects.rating import Rating


@dataclass(frozen=True)
class ReinsertionPolicy:
    """Inclusive offset ranges used to put a rated card back in the queue.

    Hard cards come back soonest and Easy cards latest. The ranges are
    tuning constants, not a scheduling model.
    """

    hard: tuple[int, int] = DEFAULT_HARD_OFFSETS
    medium: tuple[int, int] = DEFAULT_MEDIUM_OFFSETS
    easy: tuple[int, int] = DEFAULT_EASY_OFFSETS

    def __post_init__(self) -> None:
        """Validate each offset range."""
        for name in ("hard", "medium", "easy"):
            low, high = getattr(self, name)
            if low < 1 or high < low:
                raise ValueError(f"{name} offsets must satisfy 1 <= low <= high, got {low}-{high}")

    def range_for(self, rating: Rating) -> tuple[int, int]:
        """Get the (low, high) offset range for a rating."""
        return {
            Rating.HARD: self.hard,
            Rating.MEDIUM: self.medium,
            Rating.EASY: self.easy,
        }[rating]

    def draw_offset(self, rating: Rating, rng: random.Random) -> int:
        """Draw an offset uniformly from the rating's inclusive range."""
        low, high = self.range_for(rating)
        return rng.randint(low, high)
