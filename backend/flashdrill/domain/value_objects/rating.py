"""Rating value object for card reviews."""

from enum import StrEnum


class Rating(StrEnum):
    """Self-assessed recall for the card just reviewed.

    Maps to the three rating buttons:
    - HARD: Recalled with difficulty, card comes back soonest
    - MEDIUM: Recalled with some effort
    - EASY: Perfect recall, card comes back latest
    """

    HARD = "hard"
    MEDIUM = "medium"
    EASY = "easy"

    @classmethod
    def parse(cls, value: str) -> "Rating":
        """Parse a rating label case-insensitively ("Hard", "easy", ...).

        Raises:
            ValueError: If the label is not a known rating
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown rating: {value!r}") from None
