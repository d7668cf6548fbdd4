"""Session summary value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionSummary:
    """Completion report for a finished session.

    Attributes:
        easy_count: Number of Easy ratings given during the session
        total_considered: Session size (Fixed) or number of ratings (Unlimited)
    """

    easy_count: int
    total_considered: int

    @property
    def message(self) -> str:
        """Completion message shown to the user."""
        return f"You marked {self.easy_count} of {self.total_considered} cards as Easy!"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "easy_count": self.easy_count,
            "total_considered": self.total_considered,
            "message": self.message,
        }
