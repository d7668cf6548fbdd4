"""Session entities: configuration and queue state of a review session."""

from dataclasses import dataclass
from typing import Self

from flashdrill.domain.entities.card import Card
from flashdrill.domain.value_objects.rating import Rating
from flashdrill.domain.value_objects.session_mode import SessionMode


@dataclass(frozen=True)
class RatingRecord:
    """A single rating given during a session.

    Attributes:
        card_id: ID of the card that was rated
        rating: User's rating
    """

    card_id: str
    rating: Rating


@dataclass(frozen=True)
class SessionConfig:
    """User selection for a session; fixed for the session's duration.

    Attributes:
        selected_tags: Sections to draw cards from
        mode: Fixed or unlimited session
        size: Number of cards to review (fixed mode only)
    """

    selected_tags: frozenset[str]
    mode: SessionMode
    size: int | None = None

    def __post_init__(self) -> None:
        """Validate size against mode."""
        if self.mode is SessionMode.FIXED:
            if self.size is None or self.size < 1:
                raise ValueError(f"fixed sessions need a positive size, got {self.size}")
        elif self.size is not None:
            raise ValueError("unlimited sessions take no size")

    @classmethod
    def fixed(cls, selected_tags, size: int) -> Self:
        """Create a fixed-size session config."""
        return cls(selected_tags=frozenset(selected_tags), mode=SessionMode.FIXED, size=size)

    @classmethod
    def unlimited(cls, selected_tags) -> Self:
        """Create an unlimited session config."""
        return cls(selected_tags=frozenset(selected_tags), mode=SessionMode.UNLIMITED)

    @property
    def is_unlimited(self) -> bool:
        return self.mode is SessionMode.UNLIMITED

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "selected_tags": sorted(self.selected_tags),
            "mode": self.mode.value,
            "size": self.size,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create from dictionary."""
        return cls(
            selected_tags=frozenset(data["selected_tags"]),
            mode=SessionMode(data["mode"]),
            size=data.get("size"),
        )


@dataclass(frozen=True)
class SessionState:
    """Queue state of a review session.

    A value: session operations return a new state rather than mutating
    this one.

    Attributes:
        queue: Cards in review order; grows in unlimited mode
        position: 0-based cursor into the queue, never decreases
        history: Ratings given so far, in order
        easy_count: Number of Easy ratings in history
    """

    queue: tuple[Card, ...] = ()
    position: int = 0
    history: tuple[RatingRecord, ...] = ()
    easy_count: int = 0

    def __post_init__(self) -> None:
        """Validate cursor bounds."""
        if self.position < 0 or self.position > len(self.queue):
            raise ValueError(f"position {self.position} outside queue of {len(self.queue)}")

    def current_card(self) -> Card | None:
        """Get the card under the cursor.

        Returns:
            Current card or None if the queue is exhausted
        """
        if self.position >= len(self.queue):
            return None
        return self.queue[self.position]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "queue": [card.to_dict() for card in self.queue],
            "position": self.position,
            "history": [
                {"card_id": record.card_id, "rating": record.rating.value}
                for record in self.history
            ],
            "easy_count": self.easy_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create from dictionary."""
        return cls(
            queue=tuple(Card.from_dict(card) for card in data["queue"]),
            position=data["position"],
            history=tuple(
                RatingRecord(card_id=str(record["card_id"]), rating=Rating(record["rating"]))
                for record in data["history"]
            ),
            easy_count=data["easy_count"],
        )
