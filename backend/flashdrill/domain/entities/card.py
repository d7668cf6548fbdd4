"""Card entity representing a tagged question/answer flashcard."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypedDict


class CardDict(TypedDict):
    """Card data structure for serialization."""

    id: str
    question: str
    answer: str
    tags: list[str]


@dataclass(frozen=True)
class Card:
    """Flashcard entity.

    Immutable once loaded from the deck. Identity is ``id``.

    Attributes:
        id: Unique card identifier within the deck
        question: Front side of the card
        answer: Back side of the card
        tags: Section labels the card belongs to
    """

    id: str
    question: str
    answer: str
    tags: frozenset[str]

    def has_any_tag(self, tags: Iterable[str]) -> bool:
        """Check if the card belongs to at least one of the given sections."""
        return not self.tags.isdisjoint(tags)

    def to_dict(self) -> CardDict:
        """Convert card to dictionary for state serialization."""
        return {
            "id": self.id,
            "question": self.question,
            "answer": self.answer,
            "tags": sorted(self.tags),
        }

    @classmethod
    def from_dict(cls, data: CardDict) -> "Card":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            question=data["question"],
            answer=data["answer"],
            tags=frozenset(data["tags"]),
        )
