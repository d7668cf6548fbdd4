"""Deck file schema shared by the deck source adapters.

A deck is a JSON array of card records:

    [{"id": 1, "question": "...", "answer": "...", "tags": ["math"]}, ...]
"""

from collections import Counter

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from flashdrill.domain.entities.card import Card
from flashdrill.domain.errors import DeckLoadError


class CardRecord(BaseModel):
    """One card as stored in the deck file."""

    model_config = ConfigDict(extra="ignore")

    id: int | str
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    tags: list[str] = Field(..., min_length=1)

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, tags: list[str]) -> list[str]:
        cleaned = [tag.strip() for tag in tags]
        if any(not tag for tag in cleaned):
            raise ValueError("tags must be non-empty strings")
        return cleaned

    def to_card(self) -> Card:
        return Card(
            id=str(self.id),
            question=self.question,
            answer=self.answer,
            tags=frozenset(self.tags),
        )


_deck_adapter = TypeAdapter(list[CardRecord])


def parse_deck(raw: str | bytes, source: str) -> list[Card]:
    """Parse deck JSON into cards.

    Args:
        raw: JSON document
        source: Where the document came from (for error messages)

    Returns:
        Cards in file order

    Raises:
        DeckLoadError: If the JSON is malformed, a record is invalid,
            or card ids are not unique
    """
    try:
        records = _deck_adapter.validate_json(raw)
    except ValidationError as e:
        raise DeckLoadError(source, f"{e.error_count()} invalid field(s): {e.errors()[0]['msg']}") from e

    cards = [record.to_card() for record in records]
    duplicates = sorted(card_id for card_id, n in Counter(c.id for c in cards).items() if n > 1)
    if duplicates:
        raise DeckLoadError(source, f"duplicate card ids: {', '.join(duplicates)}")
    return cards
