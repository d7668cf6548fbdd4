"""Test doubles and card factories shared across test modules."""

from flashdrill.domain.entities.card import Card
from flashdrill.domain.errors import DeckLoadError
from flashdrill.infrastructure.snapshot_store import InMemorySnapshotStore


def make_card(card_id, *tags, question=None, answer=None):
    return Card(
        id=str(card_id),
        question=question or f"Question {card_id}",
        answer=answer or f"Answer {card_id}",
        tags=frozenset(tags),
    )


def make_deck(count, *tags, start=1):
    return [make_card(i, *tags) for i in range(start, start + count)]


class StubDeckSource:
    """Deck source returning a fixed list of cards."""

    def __init__(self, cards):
        self.cards = list(cards)
        self.loads = 0

    @property
    def location(self):
        return "<stub>"

    async def load(self):
        self.loads += 1
        return list(self.cards)


class FailingDeckSource:
    location = "deck.json"

    async def load(self):
        raise DeckLoadError(self.location, "boom")


class RecordingSnapshotStore(InMemorySnapshotStore):
    """In-memory store that counts writes."""

    def __init__(self):
        super().__init__()
        self.saves = 0
        self.clears = 0

    async def save(self, payload):
        self.saves += 1
        await super().save(payload)

    async def clear(self):
        self.clears += 1
        await super().clear()
