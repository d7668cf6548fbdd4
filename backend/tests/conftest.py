import random

import pytest

from flashdrill.domain.services.session_manager import SessionManager
from tests.factories import RecordingSnapshotStore, StubDeckSource, make_card, make_deck


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def mixed_deck():
    return (
        make_deck(20, "math")
        + make_deck(5, "history", start=21)
        + [make_card(26, "math", "science"), make_card(27, "science")]
    )


@pytest.fixture
def snapshot_store():
    return RecordingSnapshotStore()


@pytest.fixture
def manager_factory(snapshot_store):
    def factory(cards=None, source=None, **kwargs):
        deck_source = source or StubDeckSource(cards if cards is not None else [])
        kwargs.setdefault("rng", random.Random(42))
        return SessionManager(deck_source=deck_source, snapshot_store=snapshot_store, **kwargs)

    return factory
