import logging

import pytest

from flashdrill import config
from flashdrill.adapters.http_deck import HttpDeckSource
from flashdrill.adapters.json_file_deck import JsonFileDeckSource
from flashdrill.composition import create_deck_source, create_snapshot_store
from flashdrill.domain.value_objects.rating import Rating
from flashdrill.domain.value_objects.reinsertion_policy import ReinsertionPolicy
from flashdrill.infrastructure.snapshot_store import InMemorySnapshotStore, SqliteSnapshotStore


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in [
        "FLASHDRILL_DECK_SOURCE",
        "SESSION_SIZE_PRESETS",
        "DEFAULT_SESSION_SIZE",
        "REINSERT_HARD",
        "REINSERT_MEDIUM",
        "REINSERT_EASY",
        "SNAPSHOT_BACKEND",
        "SNAPSHOT_DB_PATH",
        "LOG_LEVEL",
    ]:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    assert config.get_size_presets() == (5, 10, 15, 20)
    assert config.get_default_session_size() == 15
    assert config.get_reinsertion_policy() == ReinsertionPolicy()
    assert config.get_log_level() == logging.INFO


def test_size_presets_from_env(monkeypatch):
    monkeypatch.setenv("SESSION_SIZE_PRESETS", "25, 10,10")
    monkeypatch.setenv("DEFAULT_SESSION_SIZE", "15")

    assert config.get_size_presets() == (10, 25)
    assert config.get_default_session_size() == 10


def test_non_positive_presets_are_rejected(monkeypatch):
    monkeypatch.setenv("SESSION_SIZE_PRESETS", "0,5")

    with pytest.raises(ValueError):
        config.get_size_presets()


def test_reinsertion_ranges_from_env(monkeypatch):
    monkeypatch.setenv("REINSERT_HARD", "2-4")

    policy = config.get_reinsertion_policy()

    assert policy.range_for(Rating.HARD) == (2, 4)
    assert policy.range_for(Rating.EASY) == (45, 50)


@pytest.mark.parametrize("value", ["12", "9-3", "0-2"])
def test_bad_reinsertion_ranges_are_rejected(monkeypatch, value):
    monkeypatch.setenv("REINSERT_MEDIUM", value)

    with pytest.raises(ValueError):
        config.get_reinsertion_policy()


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    assert config.get_log_level() == logging.INFO


def test_deck_source_selection(tmp_path):
    assert isinstance(create_deck_source("https://example.com/deck.json"), HttpDeckSource)
    assert isinstance(create_deck_source(str(tmp_path / "deck.json")), JsonFileDeckSource)
    assert create_deck_source().location == "<bundled sample_deck.json>"


def test_snapshot_store_selection(tmp_path, monkeypatch):
    monkeypatch.setenv("SNAPSHOT_BACKEND", "memory")
    assert isinstance(create_snapshot_store(), InMemorySnapshotStore)

    monkeypatch.setenv("SNAPSHOT_BACKEND", "sqlite")
    monkeypatch.setenv("SNAPSHOT_DB_PATH", str(tmp_path / "nested" / "snapshot.db"))
    assert isinstance(create_snapshot_store(), SqliteSnapshotStore)
    assert (tmp_path / "nested" / "snapshot.db").exists()

    monkeypatch.setenv("SNAPSHOT_BACKEND", "redis")
    with pytest.raises(ValueError):
        create_snapshot_store()
