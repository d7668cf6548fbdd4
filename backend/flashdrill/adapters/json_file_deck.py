"""Deck source adapter reading a JSON deck from the local filesystem.

Without an explicit path the bundled sample deck is used.
"""

import asyncio
import logging
from importlib import resources
from pathlib import Path

from flashdrill.adapters.deck_schema import parse_deck
from flashdrill.domain.entities.card import Card
from flashdrill.domain.errors import DeckLoadError

logger = logging.getLogger(__name__)

SAMPLE_DECK = "sample_deck.json"


class JsonFileDeckSource:
    """DeckSource implementation backed by a JSON file."""

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize adapter.

        Args:
            path: Deck file path; None for the bundled sample deck
        """
        self._path = Path(path) if path is not None else None

    @property
    def location(self) -> str:
        return str(self._path) if self._path is not None else f"<bundled {SAMPLE_DECK}>"

    async def load(self) -> list[Card]:
        """Load cards from the deck file."""
        raw = await asyncio.to_thread(self._read)
        cards = parse_deck(raw, self.location)
        logger.info(f"Loaded {len(cards)} cards from {self.location}")
        return cards

    def _read(self) -> str:
        """Read the deck document.

        Uses importlib.resources for the bundled deck so it works from an
        installed package as well as a source checkout.
        """
        try:
            if self._path is None:
                data_path = resources.files("flashdrill.adapters.data").joinpath(SAMPLE_DECK)
                return data_path.read_text(encoding="utf-8")
            return self._path.read_text(encoding="utf-8")
        except (OSError, ModuleNotFoundError) as e:
            raise DeckLoadError(self.location, str(e)) from e
