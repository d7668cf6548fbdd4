"""Deck source adapter fetching a JSON deck over HTTP."""

import logging

import httpx

from flashdrill.adapters.deck_schema import parse_deck
from flashdrill.domain.entities.card import Card
from flashdrill.domain.errors import DeckLoadError

logger = logging.getLogger(__name__)


class HttpDeckSource:
    """DeckSource implementation fetching the deck from a URL.

    Failures are not retried; the user reloads explicitly.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize adapter.

        Args:
            url: Deck URL (http or https)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests inject a mock)
        """
        self._url = url
        self._timeout = timeout
        self._transport = transport

    @property
    def location(self) -> str:
        return self._url

    async def load(self) -> list[Card]:
        """Fetch and parse the deck."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(self._url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DeckLoadError(self._url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise DeckLoadError(self._url, str(e) or type(e).__name__) from e

        cards = parse_deck(response.content, self._url)
        logger.info(f"Fetched {len(cards)} cards from {self._url}")
        return cards
