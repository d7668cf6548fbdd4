"""Port interface for the deck source."""

from typing import Protocol, runtime_checkable

from flashdrill.domain.entities.card import Card


@runtime_checkable
class DeckSource(Protocol):
    """Port for loading the card deck.

    Abstracts where the deck comes from (local file, HTTP).
    Follows hexagonal architecture - domain doesn't know about files or URLs.
    """

    @property
    def location(self) -> str:
        """Human-readable location of the deck, for logs and errors."""
        ...

    async def load(self) -> list[Card]:
        """Load every card in the deck, in source order.

        Returns:
            Cards as defined by the source

        Raises:
            DeckLoadError: If the deck cannot be fetched or parsed
        """
        ...
