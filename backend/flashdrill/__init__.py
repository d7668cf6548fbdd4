"""flashdrill - flashcard study sessions over tagged decks."""

__version__ = "0.1.0"
