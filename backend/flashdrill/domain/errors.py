"""Domain errors raised by the session services."""


class FlashdrillError(Exception):
    """Base class for domain errors."""

    pass


class DeckLoadError(FlashdrillError):
    """Raised when the deck source cannot be fetched or parsed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load deck from {source}: {reason}")


class NoSectionsSelectedError(FlashdrillError):
    """Raised when a session is requested with zero sections selected."""

    def __init__(self) -> None:
        super().__init__("Please select at least one section.")


class InsufficientCardsError(FlashdrillError):
    """Raised when a fixed session asks for more cards than the sections hold."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Not enough cards in selected sections: {requested} requested, {available} available"
        )


class InvalidSessionSizeError(FlashdrillError):
    """Raised when the size choice is not one of the offered presets."""

    def __init__(self, choice: object, presets: tuple[int, ...]):
        self.choice = choice
        self.presets = presets
        allowed = ", ".join(str(p) for p in presets)
        super().__init__(f"Invalid session size {choice!r}. Choose one of {allowed} or unlimited")


class SessionConflictError(FlashdrillError):
    """Raised when attempting to start a session while one is already active."""

    def __init__(self) -> None:
        super().__init__("A session is already in progress")


class SessionCompleteError(FlashdrillError):
    """Raised when rating a card in a session that has no cards left."""

    def __init__(self) -> None:
        super().__init__("Session is complete - no card to rate")


class InvalidTransitionError(FlashdrillError, ValueError):
    """Raised when an action is not valid in the current phase."""

    def __init__(self, phase: str, action: str):
        self.phase = phase
        self.action = action
        super().__init__(f"Cannot {action} while {phase}")
