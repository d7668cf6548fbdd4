"""Session phase value object for the study state machine."""

from enum import StrEnum


class SessionPhase(StrEnum):
    """Study lifecycle phases.

    State machine:
        IDLE -> IN_SESSION -> COMPLETED -> IDLE (restart)

    States:
        IDLE: No session; user is choosing sections and size
        IN_SESSION: Reviewing cards
        COMPLETED: Session finished, summary available
    """

    IDLE = "idle"
    IN_SESSION = "in_session"
    COMPLETED = "completed"

    def can_accept_ratings(self) -> bool:
        """Check if the phase accepts card ratings."""
        return self is SessionPhase.IN_SESSION

    def is_terminal(self) -> bool:
        """Check if a session has run to its end."""
        return self is SessionPhase.COMPLETED
