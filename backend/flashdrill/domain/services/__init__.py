"""Domain services - orchestration and business logic."""

from . import session_queue
from .session_machine import (
    Action,
    ActionType,
    StudyState,
    dispatch,
)
from .session_manager import SessionManager

__all__ = [
    "session_queue",
    "Action",
    "ActionType",
    "StudyState",
    "dispatch",
    "SessionManager",
]
