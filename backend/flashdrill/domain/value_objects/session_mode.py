"""Session mode value object."""

from enum import StrEnum


class SessionMode(StrEnum):
    """How a session decides when it is over.

    FIXED: Ends after a predetermined number of cards, no reinsertion
    UNLIMITED: Continues until the user ends it; rated cards reappear
    """

    FIXED = "fixed"
    UNLIMITED = "unlimited"
