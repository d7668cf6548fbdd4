"""
Shared Domain Constants.

Central location for the tuning constants used by the session services.
"""

# =============================================================================
# Reinsertion Offsets (queue positions, inclusive ranges)
# =============================================================================
# Unlimited sessions put a rated card back this many places ahead of the
# cursor. Hard comes back soonest, Easy latest.

DEFAULT_HARD_OFFSETS = (10, 15)
DEFAULT_MEDIUM_OFFSETS = (25, 30)
DEFAULT_EASY_OFFSETS = (45, 50)


# =============================================================================
# Session Size
# =============================================================================

DEFAULT_SIZE_PRESETS = (5, 10, 15, 20)
DEFAULT_SESSION_SIZE = 15
UNLIMITED_SIZE_CHOICE = "unlimited"


# =============================================================================
# Persistence
# =============================================================================

# Well-known key of the single persisted session snapshot
SNAPSHOT_KEY = "flashdrill_session"
SNAPSHOT_VERSION = 1
