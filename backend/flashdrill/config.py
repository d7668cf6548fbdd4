"""Application configuration loaded from environment variables.

Provides type-safe access to configuration with sensible defaults.
"""

import logging
import os
from pathlib import Path

from flashdrill.domain.constants import (
    DEFAULT_EASY_OFFSETS,
    DEFAULT_HARD_OFFSETS,
    DEFAULT_MEDIUM_OFFSETS,
    DEFAULT_SESSION_SIZE,
    DEFAULT_SIZE_PRESETS,
)
from flashdrill.domain.value_objects.reinsertion_policy import ReinsertionPolicy


def get_cors_origins() -> list[str]:
    """Get allowed CORS origins from environment.

    Environment variable: CORS_ORIGINS (comma-separated)
    Default: localhost dev server ports
    """
    default_origins = "http://localhost:3000,http://localhost:5173,http://localhost:8080"
    origins_str = os.getenv("CORS_ORIGINS", default_origins)
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


def get_cors_allow_credentials() -> bool:
    """Get CORS allow_credentials setting.

    Environment variable: CORS_ALLOW_CREDENTIALS
    Default: false (the API uses no cookies)
    """
    return os.getenv("CORS_ALLOW_CREDENTIALS", "false").lower() == "true"


# Restricted HTTP methods - only what the API actually uses
CORS_ALLOWED_METHODS = ["GET", "POST", "OPTIONS"]

# Restricted headers - only what's needed for the API
CORS_ALLOWED_HEADERS = [
    "Accept",
    "Accept-Language",
    "Content-Type",
]


def get_log_level() -> int:
    """Get logging level.

    Environment variable: LOG_LEVEL
    Default: INFO
    """
    name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_deck_source() -> str | None:
    """Get deck location: a file path or an http(s) URL.

    Environment variable: FLASHDRILL_DECK_SOURCE
    Default: None (bundled sample deck)
    """
    return os.getenv("FLASHDRILL_DECK_SOURCE") or None


def get_deck_http_timeout() -> float:
    """Get timeout in seconds for fetching a deck over HTTP.

    Environment variable: DECK_HTTP_TIMEOUT
    """
    return float(os.getenv("DECK_HTTP_TIMEOUT", "10"))


def get_snapshot_backend() -> str:
    """Get snapshot store type.

    Options:
        - 'sqlite': Persist to SNAPSHOT_DB_PATH (default)
        - 'memory': Keep in process memory only
    """
    return os.getenv("SNAPSHOT_BACKEND", "sqlite").lower()


def get_snapshot_db_path() -> str:
    """Get snapshot database path from environment."""
    default_path = str(Path.home() / ".flashdrill" / "snapshot.db")
    return os.getenv("SNAPSHOT_DB_PATH", default_path)


def get_size_presets() -> tuple[int, ...]:
    """Get the fixed session sizes offered to the user.

    Environment variable: SESSION_SIZE_PRESETS (comma-separated)
    """
    raw = os.getenv("SESSION_SIZE_PRESETS")
    if not raw:
        return DEFAULT_SIZE_PRESETS
    presets = sorted({int(part) for part in raw.split(",") if part.strip()})
    if not presets or presets[0] < 1:
        raise ValueError(f"SESSION_SIZE_PRESETS must be positive integers, got {raw!r}")
    return tuple(presets)


def get_default_session_size() -> int:
    """Get the preset selected by default.

    Environment variable: DEFAULT_SESSION_SIZE
    Falls back to the first preset if the value is not on offer.
    """
    presets = get_size_presets()
    size = int(os.getenv("DEFAULT_SESSION_SIZE", str(DEFAULT_SESSION_SIZE)))
    return size if size in presets else presets[0]


def _parse_range(name: str, default: tuple[int, int]) -> tuple[int, int]:
    raw = os.getenv(name)
    if not raw:
        return default
    low, sep, high = raw.partition("-")
    if not sep:
        raise ValueError(f"{name} must look like 'low-high', got {raw!r}")
    return int(low), int(high)


def get_reinsertion_policy() -> ReinsertionPolicy:
    """Get reinsertion offsets for unlimited sessions.

    Environment variables: REINSERT_HARD, REINSERT_MEDIUM, REINSERT_EASY
    Format: 'low-high' (inclusive), e.g. REINSERT_HARD=10-15
    """
    return ReinsertionPolicy(
        hard=_parse_range("REINSERT_HARD", DEFAULT_HARD_OFFSETS),
        medium=_parse_range("REINSERT_MEDIUM", DEFAULT_MEDIUM_OFFSETS),
        easy=_parse_range("REINSERT_EASY", DEFAULT_EASY_OFFSETS),
    )
