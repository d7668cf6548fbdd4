# Adapters layer - Concrete implementations (JSON file, HTTP)

from .http_deck import HttpDeckSource
from .json_file_deck import JsonFileDeckSource

__all__ = [
    "HttpDeckSource",
    "JsonFileDeckSource",
]
