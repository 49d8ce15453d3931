"""Configuration and logging helpers."""

from .config import DEFAULT_CONTENT_TYPE, ENSURE_ASCII, HTML_SAFE, MAX_DEPTH
from .logging import configure_root

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "ENSURE_ASCII",
    "HTML_SAFE",
    "MAX_DEPTH",
    "configure_root",
]
