"""Runtime configuration helpers for JSend serialization."""
from __future__ import annotations

import os
from typing import Final

from dotenv import load_dotenv

# Load .env file from the working directory (if it exists)
load_dotenv()


def _parse_bool(value: str | None, *, default: bool = False) -> bool:
    if value is None or not value.strip():
        return default
    value = value.strip().lower()
    return value in {"1", "true", "yes", "on"}


def _parse_int(value: str | None, *, default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(name: str, *, default: bool = False) -> bool:
    return _parse_bool(os.getenv(name), default=default)


def _env_int(name: str, *, default: int) -> int:
    return _parse_int(os.getenv(name), default=default)


DEFAULT_CONTENT_TYPE: Final[str] = "application/json;charset=utf-8"

HTML_SAFE: Final[bool] = _env_bool("JSEND_HTML_SAFE", default=True)
ENSURE_ASCII: Final[bool] = _env_bool("JSEND_ENSURE_ASCII", default=True)

_max_depth = _env_int("JSEND_MAX_DEPTH", default=512)
MAX_DEPTH: Final[int] = _max_depth if _max_depth > 0 else 512


__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "ENSURE_ASCII",
    "HTML_SAFE",
    "MAX_DEPTH",
]
