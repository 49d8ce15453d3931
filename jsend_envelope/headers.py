"""Header merging and validation for emitting JSend responses."""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Optional

from .errors import InvalidHeaderName, InvalidHeaderValue
from .utils.config import DEFAULT_CONTENT_TYPE

_HEADER_NAME = re.compile(r"[a-zA-Z0-9'`#$%&*+.^_|~!-]+")
# Lone LF, lone CR, or CRLF that is not a folded continuation line.
_BAD_LINE_BREAK = re.compile(r"(?:(?<!\r)\n)|(?:\r(?!\n))|(?:\r\n(?![ \t]))")
_BAD_CHARACTER = re.compile(r"[^\x09\x0a\x0d\x20-\x7e\x80-\xfe]")


def validate_header_name(name: Any) -> str:
    if isinstance(name, str) and _HEADER_NAME.fullmatch(name):
        return name
    raise InvalidHeaderName("Invalid header name")


def validate_header_value(value: Any) -> str:
    if (
        isinstance(value, str)
        and not _BAD_LINE_BREAK.search(value)
        and not _BAD_CHARACTER.search(value)
    ):
        return value
    raise InvalidHeaderValue("Invalid header value")


def _same_name(left: Any, right: Any) -> bool:
    if isinstance(left, str) and isinstance(right, str):
        return left.lower() == right.lower()
    return left == right


def merge_headers(
    defaults: Mapping[str, str], extra: Optional[Mapping[Any, Any]] = None
) -> list[tuple[Any, Any]]:
    """Overlay ``extra`` on ``defaults``; the last value for a name wins.

    Names compare case-insensitively. An overriding header keeps the position
    of the one it replaces but takes the caller's spelling.
    """

    merged: list[tuple[Any, Any]] = list(defaults.items())
    for name, value in (extra or {}).items():
        for index, (existing, _) in enumerate(merged):
            if _same_name(existing, name):
                merged[index] = (name, value)
                break
        else:
            merged.append((name, value))
    return merged


def build_header_lines(
    content_length: int, headers: Optional[Mapping[Any, Any]] = None
) -> list[str]:
    """Return validated ``"Name: value"`` lines for a JSON body.

    Every header is validated before the list is returned, so a caller that
    emits the result never sends a partial header set.
    """

    defaults = {
        "Content-Type": DEFAULT_CONTENT_TYPE,
        "Content-Length": str(content_length),
    }
    return [
        f"{validate_header_name(name)}: {validate_header_value(value)}"
        for name, value in merge_headers(defaults, headers)
    ]


__all__ = [
    "build_header_lines",
    "merge_headers",
    "validate_header_name",
    "validate_header_value",
]
