"""JSON decode/encode wrapper used by the JSend envelope."""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel

from .errors import MalformedJSON
from .utils.config import ENSURE_ASCII, HTML_SAFE, MAX_DEPTH

_LOGGER = logging.getLogger("jsend_envelope.codec")

_DECODE_ERROR_PREFIX = "Unable to decode the submitted JSON string"

# A JSON string literal as emitted by json.dumps: plain characters or \-escapes.
_STRING_LITERAL = re.compile(r'"((?:[^"\\]|\\.)*)"')
_HTML_UNSAFE = re.compile(r"\\.|[<>&']")
_HTML_ESCAPES: dict[str, str] = {
    "<": "\\u003C",
    ">": "\\u003E",
    "&": "\\u0026",
    "'": "\\u0027",
    '\\"': "\\u0022",
}


@runtime_checkable
class SupportsToDict(Protocol):
    """Objects that know how to serialize themselves to a mapping."""

    def to_dict(self) -> Any:
        ...


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Syntax error, unexpected {name}")


def _exceeds_depth(value: Any, limit: int) -> bool:
    """Report whether ``value`` nests more than ``limit`` containers deep."""

    pending = [(value, 0)]
    while pending:
        item, level = pending.pop()
        if isinstance(item, dict):
            children = item.values()
        elif isinstance(item, list):
            children = item
        else:
            continue
        level += 1
        if level > limit:
            return True
        pending.extend((child, level) for child in children)
    return False


def decode(text: str | bytes | bytearray, *, depth: Optional[int] = None) -> Any:
    """Decode ``text`` and enforce the nesting ``depth`` limit.

    Raises :class:`MalformedJSON` carrying the decoder's diagnostic when the
    document is not valid JSON (``NaN``/``Infinity`` included) or nests deeper
    than allowed.
    """

    limit = MAX_DEPTH if depth is None else depth
    try:
        payload = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        _LOGGER.debug("json.decode_failed", extra={"error": str(exc)})
        raise MalformedJSON(f"{_DECODE_ERROR_PREFIX}: {exc}") from exc
    except RecursionError as exc:
        _LOGGER.debug("json.decode_failed", extra={"error": "recursion"})
        raise MalformedJSON(f"{_DECODE_ERROR_PREFIX}: Maximum stack depth exceeded") from exc

    if _exceeds_depth(payload, limit):
        _LOGGER.debug("json.decode_failed", extra={"error": "depth", "limit": limit})
        raise MalformedJSON(f"{_DECODE_ERROR_PREFIX}: Maximum stack depth exceeded")
    return payload


def _default(value: Any) -> Any:
    if isinstance(value, SupportsToDict):
        return value.to_dict()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _escape_literal(match: re.Match[str]) -> str:
    body = _HTML_UNSAFE.sub(
        lambda token: _HTML_ESCAPES.get(token.group(0), token.group(0)), match.group(1)
    )
    return f'"{body}"'


def escape_html(text: str) -> str:
    """Escape ``< > & '`` and embedded quotes inside the string literals of ``text``."""

    return _STRING_LITERAL.sub(_escape_literal, text)


def encode(
    payload: Any,
    *,
    html_safe: Optional[bool] = None,
    ensure_ascii: Optional[bool] = None,
) -> str:
    """Encode ``payload`` compactly, keeping key insertion order."""

    text = json.dumps(
        payload,
        separators=(",", ":"),
        ensure_ascii=ENSURE_ASCII if ensure_ascii is None else ensure_ascii,
        allow_nan=False,
        default=_default,
    )
    if HTML_SAFE if html_safe is None else html_safe:
        text = escape_html(text)
    return text


__all__ = ["SupportsToDict", "decode", "encode", "escape_html"]
