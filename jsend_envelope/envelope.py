"""Immutable JSend response envelope.

A JSend document has exactly three shapes::

    {"status": "success", "data": {...} | null}
    {"status": "fail", "data": {...} | null}
    {"status": "error", "message": "...", "code": 23, "data": {...}}

``JSend`` validates its input once, at construction, and never changes
afterwards. The ``with_*`` methods return a new envelope, or the same one when
nothing would change.
"""
from __future__ import annotations

import copy
import logging
import sys
from collections.abc import Mapping
from enum import Enum
from numbers import Integral
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from . import codec
from .errors import (
    EmptyErrorMessage,
    InvalidDataType,
    InvalidErrorCode,
    InvalidErrorMessageType,
    InvalidSerializedData,
    InvalidStatus,
    MalformedJSON,
)
from .headers import build_header_lines
from .sinks import ResponseSink, StreamSink

_LOGGER = logging.getLogger("jsend_envelope.envelope")


class Status(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    FAIL = "fail"

    def __str__(self) -> str:
        return self.value


_STATUSES = {member.value for member in Status}


def _filter_status(status: Any) -> Status:
    if isinstance(status, str) and status in _STATUSES:
        return Status(status)
    raise InvalidStatus("The given status does not conform to Jsend specification")


def _clone(value: Any) -> Any:
    """Deep-copy nested dicts and lists without recursing once per level."""

    memo: Dict[int, Any] = {}
    root: list = [None]
    pending: list = [(root, 0, value)]
    while pending:
        parent, key, item = pending.pop()
        if id(item) in memo:
            parent[key] = memo[id(item)]
            continue
        if isinstance(item, dict):
            clone: Any = dict.fromkeys(item)
            pending.extend((clone, name, child) for name, child in item.items())
        elif isinstance(item, list):
            clone = [None] * len(item)
            pending.extend((clone, index, child) for index, child in enumerate(item))
        else:
            parent[key] = copy.deepcopy(item)
            continue
        memo[id(item)] = clone
        parent[key] = clone
    return root[0]


def _same_data(left: Any, right: Any) -> bool:
    """Compare values the way they serialize: ``1``, ``1.0`` and ``True`` differ, key order counts."""

    pending = [(left, right)]
    while pending:
        a, b = pending.pop()
        if type(a) is not type(b):
            return False
        if isinstance(a, dict):
            if list(a) != list(b):
                return False
            pending.extend(zip(a.values(), b.values()))
        elif isinstance(a, (list, tuple)):
            if len(a) != len(b):
                return False
            pending.extend(zip(a, b))
        elif a is not b and a != b:
            return False
    return True


def _copy_mapping(data: Mapping) -> Dict[str, Any]:
    if not all(isinstance(key, str) for key in data):
        raise InvalidDataType("The data keys must be strings")
    return _clone(dict(data))


def _filter_data(data: Any) -> Dict[str, Any]:
    """Normalize ``data`` to a plain dict.

    Accepted inputs are ``None`` (no data), a mapping, an object with a
    ``to_dict()`` method, or a pydantic model.
    """

    if data is None:
        return {}

    if isinstance(data, Mapping):
        return _copy_mapping(data)

    if isinstance(data, codec.SupportsToDict):
        serialized = data.to_dict()
    elif isinstance(data, BaseModel):
        serialized = data.model_dump(mode="json")
    else:
        raise InvalidDataType(
            "The data must be a mapping, a serializable object or None"
        )

    if not isinstance(serialized, Mapping):
        raise InvalidSerializedData(
            "The serializable object must return a mapping, "
            f"{type(serialized).__name__} returned"
        )
    return _copy_mapping(serialized)


def _filter_error_message(message: Any) -> str:
    if message is None:
        raise EmptyErrorMessage("The error message can not be empty.")

    if isinstance(message, bool) or (
        not isinstance(message, (str, int, float)) and type(message).__str__ is object.__str__
    ):
        raise InvalidErrorMessageType(
            "The error message must be a string, a number or an object implementing __str__."
        )

    text = str(message)
    if not text.strip():
        raise EmptyErrorMessage("The error message can not be empty.")
    return text


def _filter_error_code(code: Any) -> Optional[int]:
    if code is None:
        return None
    if isinstance(code, Integral) and not isinstance(code, bool):
        return int(code)
    if isinstance(code, float) and code.is_integer():
        return int(code)
    raise InvalidErrorCode("The error code must be an integer or None")


class JSend(BaseModel):
    """A JSend response envelope.

    ``error_message`` and ``error_code`` only exist for the error status;
    for success and fail they are dropped whatever the caller passed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: Status
    data: Dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None
    error_code: Optional[int] = None

    def __init__(
        self,
        status: Any,
        data: Any = None,
        error_message: Any = None,
        error_code: Any = None,
    ) -> None:
        super().__init__(
            status=status,
            data=data,
            error_message=error_message,
            error_code=error_code,
        )

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, values: Any) -> Any:
        if not isinstance(values, Mapping):
            return values

        status = _filter_status(values.get("status", ""))
        data = _filter_data(values.get("data"))
        if status is not Status.ERROR:
            return {"status": status, "data": data, "error_message": None, "error_code": None}

        return {
            "status": status,
            "data": data,
            "error_message": _filter_error_message(values.get("error_message")),
            "error_code": _filter_error_code(values.get("error_code")),
        }

    @classmethod
    def success(cls, data: Any = None) -> "JSend":
        return cls(Status.SUCCESS, data)

    @classmethod
    def fail(cls, data: Any = None) -> "JSend":
        return cls(Status.FAIL, data)

    @classmethod
    def error(cls, error_message: Any, error_code: Any = None, data: Any = None) -> "JSend":
        return cls(Status.ERROR, data, error_message, error_code)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "JSend":
        """Build an envelope from a decoded JSend document.

        Reads the wire keys ``status``, ``data``, ``message`` and ``code``.
        """

        if not isinstance(raw, Mapping):
            raise InvalidDataType("The JSend payload must be a mapping")

        return cls(
            raw.get("status", ""),
            raw.get("data"),
            raw.get("message"),
            raw.get("code"),
        )

    @classmethod
    def from_json(
        cls, payload: "str | bytes | bytearray | JSend", *, depth: Optional[int] = None
    ) -> "JSend":
        """Decode a JSON document into an envelope.

        An existing envelope is returned unchanged so the output of one
        response can be fed back as the input of another.
        """

        if isinstance(payload, JSend):
            return payload

        if not isinstance(payload, (str, bytes, bytearray)):
            raise TypeError(
                "from_json() expects str, bytes or a JSend instance, "
                f"not {type(payload).__name__}"
            )

        raw = codec.decode(payload, depth=depth)
        if not isinstance(raw, dict):
            raise MalformedJSON(
                "Unable to decode the submitted JSON string: expected a JSON object"
            )
        return cls.from_mapping(raw)

    @classmethod
    def from_state(cls, properties: Mapping[str, Any]) -> "JSend":
        """Rebuild an envelope from its field values, as shown by ``repr``."""

        return cls(
            properties["status"],
            properties.get("data"),
            properties.get("error_message"),
            properties.get("error_code"),
        )

    def get_status(self) -> Status:
        return self.status

    def get_data(self) -> Dict[str, Any]:
        return _clone(self.data)

    def get_error_message(self) -> Optional[str]:
        return self.error_message

    def get_error_code(self) -> Optional[int]:
        return self.error_code

    def is_success(self) -> bool:
        return self.status is Status.SUCCESS

    def is_fail(self) -> bool:
        return self.status is Status.FAIL

    def is_error(self) -> bool:
        return self.status is Status.ERROR

    def to_dict(self) -> Dict[str, Any]:
        """Return the canonical wire mapping.

        Success and fail always carry ``data`` (``None`` when empty). Error
        carries ``message``, ``code`` when set, and ``data`` only when
        non-empty.
        """

        payload: Dict[str, Any] = {
            "status": self.status.value,
            "data": _clone(self.data) or None,
        }
        if self.status is not Status.ERROR:
            return payload

        payload["message"] = str(self.error_message)
        if self.error_code is not None:
            payload["code"] = self.error_code

        if payload["data"] is None:
            del payload["data"]

        return payload

    def debug_info(self) -> Dict[str, Any]:
        return self.to_dict()

    def to_json(self, *, html_safe: Optional[bool] = None) -> str:
        return codec.encode(self.to_dict(), html_safe=html_safe)

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status={self.status.value!r}, data={self.data!r}, "
            f"error_message={self.error_message!r}, error_code={self.error_code!r})"
        )

    def with_status(self, status: Any) -> "JSend":
        if status == self.status:
            return self

        return type(self)(status, self.data, self.error_message, self.error_code)

    def with_data(self, data: Any) -> "JSend":
        normalized = _filter_data(data)
        if _same_data(normalized, self.data):
            return self

        return type(self)(self.status, normalized, self.error_message, self.error_code)

    def with_error(self, error_message: Any, error_code: Any = None) -> "JSend":
        message = _filter_error_message(error_message)
        code = _filter_error_code(error_code)
        if self.is_error() and message == self.error_message and code == self.error_code:
            return self

        return type(self)(Status.ERROR, self.data, message, code)

    def send(
        self,
        headers: Optional[Mapping[str, str]] = None,
        *,
        sink: Optional[ResponseSink] = None,
    ) -> int:
        """Emit headers and the JSON body to ``sink``; return the body length in bytes.

        ``headers`` override the default ``Content-Type``/``Content-Length``.
        All headers are validated before anything is emitted. Without a
        sink the response is written CGI-style to standard output.
        """

        body = self.to_json().encode("utf-8")
        lines = build_header_lines(len(body), headers)

        target = sink if sink is not None else StreamSink(sys.stdout.buffer)
        for line in lines:
            target.add_header(line)
        target.write(body)

        _LOGGER.debug(
            "jsend.send",
            extra={"jsend_status": self.status.value, "header_count": len(lines), "length": len(body)},
        )
        return len(body)


__all__ = ["JSend", "Status"]
