"""Immutable JSend response envelopes."""

from .envelope import JSend, Status
from .errors import (
    EmptyErrorMessage,
    InvalidDataType,
    InvalidErrorCode,
    InvalidErrorMessageType,
    InvalidHeaderName,
    InvalidHeaderValue,
    InvalidSerializedData,
    InvalidStatus,
    JSendError,
    MalformedJSON,
)
from .sinks import BufferedSink, ResponseSink, StreamSink

__all__ = [
    "BufferedSink",
    "EmptyErrorMessage",
    "InvalidDataType",
    "InvalidErrorCode",
    "InvalidErrorMessageType",
    "InvalidHeaderName",
    "InvalidHeaderValue",
    "InvalidSerializedData",
    "InvalidStatus",
    "JSend",
    "JSendError",
    "MalformedJSON",
    "ResponseSink",
    "StreamSink",
    "Status",
]
