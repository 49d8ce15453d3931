"""Error taxonomy raised while building, decoding or sending JSend envelopes."""
from __future__ import annotations


class JSendError(Exception):
    """Base class for every JSend validation failure.

    ``code`` is a stable machine-readable identifier so callers can branch on
    the failure kind without matching message text.
    """

    code = "jsend_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidStatus(JSendError):
    """Raised when the status is not one of success, fail or error."""

    code = "invalid_status"


class InvalidDataType(JSendError):
    """Raised when data is neither a mapping, None nor a serializable object."""

    code = "invalid_data_type"


class InvalidSerializedData(JSendError):
    """Raised when a serializable object does not serialize to a mapping."""

    code = "invalid_serialized_data"


class InvalidErrorMessageType(JSendError):
    """Raised when an error message can not be converted to a string."""

    code = "invalid_error_message_type"


class EmptyErrorMessage(JSendError):
    """Raised when an error envelope is given a missing or blank message."""

    code = "empty_error_message"


class InvalidErrorCode(JSendError):
    code = "invalid_error_code"


class MalformedJSON(JSendError):
    """Raised when a JSON document can not be decoded into an envelope."""

    code = "malformed_json"


class InvalidHeaderName(JSendError):
    code = "invalid_header_name"


class InvalidHeaderValue(JSendError):
    code = "invalid_header_value"


__all__ = [
    "EmptyErrorMessage",
    "InvalidDataType",
    "InvalidErrorCode",
    "InvalidErrorMessageType",
    "InvalidHeaderName",
    "InvalidHeaderValue",
    "InvalidSerializedData",
    "InvalidStatus",
    "JSendError",
    "MalformedJSON",
]
