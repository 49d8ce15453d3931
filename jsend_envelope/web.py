"""Starlette integration for JSend envelopes."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from starlette.background import BackgroundTask
from starlette.responses import Response

from .envelope import JSend
from .sinks import BufferedSink

_LOGGER = logging.getLogger("jsend_envelope.web")


def http_status_for(envelope: JSend) -> int:
    """Pick an HTTP status code matching the envelope's JSend status.

    Fail is a client-side problem (400). Error uses its code when it is an
    HTTP error status, else 500.
    """

    if envelope.is_success():
        return 200
    if envelope.is_fail():
        return 400
    code = envelope.get_error_code()
    if code is not None and 400 <= code <= 599:
        return code
    return 500


def _coerce(content: Any) -> JSend:
    if isinstance(content, JSend):
        return content
    if isinstance(content, Mapping):
        return JSend.from_mapping(content)
    return JSend.from_json(content)


class JSendResponse(Response):
    """Response whose headers and body are written by ``JSend.send``.

    ``content`` may be an envelope, a JSend mapping or a JSON document.
    Extra ``headers`` go through the same validation as ``send``.
    """

    def __init__(
        self,
        content: Any,
        status_code: Optional[int] = None,
        headers: Optional[Mapping[str, str]] = None,
        background: Optional[BackgroundTask] = None,
    ) -> None:
        self.envelope = _coerce(content)
        sink = BufferedSink()
        self.envelope.send(headers, sink=sink)
        resolved_status = status_code if status_code is not None else http_status_for(self.envelope)
        _LOGGER.debug(
            "jsend.response",
            extra={"jsend_status": self.envelope.status.value, "status_code": resolved_status},
        )
        super().__init__(
            content=sink.body,
            status_code=resolved_status,
            headers=dict(sink.headers),
            background=background,
        )


__all__ = ["JSendResponse", "http_status_for"]
