"""Response sinks receiving the headers and body written by ``JSend.send``."""
from __future__ import annotations

from typing import BinaryIO, Protocol, runtime_checkable

from starlette.responses import Response


@runtime_checkable
class ResponseSink(Protocol):
    """Destination for one response: header lines first, then the body."""

    def add_header(self, line: str) -> None:
        ...

    def write(self, body: bytes) -> None:
        ...


class StreamSink:
    """Write a CGI-style response (headers, blank line, body) to a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._body_started = False

    def add_header(self, line: str) -> None:
        if self._body_started:
            raise RuntimeError("Headers already sent")
        self._stream.write(line.encode("latin-1") + b"\r\n")

    def write(self, body: bytes) -> None:
        if not self._body_started:
            self._stream.write(b"\r\n")
            self._body_started = True
        self._stream.write(body)
        self._stream.flush()


class BufferedSink:
    """Collect headers and body in memory, e.g. to build a Starlette response."""

    def __init__(self) -> None:
        self.headers: list[tuple[str, str]] = []
        self.body = b""

    def add_header(self, line: str) -> None:
        name, _, value = line.partition(": ")
        self.headers.append((name, value))

    def write(self, body: bytes) -> None:
        self.body += body

    def to_response(self, status_code: int = 200) -> Response:
        return Response(content=self.body, status_code=status_code, headers=dict(self.headers))


__all__ = ["BufferedSink", "ResponseSink", "StreamSink"]
