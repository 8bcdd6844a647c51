"""Destinations receiving streamed PDF output."""

from __future__ import annotations

from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class ResponseSink(Protocol):
    """Interface accepting response headers followed by raw body bytes.

    Sinks may additionally expose ``fileno()`` and ``flush()``; when a usable
    descriptor is available the conversion binary writes to it directly.
    """

    def add_header(self, name: str, value: str) -> None: ...

    def write(self, data: bytes) -> object: ...


class BinaryStreamSink:
    """Sink writing the body to a binary stream and recording headers."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self.headers: list[tuple[str, str]] = []

    def add_header(self, name: str, value: str) -> None:
        self.headers.append((name, value))

    def write(self, data: bytes) -> int:
        return self.stream.write(data)

    def flush(self) -> None:
        self.stream.flush()

    def fileno(self) -> int:
        return self.stream.fileno()


def sink_fileno(sink: object) -> int | None:
    """Return the OS-level descriptor behind ``sink`` when it has one."""
    fileno = getattr(sink, "fileno", None)
    if not callable(fileno):
        return None
    try:
        descriptor = fileno()
    except (OSError, ValueError):
        return None
    return descriptor if isinstance(descriptor, int) and descriptor >= 0 else None


def flush_sink(sink: object) -> None:
    flush = getattr(sink, "flush", None)
    if callable(flush):
        flush()


__all__ = ["BinaryStreamSink", "ResponseSink", "flush_sink", "sink_fileno"]
