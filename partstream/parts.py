"""
Content sources that make up a multipart body.

Every part pulls at most ``max_length`` bytes at a time and returns ``b""``
once it is exhausted.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, Union

from partstream.errors import InvalidArgumentError, InvalidStateError

UNKNOWN_LENGTH = -1


class Readable(Protocol):
    def read(self, size: int = ..., /) -> bytes: ...


Producer = Callable[[int], bytes]
Source = Union[bytes, bytearray, memoryview, str, Readable, Producer]


class LiteralPart:
    """Bytes known in full when appended."""

    __slots__ = ("data", "offset")

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    @property
    def length(self) -> int:
        return len(self.data)

    def pull(self, max_length: int) -> bytes:
        chunk = self.data[self.offset : self.offset + max_length]
        self.offset += len(chunk)
        return chunk

    def rewind(self) -> None:
        self.offset = 0

    def __repr__(self) -> str:
        return f"<LiteralPart {len(self.data)} bytes>"


class StreamPart:
    """An already-open binary stream. The caller keeps ownership of it."""

    __slots__ = ("stream", "length")

    def __init__(self, stream: Readable, length: int = UNKNOWN_LENGTH) -> None:
        self.stream = stream
        self.length = length

    def pull(self, max_length: int) -> bytes:
        try:
            data = self.stream.read(max_length)
        except (OSError, ValueError) as e:
            raise InvalidStateError(f"failed to read from stream: {e}") from e
        if data is None:
            # Non-blocking raw streams signal "no data yet" with None.
            raise InvalidStateError("stream returned no data")
        if not isinstance(data, (bytes, bytearray)):
            raise InvalidStateError(
                f"stream returned {type(data).__name__}, expected bytes"
            )
        if len(data) > max_length:
            raise InvalidStateError(
                f"stream returned {len(data)} bytes, more than the requested {max_length}"
            )
        return bytes(data)

    def rewind(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"<StreamPart {self.stream!r} length={self.length}>"


class ProducerPart:
    """A pull callback ``(max_length) -> bytes``, empty when exhausted."""

    __slots__ = ("producer", "length")

    def __init__(self, producer: Producer, length: int = UNKNOWN_LENGTH) -> None:
        self.producer = producer
        self.length = length

    def pull(self, max_length: int) -> bytes:
        data = self.producer(max_length)
        if isinstance(data, str):
            data = data.encode("utf-8")
        elif isinstance(data, (bytearray, memoryview)):
            data = bytes(data)
        elif not isinstance(data, bytes):
            raise InvalidStateError(
                f"producer returned {type(data).__name__}, expected bytes"
            )
        if len(data) > max_length:
            raise InvalidStateError(
                f"producer returned {len(data)} bytes, more than the requested {max_length}"
            )
        return data

    def rewind(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"<ProducerPart {self.producer!r} length={self.length}>"


Part = Union[LiteralPart, StreamPart, ProducerPart]


def is_source(source: object) -> bool:
    """Return whether ``source`` can be used as the content of a part."""
    return (
        isinstance(source, (bytes, bytearray, memoryview, str))
        or callable(getattr(source, "read", None))
        or callable(source)
    )


def make_part(source: Source, length: int = UNKNOWN_LENGTH) -> Part:
    """
    Classify ``source`` into one of the three part kinds.

    Text is encoded as UTF-8. Objects with a ``read`` method are streams,
    any other callable is a producer. ``length`` is ignored for literals.
    """
    if isinstance(source, str):
        return LiteralPart(source.encode("utf-8"))
    if isinstance(source, (bytes, bytearray, memoryview)):
        return LiteralPart(bytes(source))
    if callable(getattr(source, "read", None)):
        return StreamPart(source, length)  # type: ignore[arg-type]
    if callable(source):
        return ProducerPart(source, length)
    raise InvalidArgumentError(f"non-supported part type: {type(source).__name__}")
