from __future__ import annotations

import logging
import random
from collections.abc import Iterator

from partstream.boundary import generate_boundary
from partstream.errors import InvalidArgumentError, InvalidStateError, LogicError
from partstream.headers import content_disposition, format_header
from partstream.parts import UNKNOWN_LENGTH, LiteralPart, Part, Source, make_part
from partstream.utils import (
    validate_int,
    validate_length,
    validate_non_empty_str,
    validate_positive_int,
    validate_str,
)

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 8192


class Multipart:
    """
    Append-only builder for a multipart body that is read back lazily.

    Parts are appended through the ``start_part`` / ``add_header`` /
    ``end_headers`` / ``add_content`` / ``end_part`` primitives. After
    ``finish()`` the body can be pulled in chunks with ``read()`` or
    materialized at once with ``buffer()`` (or ``bytes(multipart)``).

    Streams passed as content are never closed by the builder.

    Args:
        boundary: The multipart boundary. If empty a new one is generated.
        content_type: The content type without the boundary parameter,
            e.g. ``multipart/mixed``.
        rng: Random source used when generating the boundary.
    """

    def __init__(
        self,
        boundary: str = "",
        content_type: str = "multipart/mixed",
        rng: random.Random | None = None,
    ) -> None:
        validate_str(boundary, "boundary")
        validate_non_empty_str(content_type, "content_type")

        self._boundary = boundary or generate_boundary(rng)
        self._content_type = f"{content_type}; boundary={self._boundary}"
        self._parts: list[Part] = []
        self._part_count = 0
        self._finished = False
        self._index = 0
        self._content_length = 0

    @property
    def boundary(self) -> str:
        return self._boundary

    @property
    def content_type(self) -> str:
        return self._content_type

    @property
    def content_length(self) -> int:
        """The length of the body, or -1 if not known."""
        return self._content_length

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def buffered(self) -> bool:
        """Whether the whole body is held as a single in-memory literal."""
        return (
            self._part_count == 1
            and isinstance(self._parts[0], LiteralPart)
            and self._content_length == self._parts[0].length
        )

    def get_boundary(self) -> str:
        return self._boundary

    def get_content_type(self) -> str:
        return self._content_type

    def get_content_length(self) -> int:
        return self._content_length

    def is_finished(self) -> bool:
        return self._finished

    def is_buffered(self) -> bool:
        return self.buffered

    # Building

    def _add(self, source: Source, length: int = UNKNOWN_LENGTH) -> None:
        if self._finished:
            raise LogicError("can't add to a finished multipart object")

        part = make_part(source, length)
        self._parts.append(part)
        self._part_count += 1
        if isinstance(part, LiteralPart):
            if self._content_length != UNKNOWN_LENGTH:
                self._content_length += part.length
        elif part.length == UNKNOWN_LENGTH:
            self._content_length = UNKNOWN_LENGTH
        elif self._content_length != UNKNOWN_LENGTH:
            self._content_length += part.length

    def start_part(self) -> None:
        self._add(f"--{self._boundary}\r\n".encode("utf-8"))

    def add_header(self, name: str, value: str) -> None:
        self._add(format_header(name, value))

    def add_content_disposition(self, disposition: str, name: str = "", filename: str = "") -> None:
        self.add_header("Content-Disposition", content_disposition(disposition, name, filename))

    def add_content_id(self, content_id: str) -> None:
        self.add_header("Content-ID", content_id)

    def add_content_type(self, content_type: str) -> None:
        self.add_header("Content-Type", content_type)

    def add_content_transfer_encoding(self, encoding: str) -> None:
        self.add_header("Content-Transfer-Encoding", encoding)

    def end_headers(self) -> None:
        self._add(b"\r\n")

    def add_content(self, source: Source, length: int = UNKNOWN_LENGTH) -> None:
        """
        Add the content of a part.

        Args:
            source: Literal bytes or text, an open binary stream, or a
                callable taking a maximum length and returning at most that
                many bytes (``b""`` when exhausted).
            length: The length of the content, or -1 if not known.
                Ignored for literal content.
        """
        validate_length(length, "length")
        self._add(source, length)

    def end_part(self) -> None:
        self._add(b"\r\n")

    def add_nested_multipart(self, nested: Multipart) -> None:
        """Add a finished multipart as a part of this one."""
        if not isinstance(nested, Multipart):
            raise InvalidArgumentError("nested is incorrectly typed")
        if nested is self:
            raise InvalidArgumentError("can't nest a multipart object in itself")
        if self._finished:
            raise LogicError("can't add to a finished multipart object")
        if not nested.finished:
            raise LogicError("can't add a non-finished nested multipart object")

        self.start_part()
        self.add_content_type(nested.content_type)
        self.end_headers()
        self.add_content(nested.read, nested.content_length)
        self.end_part()

    def finish(self) -> Multipart:
        """Finish the multipart. Nothing can be added to it afterwards."""
        if self._finished:
            raise LogicError("multipart object is already finished")
        self._add(f"--{self._boundary}--\r\n".encode("utf-8"))
        self._finished = True
        logger.debug(
            "Finished %s with %d parts, content length %d",
            self._content_type,
            self._part_count,
            self._content_length,
        )
        return self

    # Reading

    def read(self, max_length: int) -> bytes:
        """
        Read the next portion of the body.

        Returns at most ``max_length`` bytes, or ``b""`` once everything has
        been read. Bytes are never yielded twice; call ``buffer()`` to start
        over from the beginning.
        """
        if not self._finished:
            raise LogicError("can't read from a non-finished multipart object")
        validate_int(max_length, "max_length")
        if max_length <= 0:
            return b""
        return self._read(max_length)

    def _read(self, max_length: int) -> bytes:
        while self._index < self._part_count:
            part = self._parts[self._index]
            try:
                data = part.pull(max_length)
            except InvalidStateError:
                logger.debug("Reading part %d of %s failed", self._index, self._content_type)
                raise
            if data:
                return data
            self._index += 1
        return b""

    def _rewind(self) -> None:
        self._index = 0
        for part in self._parts:
            part.rewind()

    def curl_read(self, handle: object, fd: object, length: int) -> bytes:
        """cURL compatible version of ``read``. ``handle`` and ``fd`` are ignored."""
        return self.read(length)

    def iter_bytes(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
        """
        Iterate over the remaining body in chunks.

        Args:
            chunk_size: Maximum size of the chunks to yield (default: 8192)

        Returns:
            An iterator over successive portions of the body
        """
        if not self._finished:
            raise LogicError("can't read from a non-finished multipart object")
        validate_positive_int(chunk_size, "chunk_size")
        return self._iter_chunks(chunk_size)

    def _iter_chunks(self, chunk_size: int) -> Iterator[bytes]:
        while True:
            data = self._read(chunk_size)
            if not data:
                break
            yield data

    def buffer(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
        """
        Buffer the whole body in memory and return it.

        Should be called before ``read()``, otherwise content that has
        already been read is not part of the result. Returns the cached
        content when already buffered. The read position is reset, so a
        following ``read()`` starts from the beginning.
        """
        if not self._finished:
            raise LogicError("can't buffer a non-finished multipart object")
        validate_positive_int(chunk_size, "chunk_size")
        return self._buffer(chunk_size)

    def _buffer(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
        if not self.buffered:
            self._rewind()
            chunks: list[bytes] = []
            while True:
                data = self._read(chunk_size)
                if not data:
                    break
                chunks.append(data)
            content = b"".join(chunks)
            logger.debug(
                "Buffered %d parts of %s into %d bytes",
                self._part_count,
                self._content_type,
                len(content),
            )
            self._parts = [LiteralPart(content)]
            self._part_count = 1
            self._content_length = len(content)
        self._rewind()
        return self._parts[0].data  # type: ignore[union-attr]

    def __bytes__(self) -> bytes:
        if not self._finished:
            raise LogicError("can't buffer a non-finished multipart object")
        return self._buffer()

    def __iter__(self) -> Iterator[bytes]:
        return self.iter_bytes()

    def __repr__(self) -> str:
        state = "finished" if self._finished else "open"
        return f"<Multipart [{self._content_type}] {self._content_length} bytes, {state}>"
