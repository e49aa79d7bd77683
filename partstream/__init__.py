from partstream.multipart import DEFAULT_CHUNK_SIZE, Multipart
from partstream.parts import UNKNOWN_LENGTH, LiteralPart, ProducerPart, StreamPart
from partstream.boundary import generate_boundary
from partstream.builders import (
    add_attachment,
    add_file,
    add_inline_file,
    add_multipart,
    add_part,
    add_value,
    alternative,
    build_multipart,
    form_data,
    mixed,
    related,
)
from partstream.errors import (
    PartstreamError,
    InvalidArgumentError,
    LogicError,
    InvalidStateError,
)

__all__ = [
    "Multipart",
    "DEFAULT_CHUNK_SIZE",
    "UNKNOWN_LENGTH",
    "LiteralPart",
    "StreamPart",
    "ProducerPart",
    "generate_boundary",
    "mixed",
    "alternative",
    "related",
    "form_data",
    "add_part",
    "add_attachment",
    "add_inline_file",
    "add_value",
    "add_file",
    "add_multipart",
    "build_multipart",
    "PartstreamError",
    "InvalidArgumentError",
    "LogicError",
    "InvalidStateError",
]
