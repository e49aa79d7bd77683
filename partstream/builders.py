"""
Call sequences for the common multipart subtypes.

Each factory returns a plain ``Multipart`` with a fixed content type; the
``add_*`` functions append one part using the headers that subtype expects
and return the multipart for chaining::

    mp = form_data()
    add_value(mp, "name", "John")
    add_file(mp, "upload", "report.pdf", fileobj, "application/pdf")
    mp.finish()
"""

from __future__ import annotations

import random
from collections.abc import Mapping

from partstream.multipart import Multipart
from partstream.parts import UNKNOWN_LENGTH, Source
from partstream.utils import (
    validate_length,
    validate_non_empty_str,
    validate_source,
    validate_str,
)

DEFAULT_FILE_CONTENT_TYPE = "application/octet-stream"


def mixed(boundary: str = "", rng: random.Random | None = None) -> Multipart:
    return Multipart(boundary, "multipart/mixed", rng=rng)


def alternative(boundary: str = "", rng: random.Random | None = None) -> Multipart:
    return Multipart(boundary, "multipart/alternative", rng=rng)


def related(boundary: str = "", rng: random.Random | None = None) -> Multipart:
    return Multipart(boundary, "multipart/related", rng=rng)


def form_data(boundary: str = "", rng: random.Random | None = None) -> Multipart:
    return Multipart(boundary, "multipart/form-data", rng=rng)


def _validate_content(content: Source, content_length: int, content_transfer_encoding: str) -> None:
    validate_source(content, "content")
    validate_length(content_length, "content_length")
    validate_str(content_transfer_encoding, "content_transfer_encoding")


def add_part(
    multipart: Multipart,
    content: Source,
    content_type: str,
    content_length: int = UNKNOWN_LENGTH,
    content_transfer_encoding: str = "",
) -> Multipart:
    """Add a generic part to a mixed, alternative or related multipart."""
    validate_non_empty_str(content_type, "content_type")
    _validate_content(content, content_length, content_transfer_encoding)

    multipart.start_part()
    multipart.add_content_type(content_type)
    if content_transfer_encoding:
        multipart.add_content_transfer_encoding(content_transfer_encoding)
    multipart.end_headers()
    multipart.add_content(content, content_length)
    multipart.end_part()
    return multipart


def add_attachment(
    multipart: Multipart,
    filename: str,
    content: Source,
    content_type: str,
    content_length: int = UNKNOWN_LENGTH,
    content_transfer_encoding: str = "",
) -> Multipart:
    """Add a file attachment to a mixed multipart."""
    validate_non_empty_str(filename, "filename")
    validate_non_empty_str(content_type, "content_type")
    _validate_content(content, content_length, content_transfer_encoding)

    multipart.start_part()
    multipart.add_content_type(content_type)
    if content_transfer_encoding:
        multipart.add_content_transfer_encoding(content_transfer_encoding)
    multipart.add_content_disposition("attachment", filename=filename)
    multipart.end_headers()
    multipart.add_content(content, content_length)
    multipart.end_part()
    return multipart


def add_inline_file(
    multipart: Multipart,
    content_id: str,
    filename: str,
    content: Source,
    content_type: str,
    content_length: int = UNKNOWN_LENGTH,
    content_transfer_encoding: str = "",
) -> Multipart:
    """Add an inline file, referenced elsewhere by ``cid:<content_id>``, to a related multipart."""
    validate_non_empty_str(content_id, "content_id")
    validate_non_empty_str(filename, "filename")
    validate_non_empty_str(content_type, "content_type")
    _validate_content(content, content_length, content_transfer_encoding)

    multipart.start_part()
    multipart.add_content_type(content_type)
    multipart.add_content_id(content_id)
    if content_transfer_encoding:
        multipart.add_content_transfer_encoding(content_transfer_encoding)
    multipart.add_content_disposition("inline", filename=filename)
    multipart.end_headers()
    multipart.add_content(content, content_length)
    multipart.end_part()
    return multipart


def add_value(
    multipart: Multipart,
    name: str,
    value: str,
    content_type: str = "",
    content_transfer_encoding: str = "",
) -> Multipart:
    """Add a form field. Repeated names are kept as separate parts."""
    validate_non_empty_str(name, "name")
    validate_str(value, "value")
    validate_str(content_type, "content_type")
    validate_str(content_transfer_encoding, "content_transfer_encoding")

    multipart.start_part()
    multipart.add_content_disposition("form-data", name)
    if content_type:
        multipart.add_content_type(content_type)
    if content_transfer_encoding:
        multipart.add_content_transfer_encoding(content_transfer_encoding)
    multipart.end_headers()
    multipart.add_content(value)
    multipart.end_part()
    return multipart


def add_file(
    multipart: Multipart,
    name: str,
    filename: str,
    content: Source,
    content_type: str,
    content_length: int = UNKNOWN_LENGTH,
    content_transfer_encoding: str = "",
) -> Multipart:
    """Add a file upload field to a form-data multipart."""
    validate_non_empty_str(name, "name")
    validate_non_empty_str(filename, "filename")
    validate_non_empty_str(content_type, "content_type")
    _validate_content(content, content_length, content_transfer_encoding)

    multipart.start_part()
    multipart.add_content_disposition("form-data", name, filename)
    multipart.add_content_type(content_type)
    if content_transfer_encoding:
        multipart.add_content_transfer_encoding(content_transfer_encoding)
    multipart.end_headers()
    multipart.add_content(content, content_length)
    multipart.end_part()
    return multipart


def add_multipart(multipart: Multipart, nested: Multipart) -> Multipart:
    """Add a finished multipart, e.g. an alternative body inside a mixed one."""
    multipart.add_nested_multipart(nested)
    return multipart


def build_multipart(
    data: Mapping[str, str] | None,
    files: Mapping[str, Source | tuple[str, Source, str | None]],
    boundary: str = "",
) -> tuple[str, bytes]:
    """
    Build a buffered multipart/form-data body.
    `files` values can be content or (filename, content, content_type|None).
    Content without a filename is sent under the field name.
    """
    multipart = form_data(boundary)
    if data:
        for k, v in data.items():
            add_value(multipart, k, v)
    for field, val in files.items():
        if isinstance(val, tuple):
            filename, content, ctype = val
        else:
            filename, content, ctype = field, val, None
        add_file(multipart, field, filename, content, ctype or DEFAULT_FILE_CONTENT_TYPE)
    multipart.finish()
    return multipart.content_type, multipart.buffer()
