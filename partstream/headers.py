from __future__ import annotations


def format_header(name: str, value: str) -> bytes:
    """Render a single ``Name: value`` header line terminated by CRLF."""
    return f"{name}: {value}\r\n".encode("utf-8")


def content_disposition(disposition: str, name: str = "", filename: str = "") -> str:
    """
    Build a Content-Disposition header value.

    The ``name`` and ``filename`` parameters are only emitted when non-empty.
    Values are quoted as given; embedded quotes are not escaped.
    """
    value = disposition
    if name:
        value += f'; name="{name}"'
    if filename:
        value += f'; filename="{filename}"'
    return value
