"""
Example: Compose an email body with an HTML alternative and an attachment

Builds multipart/mixed containing a nested multipart/alternative, then
buffers it so it can be handed to a mail library.
"""

import base64
import io

import click
from partstream import add_attachment, add_multipart, add_part, alternative, mixed


def build_email() -> tuple[str, bytes]:
    body = alternative()
    add_part(body, "Hello World", "text/plain; charset=utf-8")
    add_part(body, "<html><b>Hello World</b></html>", "text/html; charset=utf-8")
    body.finish()

    attachment = base64.encodebytes(b"col1,col2\r\n1,2\r\n")

    message = mixed()
    add_multipart(message, body)
    add_attachment(
        message,
        "report.csv",
        io.BytesIO(attachment),
        "text/csv",
        len(attachment),
        "base64",
    )
    message.finish()
    return message.content_type, bytes(message)


if __name__ == "__main__":
    content_type, raw = build_email()
    click.secho(f"Content-Type: {content_type}", fg="cyan")
    click.secho(f"{len(raw)} bytes", fg="green")
    click.echo(raw.decode("ascii"))
