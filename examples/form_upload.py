"""
Example: Stream a multipart/form-data upload

The body is pulled chunk by chunk while the request is sent, so the file is
never loaded into memory. Content-Length is only sent when every part has a
known length.
"""

import http.client
import os
import sys

import click
from partstream import add_file, add_value, form_data


def upload(path: str, host: str = "httpbin.org") -> None:
    with open(path, "rb") as f:
        multipart = form_data()
        add_value(multipart, "description", "uploaded with partstream")
        add_file(
            multipart,
            "file",
            os.path.basename(path),
            f,
            "application/octet-stream",
            os.path.getsize(path),
        )
        multipart.finish()

        headers = {"Content-Type": multipart.content_type}
        if multipart.content_length != -1:
            headers["Content-Length"] = str(multipart.content_length)
        else:
            headers["Transfer-Encoding"] = "chunked"

        conn = http.client.HTTPSConnection(host, timeout=30)
        try:
            conn.request(
                "POST",
                "/post",
                body=multipart.iter_bytes(),
                headers=headers,
                encode_chunked=multipart.content_length == -1,
            )
            resp = conn.getresponse()
            color = "green" if resp.status == 200 else "red"
            click.secho(f"Upload status: {resp.status} {resp.reason}", fg=color)
            click.echo(resp.read()[:300])
        finally:
            conn.close()


if __name__ == "__main__":
    upload(sys.argv[1] if len(sys.argv) > 1 else __file__)
