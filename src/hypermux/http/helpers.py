"""Response-writing helpers for handlers.

Each helper sets ``Content-Type``, writes the status, then the body.
"""

import json as json_module
from typing import Any

from hypermux.http.response import ResponseWriter


def write_plain_text(writer: ResponseWriter, status: int, text: str) -> None:
    """Write *text* as a ``text/plain`` response."""
    writer.headers.add("Content-Type", "text/plain")
    writer.write_header(status)
    writer.write(text)


def write_json(writer: ResponseWriter, status: int, value: Any) -> None:
    """Write *value* as an ``application/json`` response.

    If *value* is not JSON-serializable (NaN and infinities included),
    writes a 500 plain-text error instead. Nothing is raised.
    """
    try:
        payload = json_module.dumps(value, allow_nan=False)
    except (TypeError, ValueError) as exc:
        write_plain_text(writer, 500, f"error marshaling json. got {exc}")
        return
    writer.headers.add("Content-Type", "application/json")
    writer.write_header(status)
    writer.write(payload)


def internal_server_error(writer: ResponseWriter, exc: BaseException) -> None:
    """Write a 500 plain-text response describing *exc*."""
    write_plain_text(writer, 500, f"error while serving request. got {exc}")
