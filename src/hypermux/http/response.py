"""Response sink and captured response.

``ResponseWriter`` is the side-effecting sink handlers and middleware
write into: headers, a status code, body bytes. Once dispatch finishes,
the server layer translates it into ASGI messages.

``Response`` is the frozen, read-only result — what ``TestClient``
hands back and what ``ResponseWriter.to_response()`` produces.
"""

import logging
from dataclasses import dataclass

from hypermux.http.headers import MutableHeaders

logger = logging.getLogger("hypermux.server")


@dataclass(frozen=True, slots=True)
class Response:
    """A completed HTTP response."""

    body: bytes = b""
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()

    def header(self, name: str) -> str | None:
        """Return the first value of header *name* (case-insensitive)."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None

    @property
    def content_type(self) -> str | None:
        return self.header("content-type")

    @property
    def text(self) -> str:
        """Body as string."""
        return self.body.decode("utf-8")


class ResponseWriter:
    """Mutable response sink.

    Mirrors the usual server-side contract:

    - ``headers`` may be changed until the status is written.
    - ``write_header(status)`` records the status once. Later calls are
      logged and ignored.
    - ``write(data)`` appends to the body, implying status 200 if no
      status was written yet.
    """

    __slots__ = ("_body", "_headers", "_status")

    def __init__(self) -> None:
        self._headers = MutableHeaders()
        self._status: int | None = None
        self._body = bytearray()

    @property
    def headers(self) -> MutableHeaders:
        return self._headers

    @property
    def status(self) -> int:
        """The written status, or 200 if none was written."""
        return 200 if self._status is None else self._status

    @property
    def wrote_header(self) -> bool:
        return self._status is not None

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def write_header(self, status: int) -> None:
        """Record the response status code."""
        if self._status is not None:
            logger.warning(
                "superfluous write_header(%d) call, status already %d", status, self._status
            )
            return
        self._status = status

    def write(self, data: str | bytes) -> int:
        """Append *data* to the body. Returns the number of bytes written."""
        if self._status is None:
            self._status = 200
        chunk = data.encode("utf-8") if isinstance(data, str) else data
        self._body.extend(chunk)
        return len(chunk)

    def to_response(self) -> Response:
        """Freeze the current state into a ``Response``."""
        return Response(body=self.body, status=self.status, headers=self._headers.items())
