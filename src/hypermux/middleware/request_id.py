"""Request ID middleware.

Assigns each request a random identifier and publishes it through
``hypermux.context.request_id_var`` for handlers and loggers.

IDs are 20 characters from ``A-Z0-9`` drawn with ``random``. They are
not cryptographically secure and not guaranteed unique: collisions
become likely only at very high request volumes.
"""

import random
import string

from hypermux.context import get_request_id, request_id_var
from hypermux.http.request import Request
from hypermux.http.response import ResponseWriter
from hypermux.middleware.protocol import Handler

CHARSET = string.ascii_uppercase + string.digits
REQUEST_ID_LENGTH = 20

__all__ = ["CHARSET", "REQUEST_ID_LENGTH", "RequestIDMiddleware", "get_request_id", "make_request_id"]


def make_request_id(length: int = REQUEST_ID_LENGTH) -> str:
    """Return a random identifier of *length* characters from ``CHARSET``."""
    return "".join(random.choices(CHARSET, k=length))


class RequestIDMiddleware:
    """Publish a fresh request ID for the duration of each request.

    Usage::

        mux.use_middleware(RequestIDMiddleware())

        @mux.route("/whoami")
        def whoami(writer, request):
            write_plain_text(writer, 200, get_request_id())

    An ID already present in the context (from an outer middleware) is
    kept. Pass *header* to also echo the ID as a response header.
    """

    __slots__ = ("header",)

    def __init__(self, header: str | None = None) -> None:
        self.header = header

    def __call__(self, next: Handler) -> Handler:
        header = self.header

        async def handler(writer: ResponseWriter, request: Request) -> None:
            if request_id_var.get():
                await next(writer, request)
                return
            request_id = make_request_id()
            token = request_id_var.set(request_id)
            try:
                if header:
                    writer.headers.set(header, request_id)
                await next(writer, request)
            finally:
                request_id_var.reset(token)

        return handler
