"""Request-scoped context via ContextVar.

Provides:
- ``request_var``: the matched ``Request`` (with path params) for the
  current task.
- ``request_id_var``: the identifier published by ``RequestIDMiddleware``.

Both are set by the dispatch pipeline and reset after each request.
``ContextVar`` is task-local under asyncio, so concurrent requests
never see each other's values.
"""

from contextvars import ContextVar

from hypermux.http.request import Request

request_var: ContextVar[Request] = ContextVar("hypermux_request")
"""The current matched request. Set just before the route handler runs."""

request_id_var: ContextVar[str] = ContextVar("hypermux_request_id", default="")
"""The current request ID. Empty unless ``RequestIDMiddleware`` is in use."""


def get_request() -> Request:
    """Return the current matched request.

    Raises ``LookupError`` if called outside a route handler.
    """
    return request_var.get()


def get_request_id() -> str:
    """Return the current request ID, or ``""`` if none was assigned."""
    return request_id_var.get()
