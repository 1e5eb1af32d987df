"""Handler and Middleware type aliases.

A handler writes into a ``ResponseWriter`` and returns nothing::

    async def hello(writer: ResponseWriter, request: Request) -> None:
        write_plain_text(writer, 200, "hello")

Route handlers may also be plain ``def``. Handlers produced by
middleware must be ``async def`` because they await ``next``.

A middleware is a factory: given the next handler, it returns a new
one. It can act before and after calling ``next``, or skip ``next``
entirely to short-circuit the rest of the chain::

    def timing(next: Handler) -> Handler:
        async def handler(writer: ResponseWriter, request: Request) -> None:
            start = time.monotonic()
            await next(writer, request)
            logger.info("%s took %.3fs", request.path, time.monotonic() - start)

        return handler

Callable objects work too — ``CORSMiddleware`` is a class whose
instances are factories.
"""

from collections.abc import Awaitable, Callable
from typing import TypeAlias

from hypermux.http.request import Request
from hypermux.http.response import ResponseWriter

# A link in the middleware chain
Handler: TypeAlias = Callable[[ResponseWriter, Request], Awaitable[None]]

# A registered route handler, sync or async
RouteHandler: TypeAlias = Callable[[ResponseWriter, Request], Awaitable[None] | None]

# A middleware factory wrapping the next handler
Middleware: TypeAlias = Callable[[Handler], Handler]
