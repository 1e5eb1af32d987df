"""The hypermux application class.

Mutable during setup (route and middleware registration).
Frozen by ``finalize()``, which the first request triggers implicitly.
"""

import logging
import threading
from collections.abc import Callable

from hypermux._internal.asgi import Receive, Scope, Send
from hypermux._internal.invoke import invoke
from hypermux.config import MuxConfig
from hypermux.context import request_var
from hypermux.http.helpers import write_plain_text
from hypermux.http.request import Request
from hypermux.http.response import ResponseWriter
from hypermux.middleware.protocol import Handler, Middleware, RouteHandler
from hypermux.routing.route import GET, Route
from hypermux.routing.router import Router
from hypermux.server.sender import send_response

logger = logging.getLogger("hypermux.server")


class Mux:
    """An HTTP request router with a middleware chain.

    Usage::

        mux = Mux()
        mux.use_middleware(CORSMiddleware(DEFAULT_CORS_CONFIG))

        @mux.route("/users/{id}")
        async def user(writer: ResponseWriter, request: Request) -> None:
            write_json(writer, 200, {"id": request.path_params["id"]})

        mux.run()

    Thread safety:
        Registration is single-threaded setup work. ``finalize()`` builds
        the middleware chain exactly once under a Lock + double-check, so
        concurrent first requests never race. After that, the route table
        and chain are read-only and dispatch needs no locking.
    """

    __slots__ = (
        "_chain",
        "_finalize_lock",
        "_frozen",
        "_middleware_list",
        "_router",
        "_sequence",
        "config",
    )

    def __init__(self, config: MuxConfig | None = None) -> None:
        self.config: MuxConfig = config or MuxConfig()
        self._router = Router(self.config.route_order)
        self._middleware_list: list[Middleware] = []
        self._sequence = 0
        self._chain: Handler | None = None
        self._frozen = False
        self._finalize_lock = threading.Lock()

    # -- Introspection --

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in lookup order."""
        return self._router.routes

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        """Registered middleware factories in execution order."""
        return tuple(self._middleware_list)

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- Route registration --

    def add_route(self, template: str, method: str, handler: RouteHandler) -> None:
        """Register *handler* for *method* requests whose path fits *template*.

        Templates are not validated: a malformed one (e.g. ``/{id``)
        simply never matches. Registering the same template and method
        twice keeps both; the first registered wins at dispatch.
        """
        self._check_not_frozen()
        route = Route(
            template=template,
            method=method,
            handler=handler,
            sequence=self._sequence,
        )
        self._sequence += 1
        self._router.add(route)

    def route(
        self,
        template: str,
        *,
        method: str = GET,
    ) -> Callable[[RouteHandler], RouteHandler]:
        """Register a route handler via decorator."""

        def decorator(func: RouteHandler) -> RouteHandler:
            self.add_route(template, method, func)
            return func

        return decorator

    # -- Middleware --

    def use_middleware(self, middleware: Middleware) -> None:
        """Append *middleware* to the chain.

        The first registered middleware is the outermost: it runs first
        on the way in and last on the way out.
        """
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Finalize --

    def finalize(self) -> None:
        """Freeze registration and build the middleware chain.

        Idempotent and thread-safe. Dispatch calls it on first use, but
        calling it explicitly at startup surfaces middleware factory
        errors before traffic arrives.
        """
        if self._frozen:
            return
        with self._finalize_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compose the chain. MUST only be called while holding _finalize_lock."""
        handler: Handler = self._dispatch_route
        for middleware in reversed(self._middleware_list):
            handler = middleware(handler)
        self._chain = handler
        self._frozen = True
        logger.debug(
            "mux finalized: %d routes, %d middleware (%s order)",
            len(self._router),
            len(self._middleware_list),
            self._router.order,
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the mux after it has been finalized. "
                "Register routes and middleware before serving requests."
            )
            raise RuntimeError(msg)

    # -- Dispatch --

    async def _dispatch_route(self, writer: ResponseWriter, request: Request) -> None:
        """Terminal handler: match a route and run it, or answer 404."""
        match = self._router.match(request.method, request.path)
        if match is None:
            write_plain_text(writer, 404, self.config.not_found_body)
            return

        matched = request.with_path_params(match.path_params)
        token = request_var.set(matched)
        try:
            await invoke(match.route.handler, writer, matched)
        finally:
            request_var.reset(token)

    async def dispatch(self, writer: ResponseWriter, request: Request) -> None:
        """Run *request* through the middleware chain into *writer*.

        Handler exceptions are not caught here.
        """
        self.finalize()
        assert self._chain is not None
        await self._chain(writer, request)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope, receive)
        writer = ResponseWriter()
        try:
            await self.dispatch(writer, request)
        except Exception:
            logger.exception("unhandled error in %s %s", request.method, request.path)
            raise
        await send_response(writer, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol, finalizing the mux at startup."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self.finalize()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Finalize and serve with pounce (requires ``hypermux[server]``)."""
        self.finalize()

        from hypermux.server.dev import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            workers=self.config.workers,
            reload=self.config.debug,
            log_level=self.config.log_level,
        )
