"""CORS middleware.

Answers every ``OPTIONS`` request itself (the matched route never sees
one) and decorates all other cross-origin responses with CORS headers
before delegating.

Each middleware instance owns its ``CORSConfig``; there is no shared
module-level state, so two muxes can run different policies side by side.
"""

import logging
from dataclasses import dataclass

from hypermux.http.request import Request
from hypermux.http.response import ResponseWriter
from hypermux.middleware.protocol import Handler
from hypermux.routing.route import DELETE, GET, OPTIONS, POST, PUT

logger = logging.getLogger("hypermux.cors")


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS middleware configuration.

    All fields have secure defaults (nothing is allowed).
    Override what you need::

        CORSConfig(
            allow_origins=("https://example.com",),
            allow_methods=("GET", "POST"),
        )

    ``"*"`` in ``allow_origins`` or ``allow_headers`` allows anything.
    """

    allow_origins: tuple[str, ...] = ()
    allow_methods: tuple[str, ...] = ("GET", "HEAD", "POST")
    allow_headers: tuple[str, ...] = ()
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int = 0


DEFAULT_CORS_CONFIG = CORSConfig(
    allow_origins=("*",),
    allow_methods=(POST, GET, DELETE, PUT),
    allow_headers=(
        "Authorization",
        "Content-Type",
        "Content-Length",
        "Content-Encoding",
        "Accept",
        "Accept-Encoding",
    ),
    expose_headers=("*", "Authorization"),
    allow_credentials=True,
    max_age=300,
)
"""Permissive policy: any origin, common methods and headers, credentials."""


class CORSMiddleware:
    """Cross-Origin Resource Sharing as a middleware factory.

    Handles:
    - ``OPTIONS`` requests: always answered with 200 here. Valid preflights
      (allowed origin, method, and headers) also carry the
      ``Access-Control-Allow-*`` headers.
    - Other requests from an allowed ``Origin``: CORS headers are written,
      then the request continues down the chain.

    Usage::

        mux.use_middleware(CORSMiddleware(CORSConfig(
            allow_origins=("https://example.com",),
            allow_methods=("GET", "POST", "PUT"),
            allow_headers=("Content-Type", "Authorization"),
        )))
    """

    __slots__ = ("_allow_headers", "_allow_methods", "config")

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()
        self._allow_methods = frozenset(m.upper() for m in self.config.allow_methods)
        self._allow_headers = frozenset(h.lower() for h in self.config.allow_headers)

    def _is_allowed_origin(self, origin: str) -> bool:
        if "*" in self.config.allow_origins:
            return True
        return origin in self.config.allow_origins

    def _is_allowed_method(self, method: str) -> bool:
        method = method.upper()
        return method == OPTIONS or method in self._allow_methods

    def _are_allowed_headers(self, requested: str | None) -> bool:
        if not requested or "*" in self._allow_headers:
            return True
        names = (name.strip().lower() for name in requested.split(","))
        return all(not name or name == "origin" or name in self._allow_headers for name in names)

    def _add_origin_headers(self, writer: ResponseWriter, origin: str) -> None:
        cfg = self.config
        if "*" in cfg.allow_origins and not cfg.allow_credentials:
            writer.headers.set("Access-Control-Allow-Origin", "*")
        else:
            writer.headers.set("Access-Control-Allow-Origin", origin)
            writer.headers.add("Vary", "Origin")
        if cfg.allow_credentials:
            writer.headers.set("Access-Control-Allow-Credentials", "true")

    def _preflight(self, writer: ResponseWriter, request: Request) -> None:
        origin = request.headers.get("origin")
        request_method = request.headers.get("access-control-request-method")
        request_headers = request.headers.get("access-control-request-headers")

        if origin is None or request_method is None:
            logger.debug("OPTIONS %s is not a preflight request", request.path)
        elif not self._is_allowed_origin(origin):
            logger.debug("preflight aborted: origin %r not allowed", origin)
        elif not self._is_allowed_method(request_method):
            logger.debug("preflight aborted: method %r not allowed", request_method)
        elif not self._are_allowed_headers(request_headers):
            logger.debug("preflight aborted: headers %r not allowed", request_headers)
        else:
            cfg = self.config
            self._add_origin_headers(writer, origin)
            writer.headers.set("Access-Control-Allow-Methods", ", ".join(cfg.allow_methods))
            if cfg.allow_headers:
                writer.headers.set("Access-Control-Allow-Headers", ", ".join(cfg.allow_headers))
            if cfg.max_age > 0:
                writer.headers.set("Access-Control-Max-Age", str(cfg.max_age))

        writer.write_header(200)

    def __call__(self, next: Handler) -> Handler:
        async def handler(writer: ResponseWriter, request: Request) -> None:
            if request.method == OPTIONS:
                self._preflight(writer, request)
                return

            origin = request.headers.get("origin")
            if origin is not None:
                if self._is_allowed_origin(origin):
                    self._add_origin_headers(writer, origin)
                    if self.config.expose_headers:
                        writer.headers.set(
                            "Access-Control-Expose-Headers",
                            ", ".join(self.config.expose_headers),
                        )
                else:
                    logger.debug("origin %r not allowed, no CORS headers", origin)

            await next(writer, request)

        return handler
