"""Hypermux — an HTTP request router with a composable middleware chain.

Matches requests to handlers by path template and method, extracts
``{name}`` path variables, and serves as an ASGI 3.0 application.

Basic usage::

    from hypermux import Mux, write_plain_text

    mux = Mux()

    @mux.route("/hello/{name}")
    def hello(writer, request):
        write_plain_text(writer, 200, f"Hello, {request.path_params['name']}!")

    mux.run()
"""

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_CORS_CONFIG",
    "DELETE",
    "GET",
    "HEAD",
    "METHODS",
    "OPTIONS",
    "PATCH",
    "POST",
    "PUT",
    "CORSConfig",
    "CORSMiddleware",
    "ConfigurationError",
    "Handler",
    "HypermuxError",
    "Middleware",
    "Mux",
    "MuxConfig",
    "Request",
    "RequestIDMiddleware",
    "RouteHandler",
    "Response",
    "ResponseWriter",
    "TemplateMismatchError",
    "extract_params",
    "get_request",
    "get_request_id",
    "internal_server_error",
    "is_compatible",
    "make_request_id",
    "write_json",
    "write_plain_text",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import hypermux`` fast while providing a clean top-level API.
    """
    if name == "Mux":
        from hypermux.app import Mux

        return Mux

    if name == "MuxConfig":
        from hypermux.config import MuxConfig

        return MuxConfig

    if name == "Request":
        from hypermux.http.request import Request

        return Request

    if name in ("Response", "ResponseWriter"):
        from hypermux.http import response as _resp

        return getattr(_resp, name)

    if name in ("write_plain_text", "write_json", "internal_server_error"):
        from hypermux.http import helpers as _helpers

        return getattr(_helpers, name)

    if name in ("GET", "POST", "PUT", "DELETE", "HEAD", "OPTIONS", "PATCH", "METHODS"):
        from hypermux.routing import route as _route

        return getattr(_route, name)

    if name in ("is_compatible", "extract_params"):
        from hypermux.routing import template as _template

        return getattr(_template, name)

    if name in (
        "CORSConfig",
        "CORSMiddleware",
        "DEFAULT_CORS_CONFIG",
        "Handler",
        "Middleware",
        "RequestIDMiddleware",
        "RouteHandler",
        "make_request_id",
    ):
        from hypermux import middleware as _mw

        return getattr(_mw, name)

    if name in ("get_request", "get_request_id"):
        from hypermux import context as _ctx

        return getattr(_ctx, name)

    if name in ("HypermuxError", "ConfigurationError", "TemplateMismatchError"):
        from hypermux import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
