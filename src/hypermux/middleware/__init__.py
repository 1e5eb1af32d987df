"""Middleware — factories that wrap the next handler.

A middleware is any callable matching:
    def mw(next: Handler) -> Handler

Built-in middleware:
    CORSMiddleware -- Cross-Origin Resource Sharing
    RequestIDMiddleware -- Per-request random identifier in context
"""

from hypermux.middleware.cors import DEFAULT_CORS_CONFIG, CORSConfig, CORSMiddleware
from hypermux.middleware.protocol import Handler, Middleware, RouteHandler
from hypermux.middleware.request_id import RequestIDMiddleware, make_request_id

__all__ = [
    "DEFAULT_CORS_CONFIG",
    "CORSConfig",
    "CORSMiddleware",
    "Handler",
    "Middleware",
    "RequestIDMiddleware",
    "RouteHandler",
    "make_request_id",
]
