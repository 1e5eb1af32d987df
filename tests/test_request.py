"""Tests for hypermux.http.request — frozen Request with async body access."""

import json

import pytest

from hypermux.http.request import Request


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _make_receive(*bodies: bytes):
    """Create an ASGI receive callable that yields bodies."""
    messages = []
    for i, body in enumerate(bodies):
        is_last = i == len(bodies) - 1
        messages.append({"type": "http.request", "body": body, "more_body": not is_last})
    if not messages:
        messages.append({"type": "http.request", "body": b"", "more_body": False})
    it = iter(messages)

    async def receive():
        return next(it)

    return receive


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST", path="/users"), _make_receive())
        assert req.method == "POST"
        assert req.path == "/users"
        assert req.http_version == "1.1"
        assert req.server == ("localhost", 8000)
        assert req.client == ("127.0.0.1", 54321)

    def test_path_params_default_empty(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())
        assert req.path_params == {}

    def test_headers_parsed(self) -> None:
        scope = _make_scope(headers=[(b"content-type", b"application/json")])
        req = Request.from_asgi(scope, _make_receive())
        assert req.content_type == "application/json"

    def test_query_string_and_url(self) -> None:
        req = Request.from_asgi(_make_scope(path="/search", query_string=b"q=cat&q=dog"), _make_receive())
        assert req.query_string == "q=cat&q=dog"
        assert req.url == "/search?q=cat&q=dog"

    def test_url_without_query(self) -> None:
        req = Request.from_asgi(_make_scope(path="/x"), _make_receive())
        assert req.url == "/x"

    def test_frozen(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())
        with pytest.raises(AttributeError):
            req.method = "POST"  # type: ignore[misc]


class TestWithPathParams:
    def test_returns_new_request(self) -> None:
        req = Request(method="GET", path="/users/42")
        updated = req.with_path_params({"id": "42"})
        assert updated is not req
        assert updated.path_params == {"id": "42"}
        assert req.path_params == {}

    def test_merges_over_existing(self) -> None:
        req = Request(method="GET", path="/", path_params={"a": "1", "b": "2"})
        assert req.with_path_params({"b": "3"}).path_params == {"a": "1", "b": "3"}


class TestRequestBody:
    async def test_body(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"hello ", b"world"))
        assert await req.body() == b"hello world"

    async def test_body_cached(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"once"))
        assert await req.body() == b"once"
        assert await req.body() == b"once"

    async def test_body_cache_shared_with_derived_request(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"data"))
        await req.body()
        assert await req.with_path_params({"x": "1"}).body() == b"data"

    async def test_text(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive("héllo".encode()))
        assert await req.text() == "héllo"

    async def test_json(self) -> None:
        payload = json.dumps({"name": "alice"}).encode()
        req = Request.from_asgi(_make_scope(), _make_receive(payload))
        assert await req.json() == {"name": "alice"}

    async def test_default_receive_is_empty(self) -> None:
        assert await Request(method="GET", path="/").body() == b""
