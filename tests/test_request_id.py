"""Tests for RequestIDMiddleware and request ID generation."""

import asyncio

from hypermux.app import Mux
from hypermux.context import get_request_id
from hypermux.http.helpers import write_plain_text
from hypermux.middleware.request_id import CHARSET, REQUEST_ID_LENGTH, RequestIDMiddleware, make_request_id
from hypermux.testing import TestClient


class TestMakeRequestID:
    def test_length(self) -> None:
        assert len(make_request_id()) == REQUEST_ID_LENGTH == 20

    def test_alphabet(self) -> None:
        assert set(make_request_id()) <= set(CHARSET)
        assert CHARSET == "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

    def test_custom_length(self) -> None:
        assert len(make_request_id(8)) == 8

    def test_varies(self) -> None:
        assert len({make_request_id() for _ in range(50)}) > 1


def _whoami_mux(middleware: RequestIDMiddleware | None = None) -> Mux:
    mux = Mux()
    if middleware is not None:
        mux.use_middleware(middleware)

    async def whoami(writer, request) -> None:
        await asyncio.sleep(0)
        write_plain_text(writer, 200, get_request_id())

    mux.add_route("/whoami", "GET", whoami)
    return mux


class TestRequestIDMiddleware:
    async def test_handler_sees_id(self) -> None:
        async with TestClient(_whoami_mux(RequestIDMiddleware())) as client:
            response = await client.get("/whoami")
        assert len(response.text) == 20

    async def test_empty_without_middleware(self) -> None:
        async with TestClient(_whoami_mux()) as client:
            response = await client.get("/whoami")
        assert response.text == ""

    async def test_fresh_id_per_request(self) -> None:
        async with TestClient(_whoami_mux(RequestIDMiddleware())) as client:
            first = await client.get("/whoami")
            second = await client.get("/whoami")
        assert first.text != second.text

    async def test_concurrent_requests_isolated(self) -> None:
        async with TestClient(_whoami_mux(RequestIDMiddleware())) as client:
            responses = await asyncio.gather(*(client.get("/whoami") for _ in range(10)))
        assert len({r.text for r in responses}) == 10

    async def test_reset_after_request(self) -> None:
        async with TestClient(_whoami_mux(RequestIDMiddleware())) as client:
            await client.get("/whoami")
        assert get_request_id() == ""

    async def test_response_header(self) -> None:
        async with TestClient(_whoami_mux(RequestIDMiddleware(header="X-Request-ID"))) as client:
            response = await client.get("/whoami")
        assert response.header("x-request-id") == response.text

    async def test_outer_id_is_kept(self) -> None:
        mux = Mux()
        mux.use_middleware(RequestIDMiddleware(header="X-Outer"))
        mux.use_middleware(RequestIDMiddleware(header="X-Inner"))
        mux.add_route("/", "GET", lambda writer, request: write_plain_text(writer, 200, get_request_id()))
        async with TestClient(mux) as client:
            response = await client.get("/")
        assert response.header("x-outer") == response.text
        assert response.header("x-inner") is None
