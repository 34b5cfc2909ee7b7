"""Shared fixtures: an asyncio anyio backend and an in-memory ASGI request factory."""

from collections.abc import Callable
from typing import Any

import pytest

from waypost.http.headers import Headers
from waypost.http.request import Request


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class Sent(list):
    """ASGI messages captured from a request's ``send`` channel."""

    @property
    def status(self) -> int | None:
        for message in self:
            if message["type"] == "http.response.start":
                return message["status"]
        return None

    @property
    def headers(self) -> dict[str, str]:
        for message in self:
            if message["type"] == "http.response.start":
                return {k.decode("latin-1"): v.decode("latin-1") for k, v in message["headers"]}
        return {}

    @property
    def body(self) -> bytes:
        return b"".join(m.get("body", b"") for m in self if m["type"] == "http.response.body")


@pytest.fixture
def make_request() -> Callable[..., tuple[Request, Sent]]:
    """Build a ``Request`` over fake ASGI channels.

    Returns ``(request, sent)``; *sent* collects every message the
    request writes.
    """

    def factory(
        method: str = "GET",
        url: str = "/",
        headers: dict[str, str] | None = None,
        body: bytes | list[bytes] = b"",
    ) -> tuple[Request, Sent]:
        chunks = body if isinstance(body, list) else [body]
        messages: list[dict[str, Any]] = [
            {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
            for i, chunk in enumerate(chunks)
        ]
        received = iter(messages)

        async def receive() -> dict[str, Any]:
            return next(received, {"type": "http.disconnect"})

        sent = Sent()

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        raw = tuple(
            (k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()
        )
        request = Request(method=method, url=url, headers=Headers(raw), _receive=receive, _send=send)
        return request, sent

    return factory
