"""ASGI response sending — translates a status, headers and body to ASGI messages.

Handles both single-body responses and chunked streaming bodies.
"""

from collections.abc import AsyncIterable, Iterable

from waypost._internal.asgi import Send


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def _encode_headers(headers: Iterable[tuple[str, str]]) -> list[tuple[bytes, bytes]]:
    return [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in headers]


async def send_response(
    send: Send,
    status: int,
    headers: Iterable[tuple[str, str]],
    body: bytes | str | AsyncIterable[bytes],
) -> None:
    """Send one complete response.

    Byte and text bodies go out as a single message; ``Content-Length`` is
    added when the caller did not set one. Async iterables are streamed,
    one ASGI message per chunk, and closed with an empty final message.
    """
    raw_headers = _encode_headers(headers)

    if isinstance(body, str):
        body = body.encode("utf-8")

    if isinstance(body, bytes):
        if not _body_allowed(status):
            body = b""
        if not any(name == b"content-length" for name, _ in raw_headers):
            raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))
        await send({"type": "http.response.start", "status": status, "headers": raw_headers})
        await send({"type": "http.response.body", "body": body})
        return

    await send({"type": "http.response.start", "status": status, "headers": raw_headers})
    async for chunk in body:
        if chunk:
            await send({"type": "http.response.body", "body": chunk, "more_body": True})
    await send({"type": "http.response.body", "body": b"", "more_body": False})
