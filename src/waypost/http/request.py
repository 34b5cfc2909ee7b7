"""HTTP request adapter over an ASGI connection.

Frozen metadata plus a private per-request cache. Everything derived from
the raw request (path, query, fragment, cookies, body) is computed on
first access and then reused for the rest of the request; nothing is
shared between requests.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from waypost._internal.asgi import Receive, Scope, Send
from waypost.errors import ResponseAlreadySent
from waypost.http.body import decode_body
from waypost.http.headers import Headers
from waypost.http.query import QueryParams
from waypost.server.sender import send_response

_UNSET: Any = object()


@dataclass(slots=True)
class _RequestCache:
    """Lazily populated values derived from one request."""

    path: str | None = None
    query: QueryParams | None = None
    hash: QueryParams | None = None
    cookies: dict[str, str] | None = None
    body: bytes | None = None
    text: str | None = None
    decoded: Any = _UNSET
    status: int | None = None


def _split_url(url: str) -> tuple[str, str, str]:
    """Split ``path?query#fragment`` without treating ``//x`` as a host."""
    rest, _, fragment = url.partition("#")
    path, _, query = rest.partition("?")
    return path, query, fragment


def _parse_cookie_header(header: str) -> dict[str, str]:
    """``name=value`` pairs from a ``Cookie`` header, split on ``;``.

    Values are not percent-decoded; one pair of surrounding double quotes
    is removed. Pieces without ``=`` or with an empty name are skipped and
    a repeated name keeps its last value, as query strings and form bodies
    do.
    """
    cookies: dict[str, str] = {}
    for piece in header.split(";"):
        name, sep, value = piece.partition("=")
        name = name.strip()
        if not sep or not name:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        cookies[name] = value
    return cookies


@dataclass(frozen=True, slots=True)
class Request:
    """An HTTP request as seen by route handlers.

    ``method``, ``url`` and ``headers`` are fixed at creation. ``url`` is the
    raw, undecoded path with the query string (and fragment, when the host
    supplies one) appended.

    The body is read asynchronously via ``.body()`` / ``.text()`` and the
    response is written with ``.respond()``.
    """

    method: str
    url: str
    headers: Headers

    # Private: ASGI callables for body streaming and response writing
    _receive: Receive
    _send: Send

    # Private: mutable cache (contents change, the field reference does not)
    _cache: _RequestCache = field(default_factory=_RequestCache, repr=False, compare=False)

    # -- Derived metadata --

    @property
    def path(self) -> str:
        """URL path without query string or fragment."""
        if self._cache.path is None:
            self._cache.path = _split_url(self.url)[0]
        return self._cache.path

    @property
    def query(self) -> QueryParams:
        """Query string parameters."""
        if self._cache.query is None:
            self._cache.query = QueryParams(_split_url(self.url)[1])
        return self._cache.query

    @property
    def hash(self) -> QueryParams:
        """``key=value`` pairs from the URL fragment (empty for wire requests)."""
        if self._cache.hash is None:
            self._cache.hash = QueryParams(_split_url(self.url)[2])
        return self._cache.hash

    @property
    def cookies(self) -> dict[str, str]:
        """Cookies from the ``Cookie`` header."""
        if self._cache.cookies is None:
            self._cache.cookies = _parse_cookie_header(self.headers.get("cookie") or "")
        return self._cache.cookies

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def responded(self) -> bool:
        """Whether a response has been started for this request."""
        return self._cache.status is not None

    @property
    def status(self) -> int | None:
        """Status code of the response sent, if any."""
        return self._cache.status

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        The ASGI receive channel is drained once; later calls return the
        same bytes.
        """
        if self._cache.body is None:
            self._cache.body = b"".join([chunk async for chunk in self.stream()])
        return self._cache.body

    async def stream(self) -> AsyncIterator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        if self._cache.text is None:
            raw = await self.body()
            self._cache.text = raw.decode("utf-8")
        return self._cache.text

    async def decoded(self) -> Any:
        """The body decoded according to its Content-Type, decoded once.

        See ``waypost.http.body.decode_body`` for the supported types and
        the errors raised. A failed decode is not cached.
        """
        if self._cache.decoded is _UNSET:
            self._cache.decoded = decode_body(self.content_type, await self.body())
        return self._cache.decoded

    # -- Response --

    async def respond(
        self,
        status: int = 200,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] = (),
        body: bytes | str | AsyncIterable[bytes] = b"",
    ) -> None:
        """Send the response for this request.

        *body* may be bytes, text (sent as UTF-8) or an async iterable of
        byte chunks, which is streamed. Raises ``ResponseAlreadySent`` if
        this request was already answered.
        """
        if self._cache.status is not None:
            msg = f"{self.method} {self.path} already answered with {self._cache.status}"
            raise ResponseAlreadySent(msg)
        self._cache.status = status
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        await send_response(self._send, status, pairs, body)

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive, send: Send) -> Request:
        """Create a Request from an ASGI HTTP scope and its channels."""
        raw_path: bytes = scope.get("raw_path") or b""
        url = raw_path.decode("latin-1") if raw_path else scope["path"]
        query_string: bytes = scope.get("query_string", b"")
        if query_string:
            url = f"{url}?{query_string.decode('latin-1')}"
        return cls(
            method=scope["method"],
            url=url,
            headers=Headers(tuple(scope.get("headers", ()))),
            _receive=receive,
            _send=send,
        )
