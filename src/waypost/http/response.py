"""Response helpers — common response shapes written through ``Request.respond``.

Each helper sends exactly one complete response for the request::

    await respond_json(request, {"ok": True})
    await respond_file(request, "public/index.html")
    await respond_location(request, "/login")
"""

import json
from collections.abc import AsyncIterator, Mapping
from pathlib import PurePath
from typing import Any
from urllib.parse import quote

import anyio

from waypost.http.request import Request

MIMETYPES: dict[str, str] = {
    ".md": "text/markdown",
    ".html": "text/html",
    ".htm": "text/html",
    ".json": "application/json",
    ".map": "application/json",
    ".txt": "text/plain",
    ".ts": "text/typescript",
    ".tsx": "text/tsx",
    ".js": "application/javascript",
    ".jsx": "text/jsx",
    ".gz": "application/gzip",
    ".css": "text/css",
    ".wasm": "application/wasm",
    ".mjs": "application/javascript",
}

FILE_CHUNK_SIZE = 64 * 1024

# Characters encodeURI leaves alone besides letters, digits and "-_.~"
_URI_SAFE = ";,/?:@&=+$!*'()#"


def _merge(base: list[tuple[str, str]], extra: Mapping[str, str] | None) -> list[tuple[str, str]]:
    if extra:
        base.extend(extra.items())
    return base


def is_traversal(path: str) -> bool:
    """Whether *path* has a ``.`` or ``..`` component."""
    parts = path.replace("\\", "/").split("/")
    return any(part in {".", ".."} for part in parts)


async def respond_json(
    request: Request,
    value: Any,
    status: int = 200,
    headers: Mapping[str, str] | None = None,
) -> None:
    """Serialize *value* as compact JSON and send it."""
    content = json.dumps(value, separators=(",", ":")).encode("utf-8")
    pairs = _merge(
        [("Content-Type", "application/json"), ("Content-Length", str(len(content)))],
        headers,
    )
    await request.respond(status, pairs, content)


async def _read_chunks(file: anyio.AsyncFile[bytes]) -> AsyncIterator[bytes]:
    while chunk := await file.read(FILE_CHUNK_SIZE):
        yield chunk


async def respond_file(
    request: Request,
    path: str,
    status: int = 200,
    headers: Mapping[str, str] | None = None,
) -> None:
    """Stream a file from disk.

    Answers 404 when the path has a ``.``/``..`` component or the file does
    not exist. ``Content-Type`` comes from ``MIMETYPES`` and is left out
    for unknown extensions. The file is closed once the body is sent,
    whether or not sending succeeds.
    """
    if is_traversal(path):
        await request.respond(404)
        return

    target = anyio.Path(path)
    if not await target.is_file():
        await request.respond(404)
        return

    size = (await target.stat()).st_size
    pairs = _merge([("Content-Length", str(size))], headers)
    content_type = MIMETYPES.get(PurePath(path).suffix)
    if content_type is not None:
        pairs.append(("Content-Type", content_type))

    async with await anyio.open_file(path, "rb") as file:
        await request.respond(status, pairs, _read_chunks(file))


async def respond_cors(
    request: Request,
    allow_origin: str,
    allow_methods: str,
    allow_headers: str,
    allow_credentials: bool,
) -> None:
    """Send the four ``Access-Control-Allow-*`` headers with an empty body."""
    await request.respond(
        200,
        [
            ("Access-Control-Allow-Origin", allow_origin),
            ("Access-Control-Allow-Methods", allow_methods),
            ("Access-Control-Allow-Headers", allow_headers),
            ("Access-Control-Allow-Credentials", "true" if allow_credentials else "false"),
        ],
    )


async def respond_location(
    request: Request,
    url: str,
    headers: Mapping[str, str] | None = None,
) -> None:
    """Redirect with a 302 to the URI-encoded *url*."""
    pairs = _merge([("Location", quote(url, safe=_URI_SAFE))], headers)
    await request.respond(302, pairs)
