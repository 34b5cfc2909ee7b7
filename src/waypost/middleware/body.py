"""Body-decoding middleware.

``body_json`` decodes the request body into ``ctx.props`` before the rest
of the chain runs, and answers the request itself when the body cannot
be decoded::

    table.post("/items", body_json("body"), create_item)

    async def create_item(ctx, next):
        item = ctx.props["body"]
        ...
"""

import logging
from collections.abc import Callable
from typing import Any

from waypost._internal.types import Next
from waypost.context import RequestContext
from waypost.errors import JSONParseError, UnsupportedMediaType
from waypost.http.body import read_body_as_json
from waypost.http.request import Request
from waypost.middleware.protocol import Handler

logger = logging.getLogger("waypost.middleware")

ErrorCallback = Callable[[Exception], Any]


async def _respond_error(request: Request, status: int, on_error: ErrorCallback | None) -> None:
    try:
        await request.respond(status)
    except Exception as exc:
        if on_error is None:
            logger.warning(
                "could not send %d for %s %s: %s", status, request.method, request.path, exc
            )
        else:
            on_error(exc)


def body_json(key: str, on_error: ErrorCallback | None = None) -> Handler:
    """Build a handler that stores the decoded body under *key* in ``ctx.props``.

    Status codes sent on failure (the chain stops in each case):

    - 415 — Content-Type is neither JSON nor a URL-encoded form
    - 400 — the body is not valid JSON
    - 500 — anything else went wrong while reading the body

    *on_error* receives any exception raised while sending that error
    response; without it the failure is logged.
    """

    async def decode_body(ctx: RequestContext[Any], next: Next) -> None:
        request = ctx.request
        try:
            value = await read_body_as_json(request)
        except UnsupportedMediaType:
            await _respond_error(request, 415, on_error)
            return
        except JSONParseError:
            await _respond_error(request, 400, on_error)
            return
        except Exception:
            logger.exception("failed to read body for %s %s", request.method, request.path)
            await _respond_error(request, 500, on_error)
            return
        ctx.put(key, value)
        next()

    return decode_body
