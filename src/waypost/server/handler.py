"""ASGI handler — runs one HTTP request through the route table.

The caller of ``RouteTable.process`` for served traffic: it builds the
``Request``, creates the props value, and decides what happens when no
route matches, a chain ends without answering, or a handler raises.
"""

import logging
import traceback
from collections.abc import Callable
from typing import Any

from waypost._internal.asgi import Receive, Scope, Send
from waypost._internal.invoke import invoke
from waypost.config import AppConfig
from waypost.http.request import Request
from waypost.routing.table import RouteTable

logger = logging.getLogger("waypost.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    table: RouteTable,
    props: Callable[[Request], Any],
    config: AppConfig,
) -> None:
    """Process a single HTTP request through the route table."""
    request = Request.from_asgi(scope, receive, send)

    try:
        handled = await table.process(request, await invoke(props, request))
    except Exception:
        logger.exception("unhandled error in %s %s", request.method, request.path)
        # Once the response has started the client cannot be told
        if not request.responded:
            body = traceback.format_exc() if config.debug else "Internal Server Error"
            await request.respond(500, {"Content-Type": "text/plain; charset=utf-8"}, body)
    else:
        if not handled:
            await request.respond(config.unmatched_status)
        elif not request.responded:
            logger.warning(
                "%s %s: handler chain finished without a response", request.method, request.path
            )
            await request.respond(500)

    if config.lifecycle_logging:
        logger.info("%s %s -> %s", request.method, request.url, request.status)

