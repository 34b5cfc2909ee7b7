"""Invoke helpers — call sync or async handlers uniformly.

Route handlers, lifecycle hooks and props factories can be ``def`` or
``async def``. Any code that calls user-provided code goes through
``invoke`` so the sync/async check lives in exactly one place.

Usage::

    from waypost._internal.invoke import invoke

    await invoke(handler, context, next)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync: returns immediately
        def load_user(ctx, next):
            ctx.props["user"] = USERS[ctx.params["id"]]
            next()

        # async: awaited before the caller looks at the outcome
        async def show_user(ctx, next):
            await respond_json(ctx.request, ctx.props["user"])
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
