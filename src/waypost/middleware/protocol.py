"""Handler protocol and the ``Next`` continuation type.

A route handler is any callable matching::

    async def handler(ctx: RequestContext, next: Next) -> None: ...

Plain ``def`` handlers work too. No base class required. Calling ``next()``
lets the chain continue with the following handler; returning without
calling it ends the chain, usually because a response was sent.
"""

from collections.abc import Awaitable
from typing import Any, Protocol

from waypost._internal.types import Next
from waypost.context import RequestContext

__all__ = ["Handler", "Next"]


class Handler(Protocol):
    """Protocol for route handlers and the middleware factories in this package.

    Accepts both functions and callable objects::

        # Function handler
        def require_json(ctx, next):
            if ctx.request.content_type == "application/json":
                next()

        # Class handler
        class Counter:
            async def __call__(self, ctx, next):
                self.hits += 1
                next()
    """

    def __call__(self, ctx: RequestContext[Any], next: Next) -> Awaitable[None] | None: ...
