"""Per-request context handed to every handler in a matched route's chain.

Created by ``RouteTable.process`` once a route matches and discarded when
the chain finishes or stops. The same instance is passed to every handler
in the chain, so one handler can leave values in ``props`` for the next::

    def load_user(ctx, next):
        ctx.props["user"] = USERS.get(ctx.params["id"])
        next()

    async def show_user(ctx, next):
        await respond_json(ctx.request, ctx.props["user"])
"""

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from waypost.http.request import Request

P = TypeVar("P")


@dataclass(slots=True)
class RequestContext(Generic[P]):
    """Request, caller-supplied props and the params bound by matching.

    ``props`` is whatever the caller passed to ``process``; the context
    references it, it does not copy it.
    """

    request: Request
    props: P
    params: dict[str, str]

    def put(self, key: str, value: Any) -> None:
        """Store *value* under *key* in ``props``.

        Item assignment for mappings, attribute assignment otherwise.
        """
        if isinstance(self.props, MutableMapping):
            self.props[key] = value
        else:
            setattr(self.props, key, value)
