"""Route table — ordered registration with conflict checks, first-match dispatch.

Routes are registered during setup and then only read while serving::

    table = RouteTable()
    table.get("/users/:id", load_user, show_user)
    table.post("/users", body_json("body"), create_user)

    handled = await table.process(request, props={})

Registration raises ``ConstructionError`` on a malformed or ambiguous
pattern, so mistakes surface at startup. The table takes no lock:
finish registering before requests are processed concurrently.
"""

import logging
from dataclasses import dataclass
from typing import Any

from waypost._internal.invoke import invoke
from waypost._internal.types import Handler
from waypost.context import RequestContext
from waypost.errors import RouteConflict
from waypost.http.request import Request
from waypost.routing.pattern import RoutePattern, compile_pattern, conflicts, split_path
from waypost.routing.segments import Method

logger = logging.getLogger("waypost.routing")


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful lookup."""

    route: RoutePattern
    params: dict[str, str]


class RouteTable:
    """Insertion-ordered routes, scanned first-match-wins on each request."""

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: list[RoutePattern] = []

    def __len__(self) -> int:
        return len(self._routes)

    @property
    def routes(self) -> tuple[RoutePattern, ...]:
        """All registered routes, in registration order."""
        return tuple(self._routes)

    # -- Build phase --

    def register(
        self, method: Method | str, pattern: str, head: Handler, *tail: Handler
    ) -> RoutePattern:
        """Compile *pattern* and add it with its handler chain.

        Raises ``MalformedPattern`` for an invalid pattern and
        ``RouteConflict`` if it overlaps an already registered route for
        the same method. Nothing is added when either is raised.
        """
        route = compile_pattern(method, pattern, head, *tail)
        for existing in self._routes:
            if conflicts(route, existing):
                raise RouteConflict(route.raw, existing.raw)
        self._routes.append(route)
        logger.debug("registered %s (%d handlers)", route, len(route.handlers))
        return route

    def get(self, pattern: str, head: Handler, *tail: Handler) -> RoutePattern:
        return self.register(Method.GET, pattern, head, *tail)

    def post(self, pattern: str, head: Handler, *tail: Handler) -> RoutePattern:
        return self.register(Method.POST, pattern, head, *tail)

    def patch(self, pattern: str, head: Handler, *tail: Handler) -> RoutePattern:
        return self.register(Method.PATCH, pattern, head, *tail)

    def delete(self, pattern: str, head: Handler, *tail: Handler) -> RoutePattern:
        return self.register(Method.DELETE, pattern, head, *tail)

    def options(self, pattern: str, head: Handler, *tail: Handler) -> RoutePattern:
        return self.register(Method.OPTIONS, pattern, head, *tail)

    # -- Request phase --

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Return the first route matching *method* and *path*, or ``None``."""
        parts = split_path(path)
        for route in self._routes:
            ok, params = route.matches(method, parts)
            if ok:
                return RouteMatch(route=route, params=params)
        return None

    async def process(self, request: Request, props: Any = None) -> bool:
        """Dispatch *request* to the first matching route's handler chain.

        Returns ``False`` without doing anything else when no route
        matches. Otherwise runs the chain and returns ``True``, even if the
        first handler stopped it. Exceptions raised by handlers propagate.
        """
        found = self.match(request.method, request.path)
        if found is None:
            logger.debug("no route for %s %s", request.method, request.path)
            return False

        logger.debug("%s %s matched %s", request.method, request.path, found.route)
        context = RequestContext(request=request, props=props, params=found.params)
        await run_chain(found.route, context)
        return True


async def run_chain(route: RoutePattern, context: RequestContext[Any]) -> None:
    """Run *route*'s handlers in order until one does not call ``next``.

    Each handler gets the shared context and a fresh continuation. The
    handler (and anything it awaits) finishes before its continuation flag
    is read.
    """
    for index, handler in enumerate(route.handlers):
        proceed = False

        def next_() -> None:
            nonlocal proceed
            proceed = True

        await invoke(handler, context, next_)
        if not proceed:
            if index < len(route.handlers) - 1:
                logger.debug("%s stopped at handler %d", route, index)
            return
