"""Waypost application class — a route table behind an ASGI entry point.

Routes are registered during setup, then the app is handed to any ASGI
server::

    app = App()

    @app.route("GET", "/users/:id")
    async def show_user(ctx, next):
        await respond_json(ctx.request, {"id": ctx.params["id"]})

    # uvicorn module:app, hypercorn module:app, ...
"""

from collections.abc import Callable
from typing import Any

from waypost._internal.asgi import Receive, Scope, Send
from waypost._internal.invoke import invoke
from waypost._internal.types import Handler, Hook
from waypost.config import AppConfig
from waypost.http.request import Request
from waypost.routing.pattern import RoutePattern
from waypost.routing.segments import Method
from waypost.routing.table import RouteTable
from waypost.server.handler import handle_request


def _empty_props(request: Request) -> dict[str, Any]:
    return {}


class App:
    """The waypost application.

    Owns a ``RouteTable`` and answers ASGI ``http`` and ``lifespan`` scopes.

    Args:
        config: Application settings; defaults to ``AppConfig()``.
        props: Called with each request (sync or async) to build the props
            value its handler chain shares. Defaults to a new empty dict
            per request.

    Thread safety:
        Registration is single-threaded setup work and must be finished
        before the server starts dispatching requests. Nothing guards the
        table against registration while serving.
    """

    __slots__ = ("_props", "_shutdown_hooks", "_startup_hooks", "config", "table")

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        props: Callable[[Request], Any] = _empty_props,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self.table = RouteTable()
        self._props = props
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []

    # -- Route registration --

    def get(self, pattern: str, head: Handler, *tail: Handler) -> RoutePattern:
        return self.table.get(pattern, head, *tail)

    def post(self, pattern: str, head: Handler, *tail: Handler) -> RoutePattern:
        return self.table.post(pattern, head, *tail)

    def patch(self, pattern: str, head: Handler, *tail: Handler) -> RoutePattern:
        return self.table.patch(pattern, head, *tail)

    def delete(self, pattern: str, head: Handler, *tail: Handler) -> RoutePattern:
        return self.table.delete(pattern, head, *tail)

    def options(self, pattern: str, head: Handler, *tail: Handler) -> RoutePattern:
        return self.table.options(pattern, head, *tail)

    def route(
        self, method: Method | str, pattern: str, *before: Handler
    ) -> Callable[[Handler], Handler]:
        """Register the decorated function as the last handler of a route.

        *before* handlers run first, in order::

            @app.route("POST", "/items", body_json("body"))
            async def create_item(ctx, next):
                ...
        """

        def decorator(func: Handler) -> Handler:
            self.table.register(method, pattern, *before, func)
            return func

        return decorator

    # -- Lifecycle hooks --

    def on_startup(self, func: Hook) -> Hook:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        """Register an async or sync shutdown hook via decorator.

        Hooks run in registration order during ASGI lifespan shutdown.
        """
        self._shutdown_hooks.append(func)
        return func

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        await handle_request(
            scope,
            receive,
            send,
            table=self.table,
            props=self._props,
            config=self.config,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    for hook in self._startup_hooks:
                        await invoke(hook)
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                for hook in self._shutdown_hooks:
                    await invoke(hook)
                await send({"type": "lifespan.shutdown.complete"})
                return
