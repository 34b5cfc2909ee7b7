"""Waypost — a minimal ASGI routing layer.

Matches a request's method and path against registered patterns, binds
path parameters, and runs the route's handler chain with explicit
continuation.

Basic usage::

    from waypost import App, respond_json

    app = App()

    def load_user(ctx, next):
        ctx.props["user"] = USERS.get(ctx.params["id"])
        if ctx.props["user"] is not None:
            next()

    async def show_user(ctx, next):
        await respond_json(ctx.request, ctx.props["user"])

    app.get("/users/:id", load_user, show_user)

Patterns use ``:name`` for a single-segment parameter and a trailing ``*``
for the rest of the path (bound as ``ctx.params["*"]``).
"""

from importlib import import_module

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "BodyDecodeError",
    "CORSConfig",
    "ConstructionError",
    "JSONParseError",
    "MalformedPattern",
    "Method",
    "Request",
    "RequestContext",
    "ResponseAlreadySent",
    "RouteConflict",
    "RouteTable",
    "UnsupportedMediaType",
    "WaypostError",
    "body_json",
    "cors",
    "read_body_as_json",
    "respond_cors",
    "respond_file",
    "respond_json",
    "respond_location",
    "static_files",
]

_LAZY_IMPORTS: dict[str, str] = {
    "App": "waypost.app",
    "AppConfig": "waypost.config",
    "BodyDecodeError": "waypost.errors",
    "CORSConfig": "waypost.middleware.cors",
    "ConstructionError": "waypost.errors",
    "JSONParseError": "waypost.errors",
    "MalformedPattern": "waypost.errors",
    "Method": "waypost.routing.segments",
    "Request": "waypost.http.request",
    "RequestContext": "waypost.context",
    "ResponseAlreadySent": "waypost.errors",
    "RouteConflict": "waypost.errors",
    "RouteTable": "waypost.routing.table",
    "UnsupportedMediaType": "waypost.errors",
    "WaypostError": "waypost.errors",
    "body_json": "waypost.middleware.body",
    "cors": "waypost.middleware.cors",
    "read_body_as_json": "waypost.http.body",
    "respond_cors": "waypost.http.response",
    "respond_file": "waypost.http.response",
    "respond_json": "waypost.http.response",
    "respond_location": "waypost.http.response",
    "static_files": "waypost.middleware.static",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypost`` fast while providing a clean top-level API.
    """
    module = _LAZY_IMPORTS.get(name)
    if module is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module), name)
