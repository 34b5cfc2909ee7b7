"""CORS preflight handler.

Answers ``OPTIONS`` preflight requests with ``respond_cors``. Register it
on the paths cross-origin clients call::

    table.options("/api/*", cors(CORSConfig(
        allow_origins=("https://example.com",),
        allow_methods=("GET", "POST", "PATCH"),
        allow_headers=("Content-Type", "Authorization"),
    )))
"""

from dataclasses import dataclass
from typing import Any

from waypost._internal.types import Next
from waypost.context import RequestContext
from waypost.http.response import respond_cors
from waypost.middleware.protocol import Handler


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS configuration.

    All fields have secure defaults (no origin is allowed).
    Override what you need::

        CORSConfig(allow_origins=("*",), allow_methods=("GET", "POST"))
    """

    allow_origins: tuple[str, ...] = ()
    allow_methods: tuple[str, ...] = ("GET", "OPTIONS")
    allow_headers: tuple[str, ...] = ()
    allow_credentials: bool = False

    def allowed_origin(self, origin: str) -> str | None:
        """The ``Access-Control-Allow-Origin`` value for *origin*, or ``None``.

        ``"*"`` is echoed as-is unless credentials are allowed, in which
        case the concrete origin is sent back instead.
        """
        if "*" in self.allow_origins:
            return origin if self.allow_credentials else "*"
        if origin in self.allow_origins:
            return origin
        return None


def cors(config: CORSConfig | None = None) -> Handler:
    """Build a preflight handler from *config*.

    Requests without an ``Origin`` header are not CORS requests and are
    passed on with ``next()``. Disallowed origins get a 403.
    """
    cfg = config or CORSConfig()

    async def preflight(ctx: RequestContext[Any], next: Next) -> None:
        origin = ctx.request.headers.get("origin")
        if origin is None:
            next()
            return

        allow_origin = cfg.allowed_origin(origin)
        if allow_origin is None:
            await ctx.request.respond(403)
            return

        await respond_cors(
            ctx.request,
            allow_origin,
            ", ".join(cfg.allow_methods),
            ", ".join(cfg.allow_headers),
            cfg.allow_credentials,
        )

    return preflight
