"""Static file handler for wildcard routes.

Serves the path captured by a trailing ``*`` from a directory::

    table.get("/static/*", static_files("./public"))

    # GET /static/css/site.css -> ./public/css/site.css

Paths with ``.`` or ``..`` components and missing files get a 404 from
``respond_file``.
"""

from pathlib import Path
from typing import Any

from waypost._internal.types import Next
from waypost.context import RequestContext
from waypost.http.response import respond_file
from waypost.middleware.protocol import Handler
from waypost.routing.segments import WILDCARD_KEY


def static_files(
    directory: str | Path,
    *,
    index: str = "index.html",
    cache_control: str | None = "public, max-age=3600",
) -> Handler:
    """Build a handler serving files below *directory*.

    An empty capture (``GET /static``) serves *index*.
    """
    root = Path(directory).resolve()
    headers = {"Cache-Control": cache_control} if cache_control else None

    async def serve(ctx: RequestContext[Any], next: Next) -> None:
        relative = ctx.params.get(WILDCARD_KEY) or index
        await respond_file(ctx.request, str(root / relative), headers=headers)

    return serve
