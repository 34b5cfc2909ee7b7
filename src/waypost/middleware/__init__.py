"""Middleware — handler factories for common chain steps.

A handler is any callable matching:
    async def handler(ctx: RequestContext, next: Next) -> None

Built-in handlers:
    body_json -- Decode a JSON or form body into ``ctx.props``
    cors -- Answer CORS preflight requests
    static_files -- Serve files captured by a wildcard route
"""

from waypost.middleware.body import body_json
from waypost.middleware.cors import CORSConfig, cors
from waypost.middleware.protocol import Handler, Next
from waypost.middleware.static import static_files

__all__ = [
    "CORSConfig",
    "Handler",
    "Next",
    "body_json",
    "cors",
    "static_files",
]
