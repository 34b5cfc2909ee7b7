"""Raw ASGI type aliases.

Only ``Request``, ``server.sender`` and the app shell touch these; route
handlers work with ``Request`` and ``RequestContext`` instead.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

Scope: TypeAlias = MutableMapping[str, Any]
Message: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[Message]]
Send: TypeAlias = Callable[[Message], Awaitable[None]]
