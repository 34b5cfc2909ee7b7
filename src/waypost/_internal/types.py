"""Shared type aliases used across waypost modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Continuation passed to every handler; calling it lets the chain proceed
Next: TypeAlias = Callable[[], None]

# Route handler: ``(context, next)``, sync or async
Handler: TypeAlias = Callable[..., Any]

# Lifecycle hook: no arguments, sync or async
Hook: TypeAlias = Callable[[], Any]
