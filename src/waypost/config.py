"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, lifecycle_logging=False)
    """

    # Include tracebacks in 500 responses
    debug: bool = False

    # One INFO line per request on the "waypost.server" logger
    lifecycle_logging: bool = True

    # Status sent when no route matches
    unmatched_status: int = 404
