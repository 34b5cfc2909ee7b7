"""Waypost exception hierarchy.

Shared across the route table, request helpers and middleware so every
module raises and catches the same types.
"""


class WaypostError(Exception):
    """Base for all waypost-specific errors."""


class ConstructionError(WaypostError):
    """Raised when a route cannot be registered.

    Only ever raised during the build phase, never while serving requests.
    """


class MalformedPattern(ConstructionError):
    """The pattern string itself is invalid (empty, bad parameter, stray ``*``)."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f'wrong pattern "{pattern}": {reason}')


class RouteConflict(ConstructionError):
    """The pattern could match the same requests as an already registered one."""

    def __init__(self, pattern: str, existing: str) -> None:
        self.pattern = pattern
        self.existing = existing
        super().__init__(
            f'pattern "{pattern}" conflicts with previously added pattern "{existing}"'
        )


class BodyDecodeError(WaypostError):
    """The request body could not be decoded."""


class JSONParseError(BodyDecodeError):
    """The body claimed to be JSON but did not parse."""


class UnsupportedMediaType(BodyDecodeError):  # noqa: N818
    """The body's Content-Type has no decoder."""

    def __init__(self, content_type: str | None) -> None:
        self.content_type = content_type
        super().__init__(f'content type "{content_type}" not supported')


class ResponseAlreadySent(WaypostError):  # noqa: N818
    """A second response was attempted for a request that already answered."""
