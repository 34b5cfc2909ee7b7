"""Pattern segments — the three shapes a route path piece can take."""

from dataclasses import dataclass
from enum import StrEnum

WILDCARD_KEY = "*"
"""Params key under which a wildcard's captured remainder is stored."""


class Method(StrEnum):
    """HTTP methods a route can be registered for."""

    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"


@dataclass(frozen=True, slots=True)
class Literal:
    """Matches one request segment equal to ``text`` (case-sensitive)."""

    text: str


@dataclass(frozen=True, slots=True)
class Named:
    """Matches any one request segment and binds it to ``name``."""

    name: str


@dataclass(frozen=True, slots=True)
class Wildcard:
    """Matches every remaining request segment, zero or more."""


Segment = Literal | Named | Wildcard
