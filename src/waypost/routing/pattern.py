"""Pattern compilation, conflict detection and per-route matching.

A pattern such as ``/users/:id/files/*`` compiles to a ``RoutePattern``
holding one segment per non-empty ``/``-delimited piece::

    compile_pattern("GET", "/users/:id/*", handler)
    # -> segments (Literal("users"), Named("id"), Wildcard()), is_variadic=True

Compilation is strict: everything that could make matching ambiguous is
rejected here, at registration time, so matching itself never fails with
an error.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from waypost._internal.types import Handler
from waypost.errors import MalformedPattern
from waypost.routing.segments import (
    WILDCARD_KEY,
    Literal,
    Method,
    Named,
    Segment,
    Wildcard,
)

PARAM_MARKER = ":"
WILDCARD_MARKER = "*"


def split_path(path: str) -> list[str]:
    """Split a path on ``/``, dropping empty pieces.

    Leading, trailing and doubled slashes collapse::

        split_path("//a/b/")  -> ["a", "b"]
        split_path("/")       -> []
    """
    return [part for part in path.split("/") if part]


@dataclass(frozen=True, slots=True)
class RoutePattern:
    """A compiled route: method, segments and the handler chain to run."""

    method: Method
    raw: str
    segments: tuple[Segment, ...]
    is_variadic: bool
    handlers: tuple[Handler, ...]

    def __str__(self) -> str:
        return f"{self.method} {self.raw}"

    def matches(self, method: str, parts: Sequence[str]) -> tuple[bool, dict[str, str]]:
        """Match a request method and split path against this pattern.

        Returns ``(True, params)`` on success and ``(False, {})`` otherwise.
        Bindings made before a failing segment are discarded.
        """
        if method.upper() != self.method:
            return False, {}

        if self.is_variadic:
            # The trailing wildcard may bind nothing
            if len(self.segments) - 1 > len(parts):
                return False, {}
        elif len(self.segments) != len(parts):
            return False, {}

        params: dict[str, str] = {}
        for index, segment in enumerate(self.segments):
            match segment:
                case Wildcard():
                    params[WILDCARD_KEY] = "/".join(parts[index:])
                    break
                case Named(name=name):
                    params[name] = parts[index]
                case Literal(text=text):
                    if text != parts[index]:
                        return False, {}
        return True, params


def _parse_segment(pattern: str, piece: str) -> Segment:
    if PARAM_MARKER in piece:
        if piece.find(PARAM_MARKER) != 0 or piece.rfind(PARAM_MARKER) != 0:
            raise MalformedPattern(pattern, f"parameter segment {piece!r} must start with ':'")
        name = piece[1:]
        if not name:
            raise MalformedPattern(pattern, "parameter name is empty")
        if WILDCARD_MARKER in name:
            raise MalformedPattern(pattern, f"parameter name {name!r} contains '*'")
        return Named(name)
    if WILDCARD_MARKER in piece:
        if piece != WILDCARD_MARKER:
            raise MalformedPattern(pattern, f"wildcard segment {piece!r} must be exactly '*'")
        return Wildcard()
    return Literal(piece)


def _coerce_method(pattern: str, method: Method | str) -> Method:
    try:
        return Method(method.upper())
    except ValueError:
        allowed = ", ".join(m.value for m in Method)
        msg = f"unsupported method {method!r} (expected one of {allowed})"
        raise MalformedPattern(pattern, msg) from None


def compile_pattern(method: Method | str, pattern: str, *handlers: Handler) -> RoutePattern:
    """Compile a route declaration into a ``RoutePattern``.

    Raises ``MalformedPattern`` when:

    - the pattern is empty or contains more than one ``*``
    - a parameter segment is not ``:name`` (marker first and only once)
    - a wildcard segment is anything but a bare ``*``, or is not the last segment
    - a parameter name is empty, contains ``*``, or repeats within the pattern
    - the method is not one of ``Method`` or no handler is given
    """
    if not pattern:
        raise MalformedPattern(pattern, "pattern length must be greater than 0")
    if pattern.find(WILDCARD_MARKER) != pattern.rfind(WILDCARD_MARKER):
        raise MalformedPattern(pattern, "more than one '*'")
    if not handlers:
        raise MalformedPattern(pattern, "at least one handler is required")

    segments = tuple(_parse_segment(pattern, piece) for piece in split_path(pattern))

    seen: set[str] = set()
    for index, segment in enumerate(segments):
        if isinstance(segment, Wildcard) and index != len(segments) - 1:
            raise MalformedPattern(pattern, "'*' is only allowed as the last segment")
        if isinstance(segment, Named):
            if segment.name in seen:
                raise MalformedPattern(pattern, f"duplicate parameter name {segment.name!r}")
            seen.add(segment.name)

    return RoutePattern(
        method=_coerce_method(pattern, method),
        raw=pattern,
        segments=segments,
        is_variadic=any(isinstance(s, Wildcard) for s in segments),
        handlers=handlers,
    )


def conflicts(a: RoutePattern, b: RoutePattern) -> bool:
    """Whether two patterns have overlapping shapes for the same method.

    Walks both segment lists side by side. Running out of segments on one
    side means no conflict; a wildcard on either side means conflict; a
    parameter on either side is compatible with anything; two literals must
    differ to rule the pair out. Surviving the whole walk means conflict.
    """
    if a.method != b.method:
        return False

    for index in range(max(len(a.segments), len(b.segments))):
        if index >= len(a.segments) or index >= len(b.segments):
            return False

        left = a.segments[index]
        right = b.segments[index]

        if isinstance(left, Wildcard) or isinstance(right, Wildcard):
            return True
        if isinstance(left, Named) or isinstance(right, Named):
            continue
        if left.text != right.text:
            return False

    return True
