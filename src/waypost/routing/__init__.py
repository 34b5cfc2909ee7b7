"""Routing — pattern compilation, conflict checks and the route table.

Routes are registered during setup, checked against each other as they are
added, and scanned in registration order on every request.
"""

from waypost.routing.pattern import RoutePattern, compile_pattern, conflicts, split_path
from waypost.routing.segments import WILDCARD_KEY, Literal, Method, Named, Segment, Wildcard
from waypost.routing.table import RouteMatch, RouteTable, run_chain

__all__ = [
    "WILDCARD_KEY",
    "Literal",
    "Method",
    "Named",
    "RouteMatch",
    "RoutePattern",
    "RouteTable",
    "Segment",
    "Wildcard",
    "compile_pattern",
    "conflicts",
    "run_chain",
    "split_path",
]
