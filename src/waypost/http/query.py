"""Immutable ``key=value`` parameter mappings.

Used for the query string and for the URL fragment: both are
``&``-separated pairs. Implements ``Mapping[str, str]``.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


def parse_pairs(text: str, sep: str = "&") -> dict[str, list[str]]:
    """Parse ``sep``-separated ``key=value`` pairs into name -> values.

    A leading ``?`` or ``#`` is ignored, pairs without ``=`` get an empty
    value, and empty pieces are skipped::

        parse_pairs("?a=1&b=2")  -> {"a": ["1"], "b": ["2"]}
        parse_pairs("")          -> {}
    """
    text = text.lstrip("?#")
    parsed: dict[str, list[str]] = {}
    for key, value in parse_qsl(text, keep_blank_values=True, separator=sep):
        parsed.setdefault(key, []).append(value)
    return parsed


class QueryParams(Mapping[str, str]):
    """Immutable decoded parameters.

    Attributes:
        _data: Field name -> list of values, in order of appearance.
        _raw: The text the parameters were parsed from.

    ``__getitem__`` returns the last value for a key, matching form bodies
    and cookies.
    ``get_list`` returns all values for a key.
    """

    _data: dict[str, list[str]]
    _raw: str

    __slots__ = ("_data", "_raw")

    def __init__(self, text: str = "") -> None:
        self._raw = text
        self._data = parse_pairs(text)

    def __getitem__(self, key: str) -> str:
        return self._data[key][-1]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    @property
    def raw(self) -> str:
        """The undecoded source text."""
        return self._raw

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the last value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[-1]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Return value as int, or *default* if missing or not numeric."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default
