"""Immutable, case-insensitive request headers.

Decoded once from the ASGI scope's raw byte pairs; names are folded to
lower case so ``headers["Content-Type"]`` and ``headers["content-type"]``
find the same value.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first value sent for a header.
    ``get_list`` returns every value (e.g. repeated ``Accept`` lines).
    Iteration yields lower-cased names in first-seen order.
    """

    __slots__ = ("_values",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        values: dict[str, list[str]] = {}
        for name, value in raw:
            values.setdefault(name.decode("latin-1").lower(), []).append(
                value.decode("latin-1")
            )
        self._values = values

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "Headers":
        """Build from already-decoded ``(name, value)`` string pairs."""
        return cls((k.encode("latin-1"), v.encode("latin-1")) for k, v in pairs)

    def __getitem__(self, key: str) -> str:
        return self._values[key.lower()][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._values.get(key.lower())
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._values.get(key.lower(), ()))
