"""Immutable, case-insensitive HTTP headers.

Implements ``Mapping[str, str]``. Stores ``(name, value)`` pairs in
arrival order; lookups ignore case.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a header (e.g. multiple ``Accept``).
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: Iterable[tuple[str, str]] = ()) -> None:
        object.__setattr__(self, "_raw", tuple(raw))

    @classmethod
    def from_mapping(cls, headers: Mapping[str, str]) -> Headers:
        return cls(headers.items())

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower()
        for name, value in self._raw:
            if name.lower() == key_lower:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower()
        return any(name.lower() == key_lower for name, _ in self._raw)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower()
        return [value for name, value in self._raw if name.lower() == key_lower]

    def with_header(self, name: str, value: str) -> Headers:
        """Return new headers with an additional ``(name, value)`` pair."""
        return Headers((*self._raw, (name, value)))

    @property
    def raw(self) -> tuple[tuple[str, str], ...]:
        """The header pairs in arrival order."""
        return self._raw
