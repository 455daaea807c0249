"""Read-only named value store that ``$name`` style references resolve against."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


class Defaults(Mapping[str, Any]):
    """Named value store, such as a theme table, queried by name.

    Styling code only reads from the store. Looking up a name that is not
    present returns ``None`` through :meth:`get`, the way theme tables
    report unset keys.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial) if initial else {}

    def __getitem__(self, name: str) -> Any:
        return self._data[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def set(self, name: str, value: Any) -> None:
        """Set a single name to the given value."""
        self._data[name] = value

    def update(self, values: Mapping[str, Any]) -> None:
        """Merge a mapping of values into the store."""
        self._data.update(values)

    def __repr__(self) -> str:
        return f"Defaults(keys={list(self._data.keys())})"
