"""
Two access protocols over one extender attribute bag.

BagCursor walks the bag forward in insertion order; IndexedView treats it as an
associative array whose shape is fixed. Both hold a reference to the same live
dict and never copy it, so each always observes the other's writes.

Notes:
    - The cursor stores a position only. Each access re-reads the dict, so mutating
      the bag mid-walk never raises; element order after such a mutation is undefined.
    - IndexedView.write and IndexedView.clear never add or remove keys.
"""

from __future__ import annotations

from collections.abc import Iterator
from itertools import islice
from typing import Any

__all__ = [
    "BagCursor",
    "IndexedView",
]

_MISSING = object()


class BagCursor:
    """
    Restartable single-pass cursor over (key, value) pairs.

    Examples:
        >>> bag = {"name": "color", "value": "blue"}
        >>> c = BagCursor(bag)
        >>> c.rewind()
        >>> pairs = []
        >>> while c.valid():
        ...     pairs.append((c.key(), c.current()))
        ...     c.next()
        >>> pairs
        [('name', 'color'), ('value', 'blue')]
    """

    __slots__ = ("_bag", "_pos", "_valid")

    def __init__(self, bag: dict[str, Any]) -> None:
        self._bag = bag
        self._pos = 0
        self._valid = False

    def _key_at(self, pos: int) -> Any:
        return next(islice(iter(self._bag), pos, None), _MISSING)

    def rewind(self) -> None:
        self._pos = 0
        self._valid = self._key_at(0) is not _MISSING

    def valid(self) -> bool:
        if not self._valid:
            return False
        # The bag may have shrunk since the last move.
        return self._key_at(self._pos) is not _MISSING

    def key(self) -> str | None:
        if not self._valid:
            return None
        k = self._key_at(self._pos)
        return None if k is _MISSING else k

    def current(self) -> Any:
        k = self.key()
        if k is None:
            return None
        return self._bag.get(k)

    def next(self) -> None:
        if not self._valid:
            return
        self._pos += 1
        self._valid = self._key_at(self._pos) is not _MISSING

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        self.rewind()
        while self.valid():
            yield self.key(), self.current()  # type: ignore[misc]
            self.next()


class IndexedView:
    """
    Keyed access with guarded mutation.

    Examples:
        >>> bag = {"name": "color", "value": "blue"}
        >>> v = IndexedView(bag)
        >>> v.write("colour", "red")   # absent key: ignored
        >>> v.exists("colour")
        False
        >>> v.clear("value")
        >>> bag
        {'name': 'color', 'value': ''}
    """

    __slots__ = ("_bag",)

    def __init__(self, bag: dict[str, Any]) -> None:
        self._bag = bag

    def exists(self, key: str) -> bool:
        return key in self._bag

    def read(self, key: str) -> Any:
        return self._bag.get(key)

    def write(self, key: str, value: Any) -> None:
        if key in self._bag:
            self._bag[key] = value

    def clear(self, key: str) -> None:
        # Blank, never remove.
        if key in self._bag:
            self._bag[key] = ""
