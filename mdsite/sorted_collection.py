"""A fixed-capacity collection that stays sorted after every push.

Example
-------
>>> from mdsite.sorted_collection import SortedLimitedCollection
>>> top = SortedLimitedCollection([9, 9, 6, 9, 9], limit=5, compare=lambda a, b: a < b)
>>> top.push(3, 1, 4, 7)
>>> top.items
[1, 3, 4, 6, 7]
"""

from __future__ import annotations

import functools
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

T = typ.TypeVar("T")


class SortedLimitedCollection(typ.Generic[T]):
    """Keep at most ``limit`` items ordered by a strict "sorts before" predicate.

    Items ranked beyond ``limit`` are discarded on every push and cannot be
    recovered later.
    """

    def __init__(
        self,
        items: cabc.Iterable[T] = (),
        *,
        limit: int,
        compare: cabc.Callable[[T, T], bool],
    ) -> None:
        if limit < 0:
            msg = f"limit must be non-negative, got {limit}"
            raise ValueError(msg)
        self.limit = limit
        self.compare = compare
        self._items: list[T] = list(items)
        self._sort_and_truncate()

    @property
    def items(self) -> list[T]:
        """Return a copy of the retained items in order."""
        return list(self._items)

    def push(self, *items: T) -> None:
        """Add ``items``, re-sort, and drop everything past ``limit``."""
        self._items.extend(items)
        self._sort_and_truncate()

    def _sort_and_truncate(self) -> None:
        self._items.sort(key=functools.cmp_to_key(self._cmp))
        del self._items[self.limit :]

    def _cmp(self, a: T, b: T) -> int:
        if self.compare(a, b):
            return -1
        if self.compare(b, a):
            return 1
        return 0

    def __iter__(self) -> cabc.Iterator[T]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


__all__ = ["SortedLimitedCollection"]
