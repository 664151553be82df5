"""
Append-Only Registry
====================

A growable sequence that only ever gains entries at the end. Because slots
are never removed or reordered, "is slot i occupied?" is a monotonic
predicate over i, and the size of the registry can be recovered with a
boundary search that only ever asks that question.

A search must see one consistent view for its whole run. ``snapshot()``
records the current length and reads through the live list: slots below
that length are never rewritten, so the view stays frozen without copying,
and appends that land afterwards are invisible to it. Taking a snapshot and
reading a slot are both O(1).
"""

import threading
from dataclasses import dataclass, field
from typing import Generic, Iterator, List, Optional, TypeVar

from gallop.search.engine import SearchEngine, SearchResult

T = TypeVar('T')


@dataclass(frozen=True)
class RegistrySnapshot(Generic[T]):
    """Read-consistent view of a registry at one moment."""
    source: List[T] = field(repr=False, compare=False)
    length: int

    def occupied(self, index: int) -> bool:
        return int(index) < self.length

    def __getitem__(self, index: int) -> T:
        if index < 0:
            index += self.length
        if not 0 <= index < self.length:
            raise IndexError(f"snapshot index {index} out of range")
        return self.source[index]

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[T]:
        for index in range(self.length):
            yield self.source[index]


class AppendOnlyRegistry(Generic[T]):
    """
    Thread-safe append-only sequence with stable indices.

    Usage:
        >>> registry = AppendOnlyRegistry()
        >>> registry.append('a'), registry.append('b')
        (0, 1)
        >>> registry.count().boundary
        2
    """

    def __init__(self, engine: Optional[SearchEngine] = None):
        self._items: List[T] = []
        self._lock = threading.Lock()
        self.engine = engine or SearchEngine()

    def append(self, item: T) -> int:
        """Add ``item`` and return its index."""
        with self._lock:
            if len(self._items) >= self.engine.space.max_index:
                raise OverflowError(
                    f"registry is full for a {self.engine.width}-bit index"
                )
            self._items.append(item)
            return len(self._items) - 1

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.snapshot())

    def snapshot(self) -> RegistrySnapshot[T]:
        with self._lock:
            return RegistrySnapshot(source=self._items, length=len(self._items))

    def count(self, snapshot: Optional[RegistrySnapshot[T]] = None) -> SearchResult:
        """Recover the number of entries by searching over slot occupancy."""
        view = snapshot if snapshot is not None else self.snapshot()
        return self.engine.run(view.occupied)
