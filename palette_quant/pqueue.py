"""Lazily sorted priority queue of boxes."""
from __future__ import annotations

from typing import Callable, Generic, List, Optional, TypeVar

from .vbox import VBox

T = TypeVar("T")
R = TypeVar("R")

SortKey = Callable[[T], int]


def by_population(vbox: VBox) -> int:
    return vbox.count()


def by_population_volume(vbox: VBox) -> int:
    return vbox.count() * vbox.volume()


class PriorityQueue(Generic[T]):
    """Queue whose ``pop`` returns the largest item under the current key.

    Items are only sorted when read, so a run of pushes costs one sort.
    Replacing the key keeps the items and marks them unsorted.
    """

    def __init__(self, key: SortKey) -> None:
        self._contents: List[T] = []
        self._sorted = False
        self._key = key

    def _sort(self) -> None:
        self._contents.sort(key=self._key)
        self._sorted = True

    def set_comparator(self, key: SortKey) -> None:
        self._key = key
        self._sorted = False

    def push(self, item: T) -> None:
        self._contents.append(item)
        self._sorted = False

    def peek(self, index: Optional[int] = None) -> T:
        if not self._sorted:
            self._sort()
        if index is None:
            index = len(self._contents) - 1
        return self._contents[index]

    def pop(self) -> T:
        if not self._sorted:
            self._sort()
        return self._contents.pop()

    def size(self) -> int:
        return len(self._contents)

    def __len__(self) -> int:
        return len(self._contents)

    def map(self, function: Callable[[T], R]) -> List[R]:
        return [function(item) for item in self._contents]

    def debug(self) -> List[T]:
        if not self._sorted:
            self._sort()
        return list(self._contents)
