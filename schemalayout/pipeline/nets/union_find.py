"""Disjoint-set forest with path compression and union by size."""

from __future__ import annotations

from typing import Generic, Hashable, Iterator, TypeVar


T = TypeVar("T", bound=Hashable)


class DisjointSet(Generic[T]):
    """Elements iterate in the order they were first added."""

    def __init__(self) -> None:
        self._parent: dict[T, T] = {}
        self._size: dict[T, int] = {}

    def __contains__(self, item: object) -> bool:
        return item in self._parent

    def __iter__(self) -> Iterator[T]:
        return iter(self._parent)

    def __len__(self) -> int:
        return len(self._parent)

    def add(self, item: T) -> bool:
        """Add *item* as a singleton.  Returns False if already present."""
        if item in self._parent:
            return False
        self._parent[item] = item
        self._size[item] = 1
        return True

    def find(self, item: T) -> T:
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[item] != root:
            nxt = self._parent[item]
            self._parent[item] = root
            item = nxt
        return root

    def union(self, a: T, b: T) -> tuple[T, T | None]:
        """Merge the classes of *a* and *b*.

        Returns ``(root, absorbed)`` where *absorbed* is the root that
        stopped being one, or None if both were already in one class.
        """
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return ra, None
        if self._size[ra] < self._size[rb]:
            ra, rb = rb, ra
        self._parent[rb] = ra
        self._size[ra] += self._size.pop(rb)
        return ra, rb

    def groups(self) -> dict[T, list[T]]:
        """root -> members.  Groups and members keep first-added order."""
        result: dict[T, list[T]] = {}
        for item in self._parent:
            result.setdefault(self.find(item), []).append(item)
        return result
