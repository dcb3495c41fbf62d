"""Unbalanced binary search tree keyed by a three-way comparison function."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


@dataclass
class _Node(Generic[T]):
    key: T
    left: Optional["_Node[T]"] = None
    right: Optional["_Node[T]"] = None


class SearchTree(Generic[T]):
    """A search tree where ``compare(a, b)`` returns <0, 0 or >0."""

    def __init__(self, compare: Callable[[Any, Any], int]) -> None:
        self._compare = compare
        self._root: Optional[_Node[T]] = None
        self._size = 0

    def find(self, key: Any) -> Optional[T]:
        """Return the stored key equal to ``key``, or ``None``."""
        node = self._root
        while node is not None:
            order = self._compare(key, node.key)
            if order == 0:
                return node.key
            node = node.left if order < 0 else node.right
        return None

    def search(self, key: T) -> T:
        """Return the stored key equal to ``key``, inserting ``key`` if absent."""
        if self._root is None:
            self._root = _Node(key)
            self._size += 1
            return key
        node = self._root
        while True:
            order = self._compare(key, node.key)
            if order == 0:
                return node.key
            if order < 0:
                if node.left is None:
                    node.left = _Node(key)
                    break
                node = node.left
            else:
                if node.right is None:
                    node.right = _Node(key)
                    break
                node = node.right
        self._size += 1
        return key

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return self.find(key) is not None

    def __iter__(self) -> Iterator[T]:
        stack: list[_Node[T]] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.key
            node = node.right