"""Node identities, ID sets and the small containers used while walking trees."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterable, Iterator
from typing import Deque, List, Optional, Set

ID = str


class Node(ABC):
    """Anything that can live in a tree: it has a stable ID and can copy itself."""

    @abstractmethod
    def id(self) -> ID:
        """Return the identity of this node."""

    @abstractmethod
    def copy(self) -> "Node":
        """Return an independent copy of this node."""


class IDSet:
    """A mutable set of node IDs."""

    def __init__(self, *args: ID) -> None:
        self._ids: Set[ID] = set(args)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, i: object) -> bool:
        return i in self._ids

    def __iter__(self) -> Iterator[ID]:
        return iter(list(self._ids))

    def __repr__(self) -> str:
        return f"IDSet({', '.join(repr(i) for i in self.sorted())})"

    def add(self, *args: ID) -> None:
        """Add every given ID."""
        self._ids.update(args)

    def remove(self, *args: ID) -> None:
        """Remove every given ID; IDs not in the set are ignored."""
        self._ids.difference_update(args)

    def merge(self, other: Iterable[ID]) -> None:
        """Add every ID held by another set."""
        self._ids.update(other)

    def clear(self) -> None:
        """Remove all IDs."""
        self._ids.clear()

    def sorted(self) -> List[ID]:
        """Return the IDs in ascending order."""
        return sorted(self._ids)

    def contains_any(self, *args: ID) -> bool:
        """Tell whether at least one of the given IDs is in the set."""
        return any(i in self._ids for i in args)


def _by_id(n: Node) -> ID:
    return n.id()


def nodes_equal(first: Iterable[Node], second: Iterable[Node]) -> bool:
    """Compare two collections of nodes regardless of their order."""
    left = sorted(first, key=_by_id)
    right = sorted(second, key=_by_id)
    if len(left) != len(right):
        return False
    return all(a == b for a, b in zip(left, right))


class Queue:
    """A first-in, first-out queue of nodes."""

    def __init__(self) -> None:
        self._data: Deque[Node] = deque()

    def __len__(self) -> int:
        return len(self._data)

    def enqueue(self, n: Node) -> None:
        """Append a node to the back of the queue."""
        self._data.append(n)

    def dequeue(self) -> Optional[Node]:
        """Take the node at the front, or return None when the queue is empty."""
        if not self._data:
            return None
        return self._data.popleft()

    def reset(self) -> None:
        """Drop every queued node."""
        self._data.clear()


class Stack:
    """A last-in, first-out stack of nodes."""

    def __init__(self) -> None:
        self._data: List[Node] = []

    def __len__(self) -> int:
        return len(self._data)

    def push(self, n: Node) -> None:
        """Put a node on top of the stack."""
        self._data.append(n)

    def pop(self) -> Node:
        """Take the node on top of the stack; raises IndexError when empty."""
        if not self._data:
            raise IndexError("pop from empty stack")
        return self._data.pop()