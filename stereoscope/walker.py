"""Stateful depth-first traversal of a tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

from .node import IDSet, Node, Stack

NodeVisitor = Callable[[Node], None]
NodePredicate = Callable[[Node], bool]


class _Reader(Protocol):
    def children(self, n: Node) -> List[Node]: ...

    def roots(self) -> List[Node]: ...


@dataclass
class WalkConditions:
    """Optional hooks that shape a walk.

    should_terminate stops the walk before the node is visited; should_visit
    skips a single node; should_continue_branch decides whether the node's
    children are walked.
    """

    should_terminate: Optional[NodePredicate] = None
    should_visit: Optional[NodePredicate] = None
    should_continue_branch: Optional[NodePredicate] = None


class DepthFirstWalker:
    """Walks a tree depth first, children in ascending ID order, visiting each node once."""

    def __init__(
        self,
        reader: _Reader,
        visitor: Optional[NodeVisitor] = None,
        conditions: Optional[WalkConditions] = None,
    ) -> None:
        self._tree = reader
        self._visitor = visitor
        self._conditions = conditions or WalkConditions()
        self._stack = Stack()
        self._visited = IDSet()

    def walk(self, start: Node) -> Optional[Node]:
        """Walk from a node; return the node that stopped the walk, or None.

        Exceptions raised by the visitor propagate to the caller.
        """
        cond = self._conditions
        self._stack.push(start)

        while len(self._stack) > 0:
            current = self._stack.pop()
            if cond.should_terminate is not None and cond.should_terminate(current):
                return current

            cid = current.id()
            if self._visitor is not None and cid not in self._visited:
                if cond.should_visit is None or cond.should_visit(current):
                    self._visitor(current)
                    self._visited.add(cid)

            if cond.should_continue_branch is not None and not cond.should_continue_branch(current):
                continue

            children = sorted(self._tree.children(current), key=lambda n: n.id(), reverse=True)
            for child in children:
                self._stack.push(child)

        return None

    def walk_all(self) -> None:
        """Walk from every root of the tree."""
        for root in self._tree.roots():
            self.walk(root)

    def visited(self, n: Node) -> bool:
        """Tell whether the node has been visited."""
        return n.id() in self._visited