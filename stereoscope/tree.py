"""A simple tree of nodes keyed by node ID."""

from __future__ import annotations

from typing import Dict, List, Optional

from .node import ID, Node


class TreeError(Exception):
    """Raised when a tree operation cannot be carried out."""


class Tree:
    """A tree that tracks nodes, their children and their parents."""

    def __init__(self) -> None:
        self._nodes: Dict[ID, Optional[Node]] = {}
        self._children: Dict[ID, Dict[ID, Optional[Node]]] = {}
        self._parent: Dict[ID, Optional[Node]] = {}

    @staticmethod
    def _copy_node(n: Optional[Node]) -> Optional[Node]:
        return None if n is None else n.copy()

    def copy(self) -> "Tree":
        """Return a deep copy of the tree; every node is copied."""
        ct = Tree()
        ct._nodes = {k: self._copy_node(v) for k, v in self._nodes.items()}
        ct._parent = {k: self._copy_node(v) for k, v in self._parent.items()}
        ct._children = {
            parent_id: {k: self._copy_node(v) for k, v in lookup.items()}
            for parent_id, lookup in self._children.items()
        }
        return ct

    def roots(self) -> List[Node]:
        """Return all nodes that have no parent."""
        return [
            n
            for n in self._nodes.values()
            if n is not None and self._parent.get(n.id()) is None
        ]

    def has_node(self, node_id: ID) -> bool:
        """Tell whether a node with this ID is in the tree."""
        return node_id in self._nodes

    def node(self, node_id: ID) -> Optional[Node]:
        """Return the node with this ID, or None."""
        return self._nodes.get(node_id)

    def nodes(self) -> List[Node]:
        """Return every node in the tree."""
        return list(self._nodes.values())

    def _add_node(self, n: Node) -> None:
        nid = n.id()
        if nid in self._nodes:
            raise TreeError(f"node ID collision: {nid}")
        self._nodes[nid] = n
        self._children[nid] = {}
        self._parent[nid] = None

    def replace(self, old: Node, new: Node) -> None:
        """Put a new node in the place of an old one, keeping its relationships."""
        old_id, new_id = old.id(), new.id()
        if not self.has_node(old_id):
            raise TreeError("cannot replace node not in the tree")

        if old_id == new_id:
            self._nodes[new_id] = new
            return

        self._add_node(new)

        old_parent = self._parent.get(old_id)
        self._parent[new_id] = old_parent

        for cid in self._children.get(old_id, {}):
            self._parent[cid] = new
            self._children[new_id][cid] = self._nodes.get(cid)

        if old_parent is not None:
            siblings = self._children.setdefault(old_parent.id(), {})
            siblings.pop(old_id, None)
            siblings[new_id] = new

        self._children.pop(old_id, None)
        self._nodes.pop(old_id, None)
        self._parent.pop(old_id, None)

    def add_root(self, n: Node) -> None:
        """Add a node with no parent."""
        self._add_node(n)

    def add_child(self, parent: Node, child: Node) -> None:
        """Add a node under the given parent, adding the parent too if needed."""
        fid, tid = parent.id(), child.id()
        if fid == tid:
            raise TreeError("should not add self edge")

        if fid not in self._nodes:
            self._add_node(parent)
        else:
            self._nodes[fid] = parent

        if tid not in self._nodes:
            self._add_node(child)
        else:
            self._nodes[tid] = child

        self._children.setdefault(fid, {})[tid] = child
        self._parent[tid] = parent

    def remove_node(self, n: Node) -> List[Node]:
        """Remove a node and its whole subtree; return every node removed."""
        nid = n.id()
        if nid not in self._nodes:
            raise TreeError(f"unable to remove node: {nid}")

        removed: List[Node] = []
        for child in list(self._children.get(nid, {}).values()):
            removed.extend(self.remove_node(child))

        removed.append(self._nodes[nid])

        self._children.pop(nid, None)
        parent = self._parent.get(nid)
        if parent is not None:
            self._children.get(parent.id(), {}).pop(nid, None)
        self._parent.pop(nid, None)
        del self._nodes[nid]
        return removed

    def children(self, n: Node) -> List[Node]:
        """Return the children of the given node."""
        lookup = self._children.get(n.id())
        if not lookup:
            return []
        return [self._nodes.get(cid) for cid in lookup]

    def parent(self, n: Node) -> Optional[Node]:
        """Return the parent of the given node, or None for a root."""
        return self._parent.get(n.id())

    def __len__(self) -> int:
        return len(self._nodes)