import pytest

from stereoscope.node import Node
from stereoscope.tree import Tree
from stereoscope.walker import DepthFirstWalker, WalkConditions


class _Item(Node):
    def __init__(self, value):
        self._id = str(value)

    def id(self):
        return self._id

    def copy(self):
        return _Item(self._id)


ALL_IDS = [
    "/",
    "/home",
    "/home/wagoodman",
    "/home/wagoodman/more",
    "/home/wagoodman/more/file.txt",
    "/home/wagoodman/some",
    "/home/wagoodman/some/stuff-1.txt",
    "/home/wagoodman/some/stuff-2.txt",
]


def _dfs_tree():
    root = _Item("/")
    home = _Item("/home")
    user = _Item("/home/wagoodman")
    some = _Item("/home/wagoodman/some")
    stuff1 = _Item("/home/wagoodman/some/stuff-1.txt")
    stuff2 = _Item("/home/wagoodman/some/stuff-2.txt")
    more = _Item("/home/wagoodman/more")
    file_ = _Item("/home/wagoodman/more/file.txt")

    tr = Tree()
    tr.add_root(root)
    tr.add_child(root, home)
    tr.add_child(home, user)
    tr.add_child(user, some)
    tr.add_child(some, stuff1)
    tr.add_child(some, stuff2)
    tr.add_child(user, more)
    tr.add_child(more, file_)
    return tr


def _recorder():
    actual = []
    return actual, lambda n: actual.append(n.id())


def test_walk_all():
    tr = _dfs_tree()
    actual, visitor = _recorder()
    walker = DepthFirstWalker(tr, visitor)
    walker.walk_all()
    assert actual == ALL_IDS
    assert [node_id for node_id in ALL_IDS if walker.visited(tr.node(node_id))] == ALL_IDS


def test_walk():
    tr = _dfs_tree()
    actual, visitor = _recorder()
    result = DepthFirstWalker(tr, visitor).walk(tr.node("/home/wagoodman"))
    assert result is None
    assert actual == [
        "/home/wagoodman",
        "/home/wagoodman/more",
        "/home/wagoodman/more/file.txt",
        "/home/wagoodman/some",
        "/home/wagoodman/some/stuff-1.txt",
        "/home/wagoodman/some/stuff-2.txt",
    ]


def test_walk_should_terminate():
    tr = _dfs_tree()
    actual, visitor = _recorder()
    conditions = WalkConditions(should_terminate=lambda n: n.id() == "/home/wagoodman/some")
    walker = DepthFirstWalker(tr, visitor, conditions)
    stopped = walker.walk(tr.node("/home/wagoodman"))
    assert stopped.id() == "/home/wagoodman/some"
    assert actual == [
        "/home/wagoodman",
        "/home/wagoodman/more",
        "/home/wagoodman/more/file.txt",
    ]


def test_walk_should_visit():
    tr = _dfs_tree()
    actual, visitor = _recorder()
    conditions = WalkConditions(should_visit=lambda n: n.id() != "/home/wagoodman/some")
    walker = DepthFirstWalker(tr, visitor, conditions)
    walker.walk(tr.node("/home/wagoodman"))
    assert actual == [
        "/home/wagoodman",
        "/home/wagoodman/more",
        "/home/wagoodman/more/file.txt",
        "/home/wagoodman/some/stuff-1.txt",
        "/home/wagoodman/some/stuff-2.txt",
    ]
    assert not walker.visited(tr.node("/home/wagoodman/some"))


def test_walk_should_prune_branch():
    tr = _dfs_tree()
    actual, visitor = _recorder()
    conditions = WalkConditions(should_continue_branch=lambda n: n.id() != "/home/wagoodman")
    walker = DepthFirstWalker(tr, visitor, conditions)
    walker.walk_all()
    assert actual == ["/", "/home", "/home/wagoodman"]
    assert walker.visited(tr.node("/home/wagoodman"))
    assert not walker.visited(tr.node("/home/wagoodman/some"))
    assert not walker.visited(tr.node("/home/wagoodman/more"))


def test_visited_tracks_nodes():
    tr = _dfs_tree()
    walker = DepthFirstWalker(tr, lambda n: None)
    walker.walk(tr.node("/home/wagoodman/more"))
    assert walker.visited(tr.node("/home/wagoodman/more/file.txt"))
    assert not walker.visited(tr.node("/home"))


def test_nodes_visited_once_across_walks():
    tr = _dfs_tree()
    actual, visitor = _recorder()
    walker = DepthFirstWalker(tr, visitor)
    first = walker.walk(tr.node("/home/wagoodman/more"))
    second = walker.walk(tr.node("/home/wagoodman/more"))
    assert first is None
    assert second is None
    assert actual == ["/home/wagoodman/more", "/home/wagoodman/more/file.txt"]
    assert walker.visited(tr.node("/home/wagoodman/more/file.txt"))
    assert not walker.visited(tr.node("/home/wagoodman"))


def test_visitor_error_propagates():
    tr = _dfs_tree()

    def visitor(n):
        if n.id() == "/home":
            raise RuntimeError("boom")

    walker = DepthFirstWalker(tr, visitor)
    with pytest.raises(RuntimeError, match="boom"):
        walker.walk_all()
    assert walker.visited(tr.node("/"))
    assert not walker.visited(tr.node("/home"))