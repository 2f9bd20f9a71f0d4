import pytest

from stereoscope.node import IDSet, Node, Queue, Stack, nodes_equal


class _Item(Node):
    def __init__(self, value):
        self._id = str(value)

    def id(self):
        return self._id

    def copy(self):
        return _Item(self._id)


@pytest.mark.parametrize(
    "ids, want",
    [((), 0), (("items", "in", "set"), 3)],
)
def test_idset_size(ids, want):
    assert len(IDSet(*ids)) == want


def test_idset_add_multiple():
    s = IDSet()
    s.add("a", "b", "c")
    for i in ("a", "b", "c"):
        assert i in s


def test_idset_remove_multiple():
    s = IDSet("a", "b", "c")
    s.remove("a", "b")
    assert "a" not in s
    assert "b" not in s
    assert "c" in s


def test_idset_remove_missing_is_ignored():
    s = IDSet("a")
    s.remove("x")
    assert s.sorted() == ["a"]


@pytest.mark.parametrize("item, want", [("a", True), ("x", False)])
def test_idset_contains(item, want):
    assert (item in IDSet("a", "b", "c")) is want


def test_idset_clear():
    s = IDSet("a", "b", "c")
    s.clear()
    assert len(s) == 0


def test_idset_list():
    assert sorted(IDSet("a", "b", "c")) == ["a", "b", "c"]


def test_idset_sorted():
    assert IDSet("c", "a", "b").sorted() == ["a", "b", "c"]


@pytest.mark.parametrize(
    "ids, want",
    [(("a", "x"), True), (("a", "b"), True), (("x", "y"), False)],
)
def test_idset_contains_any(ids, want):
    assert IDSet("a", "b", "c").contains_any(*ids) is want


def test_idset_merge():
    s = IDSet("a")
    s.merge(IDSet("b", "c"))
    assert s.sorted() == ["a", "b", "c"]


def test_nodes_equal_ignores_order():
    one, two = _Item(1), _Item(2)
    assert nodes_equal([one, two], [two, one])


def test_nodes_equal_different_length():
    one, two = _Item(1), _Item(2)
    assert not nodes_equal([one, two], [one])


def test_nodes_equal_different_objects():
    assert not nodes_equal([_Item(1)], [_Item(1)])


def test_nodes_equal_keeps_inputs_unchanged():
    one, two = _Item(1), _Item(2)
    first = [two, one]
    nodes_equal(first, [one, two])
    assert first == [two, one]


def test_queue_fifo_order():
    q = Queue()
    items = [_Item(i) for i in range(3)]
    for item in items:
        q.enqueue(item)
    assert len(q) == 3
    assert [q.dequeue() for _ in range(3)] == items
    assert len(q) == 0


def test_queue_dequeue_empty_returns_none():
    assert Queue().dequeue() is None


def test_queue_reset():
    q = Queue()
    q.enqueue(_Item(1))
    q.reset()
    assert len(q) == 0
    assert q.dequeue() is None


def test_stack_lifo_order():
    s = Stack()
    a, b = _Item("a"), _Item("b")
    s.push(a)
    s.push(b)
    assert len(s) == 2
    assert s.pop() is b
    assert s.pop() is a
    assert len(s) == 0


def test_stack_pop_empty_raises():
    with pytest.raises(IndexError):
        Stack().pop()