import random
from types import SimpleNamespace

import pytest

from huffman import Leaf
from priority_queue import MinHeap


def _assert_heap_property(queue):
    heap = list(queue)
    for i in range(1, len(heap)):
        assert heap[(i - 1) // 2].frequency <= heap[i].frequency


def test_extract_from_empty_returns_none():
    queue = MinHeap()
    assert queue.extract_min() is None
    assert len(queue) == 0


def test_extract_last_element_empties_queue():
    queue = MinHeap()
    queue.insert(Leaf('a', 3))
    assert queue.extract_min().symbol == 'a'
    assert queue.extract_min() is None


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_repeated_extract_is_non_decreasing(seed):
    rng = random.Random(seed)
    queue = MinHeap()
    freqs = [rng.randrange(0, 20) for _ in range(50)]  # plenty of ties
    for i, f in enumerate(freqs):
        queue.insert(Leaf(chr(0x100 + i), f))
        _assert_heap_property(queue)

    out = []
    while len(queue):
        out.append(queue.extract_min().frequency)
        _assert_heap_property(queue)
    assert out == sorted(freqs)


def test_insert_sifts_smaller_node_to_root():
    queue = MinHeap()
    for sym, f in [('a', 10), ('b', 20), ('c', 30), ('d', 5)]:
        queue.insert(Leaf(sym, f))
    assert [n.symbol for n in queue] == ['d', 'a', 'c', 'b']


def test_extract_sifts_down_to_smaller_child():
    queue = MinHeap()
    for sym, f in [('a', 1), ('b', 4), ('c', 2), ('d', 7), ('e', 5)]:
        queue.insert(Leaf(sym, f))
    assert queue.extract_min().symbol == 'a'
    # e moves to the root, then swaps with c (the smaller child)
    assert [n.frequency for n in queue] == [2, 4, 5, 7]


def test_orders_nodes_by_frequency_attribute_only():
    # items define no ordering of their own
    queue = MinHeap()
    for f in [4, 1, 3, 2]:
        queue.insert(SimpleNamespace(frequency=f))
    assert [queue.extract_min().frequency for _ in range(4)] == [1, 2, 3, 4]
