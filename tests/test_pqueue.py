from __future__ import annotations

from palette_quant.pqueue import PriorityQueue, by_population, by_population_volume
from palette_quant.vbox import VBox


def test_pop_returns_largest():
    queue = PriorityQueue(lambda value: value)
    for value in (3, 9, 1, 7):
        queue.push(value)

    assert queue.size() == 4
    assert queue.pop() == 9
    assert queue.pop() == 7
    assert len(queue) == 2


def test_push_after_pop_resorts():
    queue = PriorityQueue(lambda value: value)
    queue.push(2)
    queue.push(4)
    assert queue.pop() == 4
    queue.push(10)
    queue.push(1)
    assert queue.peek() == 10
    assert queue.peek(0) == 1
    assert queue.debug() == [1, 2, 10]


def test_swapping_comparator_keeps_contents():
    queue = PriorityQueue(lambda pair: pair[0])
    for pair in ((1, 30), (2, 20), (3, 10)):
        queue.push(pair)
    assert queue.peek() == (3, 10)

    queue.set_comparator(lambda pair: pair[1])
    assert queue.size() == 3
    assert queue.pop() == (1, 30)
    assert queue.map(lambda pair: pair[0]) == [3, 2]


def test_box_orderings(make_histogram):
    histo = make_histogram(((0, 0, 0), 5), ((255, 255, 255), 2))
    dense = VBox(0, 0, 0, 0, 0, 0, histo)
    sparse = VBox(28, 31, 28, 31, 28, 31, histo)

    queue = PriorityQueue(by_population)
    queue.push(sparse)
    queue.push(dense)
    assert queue.peek() is dense

    queue.set_comparator(by_population_volume)
    assert by_population_volume(sparse) == 2 * 64
    assert queue.pop() is sparse
