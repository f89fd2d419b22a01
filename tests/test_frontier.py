# tests/test_frontier.py
import pytest

from gridpath.frontier import PriorityFrontier


def _drain(frontier):
    out = []
    while frontier:
        out.append(frontier.pop())
    return out


def test_pops_lowest_priority_first():
    frontier = PriorityFrontier()
    frontier.push('a', 3)
    frontier.push('b', 1)
    frontier.push('c', 2)

    assert [item for item, _ in _drain(frontier)] == ['b', 'c', 'a']


def test_equal_priorities_come_out_in_insertion_order():
    frontier = PriorityFrontier()
    frontier.push('a', 1)
    frontier.push('b', 1)
    frontier.push('c', 0)
    frontier.push('d', 1)

    assert [item for item, _ in _drain(frontier)] == ['c', 'a', 'b', 'd']


def test_push_keeps_duplicate_entries():
    frontier = PriorityFrontier()
    frontier.push('a', 5)
    frontier.push('a', 2)

    assert len(frontier) == 2
    assert frontier.pop() == ('a', 2)
    assert frontier.pop() == ('a', 5)
    assert not frontier


def test_replace_rekeys_without_duplicating():
    frontier = PriorityFrontier()
    frontier.push('a', 5)
    frontier.push('b', 4)
    frontier.replace('a', 1)

    assert len(frontier) == 2
    assert _drain(frontier) == [('a', 1), ('b', 4)]


def test_replace_keeps_original_insertion_order_on_ties():
    frontier = PriorityFrontier()
    frontier.push('a', 5)
    frontier.push('b', 3)
    frontier.push('c', 3)
    frontier.replace('a', 3)

    assert [item for item, _ in _drain(frontier)] == ['a', 'b', 'c']


def test_replace_pushes_missing_item():
    frontier = PriorityFrontier()
    frontier.replace('a', 2)

    assert 'a' in frontier
    assert frontier.pop() == ('a', 2)
    assert 'a' not in frontier


def test_pop_from_empty_frontier_raises():
    frontier = PriorityFrontier()
    with pytest.raises(IndexError):
        frontier.pop()

    frontier.push('a', 1)
    frontier.replace('a', 0)
    frontier.pop()
    with pytest.raises(IndexError):
        frontier.pop()
