"""Tests for the recency list threaded through the node pool."""

import pytest

from fixed_map.utils.pool import NIL, NodePool
from fixed_map.utils.recency import RecencyList


@pytest.fixture
def pool():
    return NodePool()


def make_list(pool, keys):
    """Build a list where the first key ends up at the tail."""
    recency = RecencyList(pool)
    indices = {}
    for key in keys:
        indices[key] = pool.acquire(key, key)
        recency.promote_to_head(indices[key])
    return recency, indices


def ordered_keys(pool, recency):
    return [pool.key(index) for index in recency]


class TestPromote:
    def test_empty_list(self, pool):
        recency = RecencyList(pool)

        assert len(recency) == 0
        assert recency.head == NIL
        assert recency.tail == NIL
        assert recency.peek_tail() is None
        assert list(recency) == []

    def test_single_slot_is_head_and_tail(self, pool):
        recency, indices = make_list(pool, ["a"])

        assert recency.head == indices["a"]
        assert recency.tail == indices["a"]
        assert recency.peek_tail() == indices["a"]
        assert len(recency) == 1

    def test_promote_orders_most_recent_first(self, pool):
        recency, indices = make_list(pool, ["a", "b", "c"])

        assert ordered_keys(pool, recency) == ["c", "b", "a"]
        assert recency.peek_tail() == indices["a"]
        assert len(recency) == 3


class TestDetach:
    @pytest.mark.parametrize(
        "key,expected",
        [
            ("c", ["b", "a"]),
            ("b", ["c", "a"]),
            ("a", ["c", "b"]),
        ],
    )
    def test_detach_any_position(self, pool, key, expected):
        recency, indices = make_list(pool, ["a", "b", "c"])
        recency.detach(indices[key])

        assert ordered_keys(pool, recency) == expected
        assert len(recency) == 2
        assert pool.prev_links[indices[key]] == NIL
        assert pool.next_links[indices[key]] == NIL

    def test_detach_tail_updates_tail(self, pool):
        recency, indices = make_list(pool, ["a", "b", "c"])
        recency.detach(indices["a"])

        assert recency.tail == indices["b"]
        assert pool.next_links[indices["b"]] == NIL

    def test_detach_head_updates_head(self, pool):
        recency, indices = make_list(pool, ["a", "b", "c"])
        recency.detach(indices["c"])

        assert recency.head == indices["b"]
        assert pool.prev_links[indices["b"]] == NIL

    def test_detach_only_slot_empties_list(self, pool):
        recency, indices = make_list(pool, ["a"])
        recency.detach(indices["a"])

        assert recency.head == NIL
        assert recency.tail == NIL
        assert recency.peek_tail() is None
        assert len(recency) == 0

    def test_detached_slot_can_be_promoted_again(self, pool):
        recency, indices = make_list(pool, ["a", "b", "c"])
        recency.detach(indices["a"])
        recency.promote_to_head(indices["a"])

        assert ordered_keys(pool, recency) == ["a", "c", "b"]
        assert recency.peek_tail() == indices["b"]


class TestTouch:
    def test_touch_moves_to_head(self, pool):
        recency, indices = make_list(pool, ["a", "b", "c"])
        recency.touch(indices["b"])

        assert ordered_keys(pool, recency) == ["b", "c", "a"]
        assert len(recency) == 3

    def test_touch_head_is_noop(self, pool):
        recency, indices = make_list(pool, ["a", "b", "c"])
        recency.touch(indices["c"])

        assert ordered_keys(pool, recency) == ["c", "b", "a"]

    def test_touch_tail(self, pool):
        recency, indices = make_list(pool, ["a", "b", "c"])
        recency.touch(indices["a"])

        assert ordered_keys(pool, recency) == ["a", "c", "b"]
        assert recency.tail == indices["b"]


def test_links_survive_pool_growth(pool):
    recency, _ = make_list(pool, list(range(20)))

    assert ordered_keys(pool, recency) == list(reversed(range(20)))


def test_clear(pool):
    recency, _ = make_list(pool, ["a", "b"])
    recency.clear()

    assert len(recency) == 0
    assert recency.peek_tail() is None
