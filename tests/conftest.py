"""
Shared fixtures for the fixed-map tests.

Provides:
- A reference LRU map built on OrderedDict, to compare against FixedMap
- An invariant checker for the internals of FixedMap
"""

from collections import OrderedDict

import pytest

from fixed_map.utils.pool import NIL


class ReferenceLRU:
    """Straightforward LRU map, with the most recently used key last."""

    def __init__(self, capacity):
        self.capacity = capacity
        self.data = OrderedDict()

    def add(self, key, value):
        if key in self.data:
            self.data.move_to_end(key)
            self.data[key] = value
            return
        while self.data and len(self.data) >= self.capacity:
            self.data.popitem(last=False)
        if self.capacity > 0:
            self.data[key] = value

    def get(self, key):
        self.data.move_to_end(key)
        return self.data[key]

    def remove(self, key):
        self.data.pop(key, None)

    def items(self):
        """Pairs from the most recently used to the least recently used."""
        return list(reversed(self.data.items()))


def _assert_consistent(fixed_map):
    size = fixed_map.size()
    table, recency, pool = fixed_map._table, fixed_map._recency, fixed_map._pool

    assert 0 <= size <= fixed_map.capacity
    assert len(table) == size
    assert len(recency) == size
    assert pool.num_in_use == size
    assert pool.num_slots <= max(fixed_map.capacity, 1)

    forward = list(recency)
    assert len(forward) == size
    assert len(set(forward)) == size
    for index in forward:
        assert pool.in_use(index)
        assert table.resolve(pool.key(index)) == index

    backward, index = [], recency.tail
    while index != NIL:
        backward.append(index)
        index = int(pool.prev_links[index])
    assert backward[::-1] == forward


@pytest.fixture
def reference_lru():
    """Factory for ReferenceLRU instances."""
    return ReferenceLRU


@pytest.fixture
def assert_consistent():
    """Check the invariants linking the size, table, list and pool of a map."""
    return _assert_consistent
