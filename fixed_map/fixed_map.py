import logging
import operator

from collections import namedtuple

from fixed_map.utils.pool import NodePool
from fixed_map.utils.recency import RecencyList
from fixed_map.utils.table import LookupTable

logger = logging.getLogger(__name__)

Lookup = namedtuple('Lookup', ['found', 'value'])

_MISSING = object()


class FixedMap:
    """Hash map holding at most `capacity` entries.

    Once the map is full, adding a new key evicts the least recently used
    entry, where an entry is used whenever it is added, updated or retrieved
    with `get` / `lookup`. Probing with `find` does not count as a use. All the
    operations run in constant time on average.

    Storage for the entries is recycled: evicted and removed entries are kept
    in a pool of free slots, reused by later insertions.

    Parameters
    ----------
    capacity : int
        The maximum number of entries in the map. A capacity of 0 is valid,
        in which case no entry is ever retained.
    """
    def __init__(self, capacity):
        capacity = operator.index(capacity)
        if capacity < 0:
            raise ValueError(f'The capacity must be non-negative, got {capacity}.')
        if capacity == 0:
            logger.warning('FixedMap created with capacity 0: '
                           'no entry will be retained.')

        self._capacity = capacity
        self._size = 0

        # A map with capacity 0 still needs one slot for the transient entry
        self._pool = NodePool(max_size=max(capacity, 1))
        self._recency = RecencyList(self._pool)
        self._table = LookupTable()

    @property
    def capacity(self):
        return self._capacity

    def size(self):
        return self._size

    def find(self, key):
        return self._table.contains(key)

    def lookup(self, key):
        """Retrieve the value for `key` and mark it as most recently used.

        Returns
        -------
        lookup : Lookup
            A `(found, value)` pair. If `key` is not in the map, `found` is
            False, `value` is None, and the map is left unchanged.
        """
        if not self._table.contains(key):
            return Lookup(found=False, value=None)

        index = self._table.resolve(key)
        self._recency.touch(index)
        return Lookup(found=True, value=self._pool.value(index))

    def get(self, key, default=_MISSING):
        """Retrieve the value for `key` and mark it as most recently used.

        Raises a `KeyError` if `key` is not in the map, unless `default` is
        given, in which case `default` is returned instead.
        """
        found, value = self.lookup(key)
        if found:
            return value
        if default is not _MISSING:
            return default
        raise KeyError(f'Key {key!r} not in map.')

    def add(self, key, value):
        if self._table.contains(key):
            # Update the value in place
            index = self._table.resolve(key)
            self._pool.set_value(index, value)
            self._recency.touch(index)
            return

        while (self._size >= self._capacity) and (self._recency.peek_tail() is not None):
            self._evict()

        index = self._pool.acquire(key, value)
        self._table.insert(key, index)
        self._recency.promote_to_head(index)
        self._size += 1

        if self._size > self._capacity:
            # Only with capacity 0: the new entry is evicted immediately
            self._evict()

    def remove(self, key):
        if not self._table.contains(key):
            return
        self._discard(self._table.resolve(key))

    def clear(self):
        """Remove all the entries, keeping their storage for reuse."""
        for index in list(self._recency):
            self._pool.release(index)
        self._recency.clear()
        self._table.clear()
        self._size = 0

    def items(self):
        """Iterate over `(key, value)` pairs, from the most recently used to
        the least recently used, without changing the recency order."""
        # Snapshot, since retrieving a value during iteration reorders the list
        for index in list(self._recency):
            if self._pool.in_use(index):
                yield (self._pool.key(index), self._pool.value(index))

    def keys(self):
        for key, _ in self.items():
            yield key

    def values(self):
        for _, value in self.items():
            yield value

    def _evict(self):
        index = self._recency.peek_tail()
        logger.debug('Evicting key %r', self._pool.key(index))
        self._discard(index)

    def _discard(self, index):
        key = self._pool.key(index)
        self._recency.detach(index)
        self._table.erase(key)
        self._pool.release(index)
        self._size -= 1

    def __contains__(self, key):
        return self.find(key)

    def __len__(self):
        return self._size

    def __getitem__(self, key):
        return self.get(key)

    def __setitem__(self, key, value):
        self.add(key, value)

    def __iter__(self):
        return self.keys()

    def __str__(self):
        return str(dict(self.items()))

    def __repr__(self):
        return f'{type(self).__name__}(capacity={self._capacity}, size={self._size})'
