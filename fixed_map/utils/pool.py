import numpy as np
import logging

logger = logging.getLogger(__name__)

NIL = -1


class AllocationError(MemoryError):
    """Raised when the pool cannot provide storage for a new node."""


class NodePool:
    """Indexed storage for the nodes of a `FixedMap`.

    Each node lives in a slot `i` of the pool: its key and value are stored in
    `keys[i]` and `values[i]`, and its position in the recency list in the
    integer arrays `prev_links[i]` and `next_links[i]` (`NIL` meaning no
    link). Retired slots are pushed on a stack of free indices and reused by
    later calls to `acquire`, so storage only grows when every slot is in use.

    Parameters
    ----------
    initial_size : int (default: 0)
        Number of slots to allocate up front.

    max_size : int, optional
        Maximum number of slots the pool may ever hold. If None, the pool
        grows without bound.
    """
    def __init__(self, initial_size=0, max_size=None):
        if max_size is not None:
            initial_size = min(initial_size, max_size)
        self.max_size = max_size

        self._prev = np.full((initial_size,), NIL, dtype=np.int_)
        self._next = np.full((initial_size,), NIL, dtype=np.int_)
        self._in_use = np.zeros((initial_size,), dtype=np.bool_)
        self._keys = [None] * initial_size
        self._values = [None] * initial_size

        self._num_slots = 0
        self._free = []

    @property
    def prev_links(self):
        return self._prev

    @property
    def next_links(self):
        return self._next

    @property
    def num_slots(self):
        return self._num_slots

    @property
    def num_free(self):
        return len(self._free)

    @property
    def num_in_use(self):
        return self._num_slots - len(self._free)

    @property
    def storage_size(self):
        return self._prev.shape[0]

    def acquire(self, key, value):
        if self._free:
            index = self._free.pop()
        else:
            if self._num_slots == self.storage_size:
                self._grow()
            index = self._num_slots
            self._num_slots += 1

        self._keys[index] = key
        self._values[index] = value
        self._prev[index] = self._next[index] = NIL
        self._in_use[index] = True
        return index

    def release(self, index):
        if not self.in_use(index):
            raise ValueError(f'Slot {index} is not in use.')

        self._keys[index] = None
        self._values[index] = None
        self._prev[index] = self._next[index] = NIL
        self._in_use[index] = False
        self._free.append(index)

    def in_use(self, index):
        return 0 <= index < self._num_slots and bool(self._in_use[index])

    def key(self, index):
        return self._keys[index]

    def value(self, index):
        return self._values[index]

    def set_value(self, index, value):
        self._values[index] = value

    def clear(self):
        """Drop every slot, live or retired, and reset the storage."""
        logger.debug('Dropping %d slots (%d retired)',
                     self._num_slots, len(self._free))
        self._prev = np.full((0,), NIL, dtype=np.int_)
        self._next = np.full((0,), NIL, dtype=np.int_)
        self._in_use = np.zeros((0,), dtype=np.bool_)
        self._keys = []
        self._values = []
        self._num_slots = 0
        self._free = []

    def _grow(self):
        size = self.storage_size
        if (self.max_size is not None) and (size >= self.max_size):
            logger.error('Node pool exhausted (max_size=%d)', self.max_size)
            raise AllocationError(f'Node pool exhausted: all {size} slots '
                                  'are in use.')

        new_size = max(2 * size, 1)
        if self.max_size is not None:
            new_size = min(new_size, self.max_size)
        extra = new_size - size

        try:
            prev_links = np.concatenate([self._prev, np.full((extra,), NIL, dtype=np.int_)])
            next_links = np.concatenate([self._next, np.full((extra,), NIL, dtype=np.int_)])
            in_use = np.concatenate([self._in_use, np.zeros((extra,), dtype=np.bool_)])
            keys = self._keys + [None] * extra
            values = self._values + [None] * extra
        except MemoryError as error:
            logger.error('Unable to grow the node pool to %d slots', new_size)
            raise AllocationError(f'Unable to allocate {extra} new slots.') from error

        self._prev, self._next, self._in_use = prev_links, next_links, in_use
        self._keys, self._values = keys, values
        logger.debug('Node pool grown from %d to %d slots', size, new_size)
