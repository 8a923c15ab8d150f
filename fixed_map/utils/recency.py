from fixed_map.utils.pool import NIL


class RecencyList:
    """Doubly linked list of slots of a `NodePool`, ordered by recency.

    The head is the most recently used slot and the tail the least recently
    used one. The links are stored in the pool itself, so that detaching a slot
    or moving it to the head only rewrites a few integers.

    Parameters
    ----------
    pool : `NodePool` instance
        The storage holding the links of the slots.
    """
    def __init__(self, pool):
        self.pool = pool
        self.head = NIL
        self.tail = NIL
        self._length = 0

    def detach(self, index):
        prev_links, next_links = self.pool.prev_links, self.pool.next_links
        link_prev, link_next = int(prev_links[index]), int(next_links[index])

        if link_prev != NIL:
            next_links[link_prev] = link_next
        else:
            self.head = link_next

        if link_next != NIL:
            prev_links[link_next] = link_prev
        else:
            self.tail = link_prev

        prev_links[index] = next_links[index] = NIL
        self._length -= 1

    def promote_to_head(self, index):
        prev_links, next_links = self.pool.prev_links, self.pool.next_links

        prev_links[index] = NIL
        next_links[index] = self.head
        if self.head != NIL:
            prev_links[self.head] = index
        else:
            # Empty list
            self.tail = index
        self.head = index
        self._length += 1

    def touch(self, index):
        if index == self.head:
            return
        self.detach(index)
        self.promote_to_head(index)

    def peek_tail(self):
        return None if (self.tail == NIL) else self.tail

    def clear(self):
        self.head = self.tail = NIL
        self._length = 0

    def __len__(self):
        return self._length

    def __iter__(self):
        next_links = self.pool.next_links
        index = self.head
        while index != NIL:
            yield index
            index = int(next_links[index])
