class LookupTable:
    """Mapping from the keys of a `FixedMap` to the slots holding them.

    The table only stores slot indices; the nodes themselves are owned by the
    `NodePool`.
    """
    def __init__(self):
        self.mapping = {}

    def contains(self, key):
        return key in self.mapping

    def resolve(self, key):
        try:
            return self.mapping[key]
        except KeyError:
            raise KeyError(f'Key {key!r} not in map.') from None

    def insert(self, key, index):
        if key in self.mapping:
            raise KeyError(f'Key {key!r} already in map.')
        self.mapping[key] = index

    def erase(self, key):
        try:
            del self.mapping[key]
        except KeyError:
            raise KeyError(f'Key {key!r} not in map.') from None

    def clear(self):
        self.mapping.clear()

    def __contains__(self, key):
        return key in self.mapping

    def __len__(self):
        return len(self.mapping)

    def __iter__(self):
        return iter(self.mapping)
