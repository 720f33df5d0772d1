"""Lookup index whose keys may collide."""


class MultiValueIndex:
    """Maps a key to the ordered list of every value inserted under it.

    Papers sharing a title or a volume-author key are expected, so an entry
    is always a non-empty list in insertion order and never overwritten.
    """

    def __init__(self):
        self._entries = {}

    def add(self, key, value):
        self._entries.setdefault(key, []).append(value)

    def get(self, key):
        return list(self._entries.get(key, []))

    def first(self, key):
        values = self._entries.get(key)
        return values[0] if values else None

    def has_multiple_values(self, key):
        return len(self._entries.get(key, [])) > 1

    def keys(self):
        return self._entries.keys()

    def sorted_keys(self):
        return sorted(self._entries)

    def items(self):
        return ((key, list(values)) for key, values in self._entries.items())

    def duplicates(self):
        return {key: list(values) for key, values in self._entries.items() if len(values) > 1}

    def value_count(self):
        return sum(len(values) for values in self._entries.values())

    def __contains__(self, key):
        return key in self._entries

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"MultiValueIndex(keys={len(self._entries)}, values={self.value_count()})"
