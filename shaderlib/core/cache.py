"""
The compiled-text cache, keyed by content hash.
"""


class CompiledTextCache:
    """A cache for compiled shader text.

    Entries are never replaced: storing under an existing key is a no-op,
    so two instances compiling the same program in the same frame end up
    with one entry.
    """

    def __init__(self, name="compiled_text"):
        assert isinstance(name, str)
        self.name = name
        self._texts = {}
        self._enabled = True
        self.hits = 0
        self.misses = 0

    def __contains__(self, key):
        return self._enabled and key in self._texts

    def __len__(self):
        return len(self._texts)

    def get_stats(self):
        """Get the number of entries, hits and misses."""
        return len(self._texts), self.hits, self.misses

    def enable(self):
        """Enable this cache."""
        self._enabled = True

    def disable(self):
        """Disable this cache. A disabled cache always misses."""
        self._enabled = False

    def clear(self, stats=True):
        """Remove all entries, and reset the counters unless stats is False."""
        self._texts.clear()
        if stats:
            self.hits = 0
            self.misses = 0

    def get(self, key):
        """Get the cached text or None."""
        if self._enabled:
            try:
                text = self._texts[key]
            except KeyError:
                text = None
                self.misses += 1
            else:
                self.hits += 1
        else:
            text = None
        return text

    def set(self, key, text):
        """Store the given text under the given key, unless the key is already present."""
        self._texts.setdefault(key, text)
