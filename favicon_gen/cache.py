"""
In-memory record of the last successful generation per source/output pair.

Entries live as long as the cache instance; there is no persistence and no
eviction. The cache is not locked: it is only touched from the event loop
thread. Two overlapping generations for the same key may both miss and
both regenerate, in which case the last one to finish wins.
"""

from typing import NamedTuple, Optional

from favicon_gen.options import GenerationOptions


class CacheKey(NamedTuple):
    source: str
    output_dir: str


class CacheEntry(NamedTuple):
    mtime_ns: int
    options: GenerationOptions


class GenerationCache:
    def __init__(self):
        self._entries = {}

    def lookup(self, key: CacheKey) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def store(self, key: CacheKey, mtime_ns: int, options: GenerationOptions):
        self._entries[key] = CacheEntry(mtime_ns, options)

    def is_fresh(self, key: CacheKey, mtime_ns: int, options: GenerationOptions) -> bool:
        """True if ``key`` was generated from this mtime (or newer) with equal options."""
        entry = self.lookup(key)
        if entry is None:
            return False
        return entry.mtime_ns >= mtime_ns and entry.options.fingerprint() == options.fingerprint()

    def clear(self):
        self._entries.clear()

    def __len__(self):
        return len(self._entries)
