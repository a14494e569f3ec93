"""Inspectable key-value store used by memoized functions."""

# Copyright 2026 memodigest authors

# This file is part of memodigest.
# See `License` for details of license and warranty.

import threading
from collections import namedtuple

CacheInfo = namedtuple('CacheInfo', ['hits', 'misses', 'currsize'])

class KeyNotFound(KeyError):
    pass

class Cache(object):
    """Dictionary-based cache with hit and miss counters.

    The underlying dict is available as map and may be inspected or modified
    directly. The methods below all hold lock while accessing map, so a caller
    wanting to perform several operations atomically can hold lock too.
    """
    def __init__(self):
        self.map = dict()
        self.lock = threading.RLock()

        self.hits = 0
        self.misses = 0

    def __repr__(self):
        return 'Cache(<%s entries>)' % len(self)

    def __len__(self):
        with self.lock:
            return len(self.map)

    def __contains__(self, key):
        return self.has_key(key)

    def get(self, key):
        with self.lock:
            try:
                return self.map[key]
            except KeyError:
                raise KeyNotFound(key) from None

    def set(self, key, value):
        with self.lock:
            self.map[key] = value

    def has_key(self, key):
        with self.lock:
            return key in self.map

    def keys(self):
        with self.lock:
            return list(self.map.keys())

    def items(self):
        with self.lock:
            return list(self.map.items())

    def remove(self, key):
        with self.lock:
            try:
                del self.map[key]
            except KeyError:
                raise KeyNotFound(key) from None

    def clear(self):
        with self.lock:
            self.map.clear()

    def recordHit(self):
        with self.lock:
            self.hits += 1

    def recordMiss(self):
        with self.lock:
            self.misses += 1

    def info(self):
        with self.lock:
            return CacheInfo(self.hits, self.misses, len(self.map))
