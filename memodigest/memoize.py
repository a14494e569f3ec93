"""Memoization of functions."""

# Copyright 2026 memodigest authors

# This file is part of memodigest.
# See `License` for details of license and warranty.

import contextlib
import functools
import inspect
import logging
import threading
import types

from memodigest.cache import Cache
from memodigest.digest import digestCall

def memoize(fn = None, typed = False):
    """Returns a memoized version of fn.

    May also be used as a decorator, either bare or as memoize(typed = True).
    """
    if fn is None:
        return functools.partial(memoize, typed = typed)
    return MemoizedFn(fn, typed = typed)

def _getSignature(fn):
    try:
        return inspect.signature(fn)
    except (TypeError, ValueError):
        return None

class MemoizedFn(object):
    """Digest-based function memoization.

    Results of fn are stored in cache, keyed by a digest of the arguments
    (see memodigest.digest). Arguments need not be hashable but must be
    digestable. If fn raises an exception nothing is stored, so the next
    call with the same arguments calls fn again.

    At most one call to fn per key is in progress at any one time. Other
    callers with the same key wait for that call to finish and then use its
    result.
    """
    def __init__(self, fn, typed = False):
        self.fn = fn
        self.typed = typed

        self.cache = Cache()
        self.signature = _getSignature(fn)
        if self.signature is None:
            logging.warning('memoize: no signature available for %r, so'
                            ' positional and keyword forms of the same'
                            ' argument will be cached separately' % (fn,))
        # key -> [lock, number of callers holding or waiting for lock]
        self._inFlight = dict()
        self._inFlightLock = threading.Lock()

        functools.update_wrapper(self, fn, updated = [])

    def __repr__(self):
        return 'MemoizedFn(%r, typed = %r)' % (self.fn, self.typed)

    def __get__(self, obj, _ = None):
        if obj is None:
            return self
        return types.MethodType(self, obj)

    def keyFor(self, *args, **kwargs):
        """Returns the cache key that calling with these arguments uses."""
        return digestCall(self.signature, args, kwargs, typed = self.typed)

    @contextlib.contextmanager
    def _computing(self, key):
        with self._inFlightLock:
            entry = self._inFlight.get(key)
            if entry is None:
                entry = [threading.RLock(), 0]
                self._inFlight[key] = entry
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._inFlightLock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._inFlight[key]

    def _lookup(self, key):
        """Returns (True, value) on a hit and (False, None) on a miss."""
        with self.cache.lock:
            if self.cache.has_key(key):
                self.cache.recordHit()
                return True, self.cache.get(key)
        return False, None

    def __call__(self, *args, **kwargs):
        key = self.keyFor(*args, **kwargs)

        found, value = self._lookup(key)
        if found:
            return value

        with self._computing(key):
            # (another caller may have stored the value while we waited)
            found, value = self._lookup(key)
            if found:
                return value
            value = self.fn(*args, **kwargs)
            self.cache.set(key, value)
            self.cache.recordMiss()
        return value

    def cacheInfo(self):
        return self.cache.info()

    def cacheClear(self):
        self.cache.clear()
