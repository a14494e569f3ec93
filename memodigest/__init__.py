"""Memoization of functions keyed by deterministic digests of their arguments."""

# Copyright 2026 memodigest authors

# This file is part of memodigest.
# See `License` for details of license and warranty.

from memodigest.cache import Cache, CacheInfo, KeyNotFound
from memodigest.digest import DigestError, digestValue, digestCall
from memodigest.memoize import memoize, MemoizedFn
