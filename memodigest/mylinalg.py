"""Slightly customized versions of numpy / scipy linalg methods.

The standard numpy and scipy linalg routines both cope badly with
0-dimensional matrices or vectors. This module wraps inv and solve to check
for these special cases, and provides memoized versions of both, which are
useful when the same (possibly large) system is solved repeatedly.

For example:
    a = np.random.randn(1000, 1000)
    aInv = memoizingInv(a)  # slow
    aInv = memoizingInv(a)  # fast, since only the digest of a is computed
"""

# Copyright 2026 memodigest authors

# This file is part of memodigest.
# See `License` for details of license and warranty.

import numpy as np
import numpy.linalg as la
import scipy.linalg as sla

from memodigest.memoize import memoize

def inv(a):
    if np.shape(a) == (0, 0):
        return np.eye(0)
    else:
        return la.inv(a)

def solve(a, b, assume_a = 'gen'):
    if np.shape(a) == (0, 0) and np.shape(b)[0] == 0:
        return np.zeros(np.shape(b))
    else:
        return sla.solve(a, b, assume_a = assume_a)

memoizingInv = memoize(inv)
memoizingSolve = memoize(solve)
