"""Unit tests for customized linalg routines and their memoized versions."""

# Copyright 2026 memodigest authors

# This file is part of memodigest.
# See `License` for details of license and warranty.

import time
import unittest

import numpy as np
import numpy.linalg as la
from numpy.random import randn

from memodigest import mylinalg
from memodigest.memoize import memoize

class FnEval(object):
    def __init__(self, f):
        self.f = f

        self.evalCount = 0

    def __call__(self, a):
        self.evalCount += 1
        return self.f(a)

class TestMyLinalg(unittest.TestCase):
    def setUp(self):
        self.deepTest = False

    def test_emptyMatrices(self):
        assert np.shape(mylinalg.inv(np.zeros((0, 0)))) == (0, 0)
        assert np.shape(mylinalg.solve(np.zeros((0, 0)), np.zeros((0,)))) == (0,)
        assert np.shape(mylinalg.memoizingInv(np.zeros((0, 0)))) == (0, 0)

    def test_inv(self, its = 10):
        for it in range(its):
            n = np.random.randint(1, 10)
            a = randn(n, n) + n * np.eye(n)
            assert np.allclose(np.dot(mylinalg.inv(a), a), np.eye(n))

    def test_solve(self, its = 10):
        for it in range(its):
            n = np.random.randint(1, 10)
            a = randn(n, n) + n * np.eye(n)
            b = randn(n)
            x = mylinalg.solve(a, b)
            assert np.allclose(np.dot(a, x), b)
            assert np.allclose(mylinalg.memoizingSolve(a, b), x)
            assert np.allclose(mylinalg.memoizingSolve(a, b = b), x)
        aPos = np.eye(3) * 2.0
        assert np.allclose(mylinalg.memoizingSolve(aPos, np.ones(3), assume_a = 'pos'),
                           np.ones(3) * 0.5)

    def test_memoizingInv(self):
        a = randn(4, 4) + 4.0 * np.eye(4)
        sizeBefore = len(mylinalg.memoizingInv.cache)
        aInv = mylinalg.memoizingInv(a)
        assert mylinalg.memoizingInv(a.copy()) is aInv
        assert len(mylinalg.memoizingInv.cache) == sizeBefore + 1
        mylinalg.memoizingInv.cache.remove(mylinalg.memoizingInv.keyFor(a))
        assert len(mylinalg.memoizingInv.cache) == sizeBefore

    def test_cachingBenefit(self):
        """Second call with a large matrix is faster and does not recompute."""
        n = 1000 if self.deepTest else 400
        a = randn(n, n)
        fe = FnEval(la.inv)
        fm = memoize(fe)

        t1 = time.time()
        aInv1 = fm(a)
        t2 = time.time()
        aInv2 = fm(a)
        t3 = time.time()

        assert fe.evalCount == 1
        assert aInv2 is aInv1
        assert (t3 - t2) < (t2 - t1)

def suite(deepTest = False):
    # below definition nested here so that unittest search only finds shallow
    #   version of tests by default
    class DeepTestMyLinalg(TestMyLinalg):
        def setUp(self):
            self.deepTest = True
    if deepTest:
        return unittest.TestLoader().loadTestsFromTestCase(DeepTestMyLinalg)
    else:
        return unittest.TestLoader().loadTestsFromTestCase(TestMyLinalg)

if __name__ == '__main__':
    unittest.main()
