#!/usr/bin/python -u

"""Times repeated inversion of a large random matrix using memoizingInv."""

# Copyright 2026 memodigest authors

# This file is part of memodigest.
# See `License` for details of license and warranty.

import argparse
import logging
import sys

import numpy as np

from memodigest.mylinalg import memoizingInv
from memodigest.timing import timed

def main(rawArgs):
    parser = argparse.ArgumentParser(
        description = 'Times repeated inversion of a large random matrix.',
        formatter_class = argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        '--size', dest = 'size', type = int, default = 1000, metavar = 'N',
        help = 'number of rows (and columns) of the matrix'
    )
    parser.add_argument(
        '--seed', dest = 'seed', type = int, default = 0,
        help = 'random seed used to generate the matrix'
    )
    args = parser.parse_args(rawArgs[1:])

    logging.basicConfig(level = logging.INFO, format = '%(message)s')

    a = np.random.RandomState(args.seed).randn(args.size, args.size)
    invTimed = timed(memoizingInv, msg = 'inverting %s x %s matrix took' %
                     (args.size, args.size))
    aInv = invTimed(a)
    aInvAgain = invTimed(a)
    assert aInvAgain is aInv
    logging.info('cache: %s' % (memoizingInv.cacheInfo(),))

    return 0

if __name__ == '__main__':
    retCode = main(sys.argv)
    sys.exit(retCode)
