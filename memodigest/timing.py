"""Time and timing helper functions."""

# Copyright 2026 memodigest authors

# This file is part of memodigest.
# See `License` for details of license and warranty.

import logging
import time

def timed(func, msg = None):
    """Returns a version of func which logs how long each call takes.

    (probably based on http://www.daniweb.com/software-development/python/code/216610)
    """
    if msg is None:
        msg = getattr(func, '__name__', repr(func))+' took'
    def ret(*args, **kwargs):
        t1 = time.time()
        res = func(*args, **kwargs)
        t2 = time.time()
        logging.info('%s %0.3f ms' % (msg, (t2 - t1) * 1000.0))
        return res
    return ret
