"""Specifies hash functions."""

# Copyright 2026 memodigest authors

# This file is part of memodigest.
# See `License` for details of license and warranty.

import hashlib

def hashChunks(chunks):
    """Computes git-style hash of the concatenation of a list of byte chunks.

    Each chunk may be bytes or any object supporting the buffer protocol with
    a byte-sized item (e.g. a contiguous uint8 numpy array), so large buffers
    can be hashed without first being joined.
    """
    size = sum([ memoryview(chunk).nbytes for chunk in chunks ])
    hasher = hashlib.sha1()
    hasher.update(('blob '+str(size)+'\0').encode('ascii'))
    for chunk in chunks:
        hasher.update(chunk)
    return hasher.hexdigest()

def hashString(strr):
    """Computes git-style hash of a string."""
    if isinstance(strr, str):
        strr = strr.encode('utf-8')
    return hashChunks([strr])
