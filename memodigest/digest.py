"""Deterministic digests of argument values for use as cache keys.

A value is serialized to a tagged byte encoding which is then hashed using
hashChunks. Every encoded value is self-delimiting (scalars carry their
payload length, containers their element count), so concatenating the
encodings of several values is unambiguous.

The encoding depends only on the logical value of its input:
    - mappings and sets are encoded with their entries sorted by encoded
      bytes, so insertion or iteration order does not matter
    - real numbers are encoded as exact rationals, so by default any two
      numbers which compare equal in Python (e.g. 3, 3.0, True and
      Fraction(3, 1)) give the same digest; all NaNs give the same digest
    - numpy arrays are encoded as dtype, shape and raw C-order data, so an
      array never has the same digest as a list, nor as an equal array of a
      different dtype
    - classes and functions are encoded by reference (their pickled name),
      and any other object by value, via its pickle reduction: the
      reconstructor, arguments and state are encoded recursively like any
      other value. Objects which can't be pickled raise DigestError, as do
      cyclic structures and structures nested too deeply to encode

If typed is True then each value is additionally tagged with its concrete
type, so for example 3 and 3.0 give different digests.
"""

# Copyright 2026 memodigest authors

# This file is part of memodigest.
# See `License` for details of license and warranty.

import contextlib
import math
import numbers
import pickle
import types
from collections.abc import Mapping

import numpy as np

from memodigest.hash import hashChunks

_pickleProtocol = 4

_globalTypes = (type, types.FunctionType, types.BuiltinFunctionType,
                types.ModuleType)

class DigestError(Exception):
    pass

def _typeName(value):
    cls = type(value)
    return cls.__module__+'.'+cls.__qualname__

def _frame(tag, payload):
    return tag+str(len(payload)).encode('ascii')+b':'+payload

def _count(tag, n):
    return tag+str(n).encode('ascii')+b':'

def _join(chunks):
    return b''.join([ memoryview(chunk).tobytes() for chunk in chunks ])

def roundTrip(obj):
    return pickle.loads(pickle.dumps(obj, protocol = _pickleProtocol))

class _Encoder(object):
    """Appends the encoding of values to a list of byte chunks."""
    def __init__(self, typed):
        self.typed = typed

        # ids of the containers currently being encoded
        self.active = set()

    def encode(self, value, out):
        if self.typed:
            out.append(_frame(b'T', _typeName(value).encode('utf-8')))

        if value is None:
            out.append(b'N')
        elif isinstance(value, (bool, np.bool_)):
            if self.typed:
                out.append(b'b1' if value else b'b0')
            else:
                self.encodeInt(int(value), out)
        elif isinstance(value, numbers.Integral):
            self.encodeInt(int(value), out)
        elif isinstance(value, numbers.Real):
            self.encodeReal(value, out)
        elif isinstance(value, numbers.Complex):
            value = complex(value)
            if value.imag == 0.0:
                self.encodeReal(value.real, out)
            else:
                out.append(b'c')
                self.encodeReal(value.real, out)
                self.encodeReal(value.imag, out)
        elif isinstance(value, str):
            out.append(_frame(b's', value.encode('utf-8', 'surrogatepass')))
        elif isinstance(value, (bytes, bytearray)):
            out.append(_frame(b'y', bytes(value)))
        elif isinstance(value, memoryview):
            out.append(_frame(b'y', value.tobytes()))
        elif isinstance(value, np.ndarray):
            self.encodeArray(value, out)
        elif isinstance(value, np.generic):
            self.encodeArray(np.asarray(value), out)
        elif isinstance(value, tuple):
            self.encodeSequence(b't', value, out)
        elif isinstance(value, list):
            self.encodeSequence(b'l', value, out)
        elif isinstance(value, Mapping):
            self.encodeMapping(value, out)
        elif isinstance(value, (set, frozenset)):
            self.encodeSet(value, out)
        else:
            self.encodeObject(value, out)

    def encodeInt(self, n, out):
        # (hex since decimal conversion of huge ints is length-limited)
        out.append(_frame(b'i', format(n, 'x').encode('ascii')))

    def encodeReal(self, value, out):
        if isinstance(value, numbers.Rational):
            num, den = int(value.numerator), int(value.denominator)
        else:
            x = float(value)
            if math.isnan(x):
                out.append(b'fnan')
                return
            elif math.isinf(x):
                out.append(b'f+inf' if x > 0.0 else b'f-inf')
                return
            num, den = x.as_integer_ratio()
        if den == 1:
            self.encodeInt(num, out)
        else:
            out.append(_frame(b'q', (format(num, 'x')+'/'+format(den, 'x')).encode('ascii')))

    def encodeArray(self, arr, out):
        if arr.dtype.hasobject:
            out.append(_frame(b'A', repr(arr.shape).encode('ascii')))
            self.encode(arr.tolist(), out)
        else:
            header = repr((arr.dtype.descr, arr.shape))
            out.append(_frame(b'a', header.encode('utf-8')))
            flat = np.ascontiguousarray(arr).reshape(-1).view(np.uint8)
            out.append(_count(b'#', flat.nbytes))
            out.append(flat)

    def _enter(self, value):
        ident = id(value)
        if ident in self.active:
            raise DigestError('cannot digest cyclic structure of type %s' %
                              _typeName(value))
        self.active.add(ident)
        return ident

    def encodeSequence(self, tag, value, out):
        ident = self._enter(value)
        try:
            out.append(_count(tag, len(value)))
            for elem in value:
                self.encode(elem, out)
        finally:
            self.active.discard(ident)

    def encodeMapping(self, value, out):
        ident = self._enter(value)
        try:
            entries = []
            for key, elem in value.items():
                entry = []
                self.encode(key, entry)
                self.encode(elem, entry)
                entries.append(_join(entry))
        finally:
            self.active.discard(ident)
        entries.sort()
        out.append(_count(b'd', len(entries)))
        out.extend(entries)

    def encodeSet(self, value, out):
        ident = self._enter(value)
        try:
            elems = []
            for elem in value:
                encoded = []
                self.encode(elem, encoded)
                elems.append(_join(encoded))
        finally:
            self.active.discard(ident)
        elems.sort()
        out.append(_count(b'e', len(elems)))
        out.extend(elems)

    def encodeGlobal(self, value, out):
        # (classes and functions are pickled by reference)
        try:
            pickled = pickle.dumps(roundTrip(value), protocol = _pickleProtocol)
        except (pickle.PickleError, TypeError, AttributeError, ValueError) as e:
            raise DigestError('cannot digest value of type %s (%s)' %
                              (_typeName(value), e)) from e
        out.append(_frame(b'g', pickled))

    def encodeObject(self, value, out):
        if isinstance(value, _globalTypes):
            self.encodeGlobal(value, out)
            return
        try:
            reduced = value.__reduce_ex__(_pickleProtocol)
        except (pickle.PickleError, TypeError, AttributeError, ValueError) as e:
            raise DigestError('cannot digest value of type %s (%s)' %
                              (_typeName(value), e)) from e
        if isinstance(reduced, str):
            self.encodeGlobal(value, out)
            return

        # N.B. the reconstructor, its arguments and the state are encoded
        #   like any other value, so e.g. a set stored as an attribute is
        #   encoded independently of its iteration order.
        reduced = tuple(reduced) + (None,) * (5 - len(reduced))
        reconstructor, args, state, listItems, dictItems = reduced[:5]
        ident = self._enter(value)
        try:
            out.append(b'o')
            self.encode(reconstructor, out)
            self.encode(args, out)
            self.encode(state, out)
            self.encode(None if listItems is None else list(listItems), out)
            self.encode(None if dictItems is None else dict(dictItems), out)
        finally:
            self.active.discard(ident)

    def encodeDefault(self, value, out):
        """Encodes the default value of a parameter not given by the caller.

        A default which can't be digested is encoded as a fixed marker, which
        identifies it since defaults are fixed per function.
        """
        encoded = []
        try:
            self.encode(value, encoded)
        except DigestError:
            out.append(b'D')
        else:
            out.extend(encoded)

@contextlib.contextmanager
def _nestingAsDigestError():
    try:
        yield
    except RecursionError as e:
        raise DigestError('cannot digest value nested too deeply') from e

def encodeValue(value, typed = False):
    """Returns the canonical byte encoding of a value."""
    out = []
    with _nestingAsDigestError():
        _Encoder(typed).encode(value, out)
    return _join(out)

def digestValue(value, typed = False):
    """Computes the digest of a single value."""
    out = []
    with _nestingAsDigestError():
        _Encoder(typed).encode(value, out)
    return hashChunks(out)

def digestCall(signature, args, kwargs, typed = False):
    """Computes the digest of the arguments of a function call.

    If signature (an inspect.Signature) is given and the arguments bind to
    it, the bound arguments with defaults applied are digested, so that
    equivalent spellings of a call (positional or keyword, default given
    explicitly or not) have the same digest. A default which can't be
    digested (e.g. a lambda) only prevents digesting calls which pass that
    argument explicitly. Otherwise the raw positional and keyword arguments
    are digested, with keyword order ignored.
    """
    bound = None
    if signature is not None:
        try:
            bound = signature.bind(*args, **kwargs)
        except TypeError:
            # (the call itself will fail in the same way)
            bound = None

    encoder = _Encoder(typed)
    out = []
    with _nestingAsDigestError():
        if bound is not None:
            given = set(bound.arguments)
            bound.apply_defaults()
            out.append(_count(b'B', len(bound.arguments)))
            for name, value in bound.arguments.items():
                encoder.encode(name, out)
                if name in given:
                    encoder.encode(value, out)
                else:
                    encoder.encodeDefault(value, out)
        else:
            out.append(b'R')
            encoder.encode(tuple(args), out)
            encoder.encode(dict(kwargs), out)
    return hashChunks(out)
