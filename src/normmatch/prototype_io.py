"""
prototype_io.py
Reads and writes the shared cluster-prototype text format: sample size,
parameter descriptors and prototype records.
"""
import math
import numpy as np
from .errors import FormatError
from .params import ParamDescriptor
from .prototype import (Prototype, SPHERICAL, ELLIPTICAL, MIXED, AUTOMATIC,
                        NORMAL, UNIFORM, RANDOM)

# Format is matched on the first letter of each keyword
STYLE_KEYWORDS = {'s': SPHERICAL, 'e': ELLIPTICAL, 'm': MIXED, 'a': AUTOMATIC}
DISTRIB_KEYWORDS = {'n': NORMAL, 'u': UNIFORM, 'r': RANDOM}


class TokenReader:
    """Whitespace-delimited token stream over a text source that remembers line numbers."""
    def __init__(self, stream, source=None):
        self.source = source
        self._tokens = self._scan(stream)
        self._pending = None
        self.line = 0

    @staticmethod
    def _scan(stream):
        for lineno, text in enumerate(stream, start=1):
            for token in text.split():
                yield token, lineno

    def peek(self):
        """Next (token, line) without consuming it, or None at end of input."""
        if self._pending is None:
            self._pending = next(self._tokens, None)
        return self._pending

    def at_eof(self):
        return self.peek() is None

    def next_token(self, expected):
        item = self.peek()
        if item is None:
            raise self.error("Unexpected end of input", expected=expected)
        self._pending = None
        token, self.line = item
        return token

    def read_int(self, expected, minimum=None):
        token = self.next_token(expected)
        try:
            value = int(token)
        except ValueError:
            raise self.error("Malformed integer", expected=expected, found=token) from None
        if minimum is not None and value < minimum:
            raise self.error(f"Value below {minimum}", expected=expected, found=token)
        return value

    def read_float(self, expected, allow_inf=False):
        token = self.next_token(expected)
        try:
            value = float(token)
        except ValueError:
            raise self.error("Malformed number", expected=expected, found=token) from None
        if math.isnan(value) or (math.isinf(value) and not allow_inf):
            raise self.error("Non-finite number", expected=expected, found=token)
        return value

    def read_floats(self, n, expected, allow_inf=False):
        return np.array([self.read_float(expected, allow_inf) for _ in range(n)], dtype=np.float64)

    def read_keyword(self, keywords, expected):
        token = self.next_token(expected)
        value = keywords.get(token[0].lower())
        if value is None:
            raise self.error("Unknown keyword", expected=expected, found=token)
        return value

    def error(self, message, expected=None, found=None):
        # line of the last consumed token; an empty source reports line 1
        return FormatError(message, line=self.line or 1, expected=expected, found=found, source=self.source)


def read_sample_size(reader):
    """Number of parameters in every sample and prototype; must be positive."""
    return reader.read_int('positive parameter count', minimum=1)


def read_param_desc(reader, num_params):
    """
    Reads one descriptor per parameter.
    Each descriptor is: circular|linear essential|nonEssential min max
    """
    descs = []
    for _ in range(num_params):
        circular = reader.read_keyword({'c': True, 'l': False}, 'circular|linear')
        non_essential = reader.read_keyword({'e': False, 'n': True}, 'essential|nonEssential')
        lo = reader.read_float('parameter min')
        hi = reader.read_float('parameter max')
        if hi < lo:
            raise reader.error("Parameter max below min", expected=f'max >= {lo}', found=str(hi))
        descs.append(ParamDescriptor(circular, non_essential, lo, hi))
    return tuple(descs)


def read_prototype(reader, num_params):
    """
    Reads one prototype record:
        significant|insignificant <style> <numSamples>
        <mean> x num_params
        [<distribution> x num_params]   (mixed style only)
        <variance> x (1 if spherical else num_params)
    Returns:
        Prototype
    """
    significant = reader.read_keyword({'s': True, 'i': False}, 'significant|insignificant')
    style = reader.read_keyword(STYLE_KEYWORDS, 'prototype style')
    num_samples = reader.read_int('sample count', minimum=0)
    mean = reader.read_floats(num_params, 'prototype mean')
    distrib = None
    if style == MIXED:
        distrib = [reader.read_keyword(DISTRIB_KEYWORDS, 'normal|uniform|random') for _ in range(num_params)]
    n_var = 1 if style == SPHERICAL else num_params
    # an infinite variance is a zero weight: the dimension never adds to the distance
    variance = reader.read_floats(n_var, 'prototype variance', allow_inf=True)
    if np.any(variance < 0):
        raise reader.error("Negative variance", expected='variance >= 0', found=str(variance.min()))
    return Prototype(mean, variance, style=style, significant=significant,
                     num_samples=num_samples, distrib=distrib)


def _floats(values):
    return ' '.join(f"{v:.9g}" for v in values)


def write_param_desc(stream, param_desc):
    for desc in param_desc:
        stream.write(f"{'circular' if desc.circular else 'linear':<9}"
                     f"{'nonEssential' if desc.non_essential else 'essential':<13}"
                     f"{desc.min:.9g} {desc.max:.9g}\n")


def write_prototype(stream, proto):
    stream.write(f"{'significant' if proto.significant else 'insignificant':<14}"
                 f"{proto.style} {proto.num_samples}\n")
    stream.write(f"\t{_floats(proto.mean)}\n")
    if proto.style == MIXED:
        stream.write(f"\t{' '.join(proto.distrib)}\n")
    if proto.style == SPHERICAL:
        stream.write(f"\t{proto.variance[0]:.9g}\n")
    else:
        stream.write(f"\t{_floats(proto.variance)}\n")
