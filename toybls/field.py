"""
Scalar field of BLS12-381.

Every value used for polynomial coefficients, shares, Lagrange coefficients and
signing keys lives in Z_r where r is the order of the G1/G2 subgroups.
Scalar reduces modulo r on every construction so an unreduced integer never
reaches a group operation.
"""

import secrets

from py_ecc.optimized_bls12_381 import curve_order
from py_ecc.utils import prime_field_inv

from .errors import CurveLibraryFailure

order = curve_order
SCALAR_LENGTH = 32

# Bytes drawn per random scalar. 64 bytes keeps the modulo bias below 2^-128.
_SAMPLE_LENGTH = 64


def scalar_inv_mod_order(x):
    """
    Compute an inverse for x modulo order, assuming that x
    is not divisible by order.
    """
    if x % order == 0:
        raise ZeroDivisionError("Impossible inverse")
    return prime_field_inv(x, order)


class Scalar:
    __slots__ = ("value",)

    def __init__(self, value=0):
        if isinstance(value, Scalar):
            value = value.value
        elif not isinstance(value, int):
            raise TypeError(f"Scalar needs an int, got {type(value).__name__}")
        object.__setattr__(self, "value", value % order)

    def __setattr__(self, name, value):
        raise AttributeError("Scalar is immutable")

    @classmethod
    def random(cls, rand_bytes=secrets.token_bytes):
        return cls(int.from_bytes(rand_bytes(_SAMPLE_LENGTH), byteorder="big"))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Scalar":
        """Decode a canonical 32 byte big endian scalar."""
        if len(data) != SCALAR_LENGTH:
            raise CurveLibraryFailure(
                f"scalar must be {SCALAR_LENGTH} bytes, got {len(data)}")
        value = int.from_bytes(data, byteorder="big")
        if value >= order:
            raise CurveLibraryFailure("scalar is not reduced modulo the field order")
        return cls(value)

    def to_bytes(self) -> bytes:
        return self.value.to_bytes(SCALAR_LENGTH, byteorder="big")

    def inv(self) -> "Scalar":
        return Scalar(scalar_inv_mod_order(self.value))

    def __add__(self, other):
        return Scalar(self.value + _as_int(other))

    __radd__ = __add__

    def __sub__(self, other):
        return Scalar(self.value - _as_int(other))

    def __rsub__(self, other):
        return Scalar(_as_int(other) - self.value)

    def __mul__(self, other):
        return Scalar(self.value * _as_int(other))

    __rmul__ = __mul__

    def __neg__(self):
        return Scalar(-self.value)

    def __eq__(self, other):
        # plain ints compare unreduced so equal values hash alike
        if isinstance(other, Scalar):
            return self.value == other.value
        if isinstance(other, int):
            return self.value == other
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    def __bool__(self):
        return self.value != 0

    def __int__(self):
        return self.value

    __index__ = __int__

    def __repr__(self):
        # Scalars are secrets more often than not, keep them out of logs and tracebacks.
        return "Scalar(...)"


def _as_int(other):
    if isinstance(other, Scalar):
        return other.value
    if isinstance(other, int):
        return other % order
    raise TypeError(f"cannot combine Scalar with {type(other).__name__}")
