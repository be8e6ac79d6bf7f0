"""A prime-order elliptic-curve group with a symmetric bilinear pairing.

Points lie on the supersingular curve y^2 = x^3 + x over F_p with p = 3 (mod 4), in its
subgroup of prime order ``ORDER``. The distortion map (x, y) -> (-x, i*y) turns the reduced
Tate pairing into a symmetric pairing with values in F_{p^2}; it is exposed as ``a @ b``.
"""

from __future__ import annotations

import hashlib
import itertools
import secrets
from dataclasses import dataclass
from typing import Optional, Tuple

ORDER = 2**255 - 19

_Point = Optional[Tuple[int, int]]


class GroupError(ValueError):
    """Raised for malformed encodings of group elements or scalars."""


def _small_primes(limit: int) -> tuple[int, ...]:
    sieve = bytearray([1]) * (limit + 1)
    sieve[0:2] = b"\x00\x00"
    for n in range(2, int(limit**0.5) + 1):
        if sieve[n]:
            sieve[n * n :: n] = bytearray(len(sieve[n * n :: n]))
    return tuple(n for n, flag in enumerate(sieve) if flag)


_SMALL_PRIMES = _small_primes(300)


def _is_probable_prime(n: int) -> bool:
    if n < 2:
        return False
    for small in _SMALL_PRIMES:
        if n % small == 0:
            return n == small
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for base in _SMALL_PRIMES[:12]:
        x = pow(base, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(s - 1):
            x = x * x % n
            if x == n - 1:
                break
        else:
            return False
    return True


def _find_cofactor() -> int:
    # p = c * ORDER - 1 with 4 | c gives p = 3 (mod 4) and #E(F_p) = p + 1 = c * ORDER.
    cofactor = 1 << 256
    while not _is_probable_prime(cofactor * ORDER - 1):
        cofactor += 4
    return cofactor


COFACTOR = _find_cofactor()
FIELD_MODULUS = COFACTOR * ORDER - 1
_FIELD_BYTES = (FIELD_MODULUS.bit_length() + 7) // 8
SCALAR_BYTES = 32
POINT_BYTES = 1 + _FIELD_BYTES

_P = FIELD_MODULUS
_HASH_TO_GROUP_DST = b"thresholdkit-hash-to-group"
_HASH_TO_SCALAR_DST = b"thresholdkit-hash-to-scalar"


def _inv(a: int) -> int:
    return pow(a, -1, _P)


def _sqrt(a: int) -> Optional[int]:
    root = pow(a, (_P + 1) // 4, _P)
    return root if root * root % _P == a % _P else None


def _add(a: _Point, b: _Point) -> _Point:
    if a is None:
        return b
    if b is None:
        return a
    x1, y1 = a
    x2, y2 = b
    if x1 == x2:
        if (y1 + y2) % _P == 0:
            return None
        lam = (3 * x1 * x1 + 1) * _inv(2 * y1) % _P
    else:
        lam = (y2 - y1) * _inv(x2 - x1) % _P
    x3 = (lam * lam - x1 - x2) % _P
    return x3, (lam * (x1 - x3) - y1) % _P


def _mul(point: _Point, k: int) -> _Point:
    result: _Point = None
    addend = point
    while k and addend is not None:
        if k & 1:
            result = _add(result, addend)
        addend = _add(addend, addend)
        k >>= 1
    return result


@dataclass(frozen=True)
class _Fp2:
    """Element re + im*i of F_{p^2} = F_p[i] / (i^2 + 1)."""

    re: int
    im: int

    def __mul__(self, other: _Fp2) -> _Fp2:
        return _Fp2(
            (self.re * other.re - self.im * other.im) % _P,
            (self.re * other.im + self.im * other.re) % _P,
        )

    def __pow__(self, exponent: int) -> _Fp2:
        result, base = _FP2_ONE, self
        while exponent:
            if exponent & 1:
                result = result * base
            base = base * base
            exponent >>= 1
        return result

    def conjugate(self) -> _Fp2:
        return _Fp2(self.re, -self.im % _P)

    def inverse(self) -> _Fp2:
        norm_inv = _inv(self.re * self.re + self.im * self.im)
        return _Fp2(self.re * norm_inv % _P, -self.im * norm_inv % _P)


_FP2_ONE = _Fp2(1, 0)


def _miller(p_point: Tuple[int, int], q_point: Tuple[int, int]) -> _Fp2:
    # Lines are evaluated at the distorted point (-xq, i*yq); vertical lines take values in
    # F_p and vanish under the final exponentiation, so they are left out.
    xp, yp = p_point
    xq, yq = q_point
    f = _FP2_ONE
    xt, yt = xp, yp
    for bit in bin(ORDER)[3:]:
        lam = (3 * xt * xt + 1) * _inv(2 * yt) % _P
        f = f * f * _Fp2((lam * (xq + xt) - yt) % _P, yq)
        x3 = (lam * lam - 2 * xt) % _P
        xt, yt = x3, (lam * (xt - x3) - yt) % _P
        if bit == "1":
            if xt == xp:
                # T == -P: the last step reaches the identity through a vertical line.
                break
            lam = (yp - yt) * _inv(xp - xt) % _P
            f = f * _Fp2((lam * (xq + xt) - yt) % _P, yq)
            x3 = (lam * lam - xt - xp) % _P
            xt, yt = x3, (lam * (xt - x3) - yt) % _P
    return f


def _pairing(a: _Point, b: _Point) -> _Fp2:
    if a is None or b is None:
        return _FP2_ONE
    f = _miller(a, b)
    f = f.conjugate() * f.inverse()  # f^(p-1)
    return f**COFACTOR


def _as_bytes(data: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


@dataclass(frozen=True)
class Scalar:
    """An element of the scalar field Z_ORDER."""

    value: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError("scalar value must be an int")
        object.__setattr__(self, "value", self.value % ORDER)

    @staticmethod
    def _coerce(other: object) -> Optional[int]:
        if isinstance(other, Scalar):
            return other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return other
        return None

    def __add__(self, other: object) -> Scalar:
        v = self._coerce(other)
        return NotImplemented if v is None else Scalar(self.value + v)

    __radd__ = __add__

    def __sub__(self, other: object) -> Scalar:
        v = self._coerce(other)
        return NotImplemented if v is None else Scalar(self.value - v)

    def __rsub__(self, other: object) -> Scalar:
        v = self._coerce(other)
        return NotImplemented if v is None else Scalar(v - self.value)

    def __mul__(self, other: object) -> Scalar:
        v = self._coerce(other)
        return NotImplemented if v is None else Scalar(self.value * v)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Scalar:
        v = self._coerce(other)
        return NotImplemented if v is None else self * Scalar(v).inverse()

    def __rtruediv__(self, other: object) -> Scalar:
        v = self._coerce(other)
        return NotImplemented if v is None else Scalar(v) * self.inverse()

    def __neg__(self) -> Scalar:
        return Scalar(-self.value)

    def __int__(self) -> int:
        return self.value

    def __bool__(self) -> bool:
        return self.value != 0

    def inverse(self) -> Scalar:
        """Multiplicative inverse; zero has none."""
        if self.value == 0:
            raise ZeroDivisionError("zero scalar has no inverse")
        return Scalar(pow(self.value, -1, ORDER))

    @classmethod
    def rand(cls, rng=None) -> Scalar:
        """Sample a uniform scalar from ``rng`` (any object with ``randrange``)."""
        rng = rng if rng is not None else secrets.SystemRandom()
        return cls(rng.randrange(ORDER))

    @classmethod
    def hash_to_scalar(cls, data) -> Scalar:
        digest = hashlib.sha512(_HASH_TO_SCALAR_DST + _as_bytes(data)).digest()
        return cls(int.from_bytes(digest, "big"))

    def to_bytes(self) -> bytes:
        return self.value.to_bytes(SCALAR_BYTES, "big")

    @classmethod
    def from_bytes(cls, data) -> Scalar:
        data = bytes(data)
        if len(data) != SCALAR_BYTES:
            raise GroupError(f"scalar encoding must be {SCALAR_BYTES} bytes")
        value = int.from_bytes(data, "big")
        if value >= ORDER:
            raise GroupError("scalar encoding is not reduced")
        return cls(value)


@dataclass(frozen=True, repr=False)
class GroupElement:
    """A point of the prime-order subgroup, written additively."""

    _point: _Point = None

    def __repr__(self) -> str:
        if self._point is None:
            return "GroupElement(zero)"
        return f"GroupElement({self.to_bytes().hex()[:18]}...)"

    @classmethod
    def generator(cls) -> GroupElement:
        return _GENERATOR

    @classmethod
    def zero(cls) -> GroupElement:
        return cls(None)

    @classmethod
    def hash_to_group_element(cls, data) -> GroupElement:
        """Deterministically map bytes to a non-identity element of the group."""
        data = _as_bytes(data)
        for counter in itertools.count():
            prefix = _HASH_TO_GROUP_DST + counter.to_bytes(4, "big")
            wide = b"".join(
                hashlib.sha512(prefix + bytes([block]) + data).digest() for block in (0, 1)
            )
            x = int.from_bytes(wide, "big") % _P
            y = _sqrt(x * x * x + x)
            if y is None or y == 0:
                continue
            point = _mul((x, min(y, _P - y)), COFACTOR)
            if point is not None:
                return cls(point)
        raise AssertionError("unreachable")

    def __add__(self, other: object) -> GroupElement:
        if not isinstance(other, GroupElement):
            return NotImplemented
        return GroupElement(_add(self._point, other._point))

    def __neg__(self) -> GroupElement:
        if self._point is None:
            return self
        x, y = self._point
        return GroupElement((x, -y % _P))

    def __sub__(self, other: object) -> GroupElement:
        if not isinstance(other, GroupElement):
            return NotImplemented
        return self + (-other)

    def __mul__(self, other: object) -> GroupElement:
        if isinstance(other, Scalar):
            k = other.value
        elif isinstance(other, int) and not isinstance(other, bool):
            k = other % ORDER
        else:
            return NotImplemented
        return GroupElement(_mul(self._point, k))

    __rmul__ = __mul__

    def __matmul__(self, other: object) -> _Fp2:
        """Bilinear pairing of two group elements."""
        if not isinstance(other, GroupElement):
            return NotImplemented
        return _pairing(self._point, other._point)

    def to_bytes(self) -> bytes:
        """Compressed encoding: a tag byte (0 identity, 2/3 y parity) then x."""
        if self._point is None:
            return bytes(POINT_BYTES)
        x, y = self._point
        return bytes([2 + (y & 1)]) + x.to_bytes(_FIELD_BYTES, "big")

    @classmethod
    def from_bytes(cls, data) -> GroupElement:
        data = bytes(data)
        if len(data) != POINT_BYTES:
            raise GroupError(f"point encoding must be {POINT_BYTES} bytes")
        tag, body = data[0], data[1:]
        if tag == 0:
            if any(body):
                raise GroupError("invalid encoding of the identity")
            return cls(None)
        if tag not in (2, 3):
            raise GroupError("invalid point tag")
        x = int.from_bytes(body, "big")
        if x >= _P:
            raise GroupError("x coordinate is not reduced")
        y = _sqrt(x * x * x + x)
        if y is None or y == 0:
            raise GroupError("not a point of the group")
        if y & 1 != tag - 2:
            y = _P - y
        point = (x, y)
        if _mul(point, ORDER) is not None:
            raise GroupError("point is not in the prime-order subgroup")
        return cls(point)


_GENERATOR = GroupElement.hash_to_group_element(b"thresholdkit generator")