"""Random oracle built on SHA3-512 with prefix-based domain separation."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

_MAX_PREFIX_LENGTH = 2**32 - 1
_U64_LIMIT = 2**64


def _length(n: int) -> bytes:
    return n.to_bytes(8, "little")


def serialize(obj: object) -> bytes:
    """Encode an object deterministically in a compact little-endian binary form.

    Integers are u64, strings and byte strings are length-prefixed, tuples are the
    concatenation of their items, lists are count-prefixed, and objects with a
    ``to_bytes()`` method (scalars, group elements) contribute their fixed-size encoding.
    """
    if isinstance(obj, bool):
        return b"\x01" if obj else b"\x00"
    if isinstance(obj, int):
        if not 0 <= obj < _U64_LIMIT:
            raise ValueError(f"integer {obj} does not fit in an unsigned 64-bit value")
        return obj.to_bytes(8, "little")
    if isinstance(obj, str):
        raw = obj.encode("utf-8")
        return _length(len(raw)) + raw
    if isinstance(obj, (bytes, bytearray, memoryview)):
        raw = bytes(obj)
        return _length(len(raw)) + raw
    if isinstance(obj, tuple):
        return b"".join(serialize(item) for item in obj)
    if isinstance(obj, list):
        return _length(len(obj)) + b"".join(serialize(item) for item in obj)
    to_bytes = getattr(obj, "to_bytes", None)
    if callable(to_bytes):
        return bytes(to_bytes())
    raise TypeError(f"cannot serialize object of type {type(obj).__name__}")


@dataclass(frozen=True)
class RandomOracle:
    """SHA3-512(prefix length as u32 big-endian | prefix | serialized input).

    The prefix must be globally unique. ``extend`` derives a sub-oracle whose prefix is the
    parent's joined to the extension with "-".
    """

    prefix: str

    def __post_init__(self) -> None:
        if len(self.prefix.encode("utf-8")) >= _MAX_PREFIX_LENGTH:
            raise ValueError("random oracle prefix is too long")

    def evaluate(self, obj: object) -> bytes:
        """Return the 64-byte oracle output for ``obj``."""
        prefix = self.prefix.encode("utf-8")
        hasher = hashlib.sha3_512()
        hasher.update(len(prefix).to_bytes(4, "big"))
        hasher.update(prefix)
        hasher.update(serialize(obj))
        return hasher.digest()

    def extend(self, extension: str) -> RandomOracle:
        return RandomOracle(f"{self.prefix}-{extension}")