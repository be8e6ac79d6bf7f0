"""Threshold BLS signatures over a group with a symmetric pairing."""

from __future__ import annotations

from typing import Sequence

from thresholdkit.groups import GroupElement, Scalar
from thresholdkit.polynomial import Poly
from thresholdkit.types import IndexedValue

Share = IndexedValue
PartialSignature = IndexedValue


class InvalidSignatureError(ValueError):
    """Raised when a signature does not verify."""


class ThresholdBls:
    """Standard and partial BLS signing and verification."""

    public_group: type = GroupElement
    signature_group: type = GroupElement

    @classmethod
    def verify_pairings(cls, pk: GroupElement, sig: GroupElement, msg: bytes) -> None:
        """Check e(sig, g) == e(H(msg), pk); raise ValueError otherwise."""
        hashed_message = cls.signature_group.hash_to_group_element(msg)
        left = sig @ cls.public_group.generator()
        right = hashed_message @ pk
        if left != right:
            raise ValueError("pairing check failed")

    @classmethod
    def sign(cls, private: Scalar, msg: bytes) -> GroupElement:
        return cls.signature_group.hash_to_group_element(msg) * private

    @classmethod
    def verify(cls, public: GroupElement, msg: bytes, sig: GroupElement) -> None:
        """Raise InvalidSignatureError unless ``sig`` is a signature on ``msg``."""
        try:
            cls.verify_pairings(public, sig, msg)
        except ValueError:
            raise InvalidSignatureError("invalid signature") from None

    @classmethod
    def partial_sign(cls, share: IndexedValue, msg: bytes) -> IndexedValue:
        return IndexedValue(share.index, cls.sign(share.value, msg))

    @classmethod
    def partial_verify(cls, vss_pk: Poly, msg: bytes, partial_sig: IndexedValue) -> None:
        """Verify a partial signature against the share's public key from ``vss_pk``."""
        pk_i = vss_pk.eval(partial_sig.index)
        cls.verify(pk_i.value, msg, partial_sig.value)

    @classmethod
    def aggregate(cls, threshold: int, partials: Sequence[IndexedValue]) -> GroupElement:
        """Interpolate partial signatures into the full signature."""
        return Poly.recover_c0(threshold, partials)