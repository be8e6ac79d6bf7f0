"""ECIES over a prime-order group with AES-256-CTR, plus verifiable recovery packages.

- A secret key x is a scalar and its public key is xG.
- Encrypting m for xG yields (rG, AES(key=hkdf(rxG), m)).

Operations that use a random oracle take it as an argument; callers must derive it from a
unique prefix.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass, field

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from thresholdkit.groups import GroupElement, Scalar
from thresholdkit.random_oracle import RandomOracle, serialize

AES_KEY_LENGTH = 32
_ZERO_NONCE = bytes(16)


class InvalidProofError(ValueError):
    """Raised when a zero-knowledge proof does not verify."""


def _hkdf_sha3_256(ikm: bytes, length: int, salt: bytes = b"", info: bytes = b"") -> bytes:
    prk = hmac.new(salt, ikm, hashlib.sha3_256).digest()
    output = b""
    block = b""
    counter = 1
    while len(output) < length:
        block = hmac.new(prk, block + info + bytes([counter]), hashlib.sha3_256).digest()
        output += block
        counter += 1
    return output[:length]


def _aes_ctr(shared_point: GroupElement, data: bytes) -> bytes:
    key = _hkdf_sha3_256(serialize(shared_point), AES_KEY_LENGTH)
    cipher = Cipher(algorithms.AES(key), modes.CTR(_ZERO_NONCE)).encryptor()
    return cipher.update(bytes(data)) + cipher.finalize()


@dataclass(frozen=True)
class Encryption:
    """An ephemeral group element rG and the AES-CTR ciphertext."""

    ephemeral: GroupElement
    ciphertext: bytes

    @classmethod
    def _encrypt(cls, x_g: GroupElement, msg: bytes, rng=None) -> Encryption:
        r = Scalar.rand(rng)
        r_g = type(x_g).generator() * r
        return cls(r_g, _aes_ctr(x_g * r, msg))

    def _decrypt(self, sk: Scalar) -> bytes:
        return self._decrypt_from_partial_decryption(self.ephemeral * sk)

    def _decrypt_from_partial_decryption(self, partial_key: GroupElement) -> bytes:
        return _aes_ctr(partial_key, self.ciphertext)


@dataclass(frozen=True)
class DdhTupleNizk:
    """Non-interactive proof for the DDH tuple [G, eG, sk*G, sk*eG].

    The prover picks r and sends A=rG, B=r*eG and z=r+c*sk, with c from the random oracle;
    the verifier checks zG = A + c*sk*G and z*eG = B + c*sk*eG.
    """

    a: GroupElement
    b: GroupElement
    z: Scalar

    @classmethod
    def create(
        cls,
        sk: Scalar,
        e_g: GroupElement,
        sk_g: GroupElement,
        sk_e_g: GroupElement,
        random_oracle: RandomOracle,
        rng=None,
    ) -> DdhTupleNizk:
        r = Scalar.rand(rng)
        a = type(e_g).generator() * r
        b = e_g * r
        challenge = cls._fiat_shamir_challenge(e_g, sk_g, sk_e_g, a, b, random_oracle)
        return cls(a, b, challenge * sk + r)

    def verify(
        self,
        e_g: GroupElement,
        sk_g: GroupElement,
        sk_e_g: GroupElement,
        random_oracle: RandomOracle,
    ) -> None:
        """Raise InvalidProofError unless the proof holds for the given tuple."""
        challenge = self._fiat_shamir_challenge(
            e_g, sk_g, sk_e_g, self.a, self.b, random_oracle
        )
        generator = type(e_g).generator()
        if not (
            self._is_valid_relation(self.a, sk_g, generator, challenge)
            and self._is_valid_relation(self.b, sk_e_g, e_g, challenge)
        ):
            raise InvalidProofError("DDH tuple proof does not verify")

    @staticmethod
    def _fiat_shamir_challenge(e_g, sk_g, sk_e_g, a, b, random_oracle: RandomOracle) -> Scalar:
        generator = type(e_g).generator()
        output = random_oracle.evaluate((generator, e_g, sk_g, sk_e_g, a, b))
        return Scalar.hash_to_scalar(output)

    def _is_valid_relation(self, e1, e2, e3, challenge: Scalar) -> bool:
        # e1 + c*e2 == z*e3
        return e1 + e2 * challenge == e3 * self.z


@dataclass(frozen=True)
class RecoveryPackage:
    """Allows decrypting one specific Encryption, with a proof of correctness."""

    ephemeral_key: GroupElement
    proof: DdhTupleNizk


@dataclass(frozen=True)
class PrivateKey:
    """An ECIES secret scalar for a given group."""

    scalar: Scalar = field(repr=False)
    group: type = GroupElement

    @classmethod
    def new(cls, group: type = GroupElement, rng=None) -> PrivateKey:
        return cls(Scalar.rand(rng), group)

    def decrypt(self, enc: Encryption) -> bytes:
        return enc._decrypt(self.scalar)

    def create_recovery_package(
        self, enc: Encryption, random_oracle: RandomOracle, rng=None
    ) -> RecoveryPackage:
        """Reveal the key of ``enc`` alone, with a proof that it is correct."""
        ephemeral_key = enc.ephemeral * self.scalar
        pk = self.group.generator() * self.scalar
        proof = DdhTupleNizk.create(
            self.scalar, enc.ephemeral, pk, ephemeral_key, random_oracle, rng
        )
        return RecoveryPackage(ephemeral_key, proof)


@dataclass(frozen=True)
class PublicKey:
    """An ECIES public key xG."""

    element: GroupElement

    @classmethod
    def from_private_key(cls, sk: PrivateKey) -> PublicKey:
        return cls(sk.group.generator() * sk.scalar)

    def encrypt(self, msg: bytes, rng=None) -> Encryption:
        return Encryption._encrypt(self.element, msg, rng)

    def decrypt_with_recovery_package(
        self, pkg: RecoveryPackage, random_oracle: RandomOracle, enc: Encryption
    ) -> bytes:
        """Decrypt ``enc`` using a verified recovery package from this key's owner."""
        pkg.proof.verify(enc.ephemeral, self.element, pkg.ephemeral_key, random_oracle)
        return enc._decrypt_from_partial_decryption(pkg.ephemeral_key)