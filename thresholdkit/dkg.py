"""Distributed key generation for threshold BLS, with ECIES-encrypted shares and complaints.

The VSS polynomial is committed to a group ``group`` (the group of the threshold public key)
and shares travel encrypted under each node's ECIES public key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

from thresholdkit.ecies import (
    Encryption,
    PrivateKey,
    PublicKey,
    RecoveryPackage,
)
from thresholdkit.groups import GroupElement, Scalar
from thresholdkit.polynomial import Poly
from thresholdkit.random_oracle import RandomOracle
from thresholdkit.types import IndexedValue, share_index

SharesMap = Dict[int, Scalar]


class DkgError(ValueError):
    """Raised when the input of a DKG step is invalid."""


@dataclass(frozen=True)
class PkiNode:
    """A node with a unique id and its ECIES public key."""

    id: int
    pk: PublicKey

    def __post_init__(self) -> None:
        share_index(self.id)


@dataclass
class EncryptedShare:
    """The ECIES encryption of a share destined to ``receiver``."""

    receiver: int
    encryption: Encryption


@dataclass
class FirstMessage:
    """All encrypted shares a dealer sends, and the commitment of its secret polynomial."""

    sender: int
    encrypted_shares: List[EncryptedShare]
    vss_pk: Poly


@dataclass(frozen=True)
class NoShareComplaint:
    """The dealer ``accused`` sent no share to the complainer."""

    accused: int


@dataclass(frozen=True)
class InvalidShareComplaint:
    """The dealer ``accused`` sent an invalid share; the package lets others decrypt it."""

    accused: int
    recovery_package: RecoveryPackage


Complaint = Union[NoShareComplaint, InvalidShareComplaint]


@dataclass
class SecondMessage:
    """Complaints of ``sender`` against dealers; empty if there are none."""

    sender: int
    complaints: List[Complaint] = field(default_factory=list)


@dataclass
class DkgOutput:
    """The final output of a successful DKG run."""

    nodes: List[PkiNode]
    vss_pk: Poly
    share: IndexedValue


class Party:
    """A party (dealer and receiver) in the DKG ceremony."""

    def __init__(
        self,
        ecies_sk: PrivateKey,
        nodes: Sequence[PkiNode],
        threshold: int,
        random_oracle: RandomOracle,
        rng=None,
        group: type = GroupElement,
    ) -> None:
        ecies_pk = PublicKey.from_private_key(ecies_sk)
        current = next((node for node in nodes if node.pk == ecies_pk), None)
        if current is None:
            raise DkgError("the ECIES public key is not one of the nodes")
        if threshold < 1 or threshold >= len(nodes):
            raise DkgError("threshold must be positive and smaller than the number of nodes")

        self.id = current.id
        self.nodes = list(nodes)
        self._ecies_sk = ecies_sk
        self.ecies_pk = ecies_pk
        self._threshold = threshold
        self.random_oracle = random_oracle
        self.group = group
        self._vss_sk = Poly.rand(threshold - 1, rng)
        self.vss_pk = self._vss_sk.commit(group)

    def __repr__(self) -> str:
        return f"Party(id={self.id}, threshold={self._threshold}, nodes={len(self.nodes)})"

    def threshold(self) -> int:
        return self._threshold

    def create_first_message(self, rng=None) -> FirstMessage:
        """Encrypt a share of the secret polynomial for every other node."""
        encrypted_shares = [
            EncryptedShare(
                receiver=node.id,
                encryption=node.pk.encrypt(self._vss_sk.eval(node.id).value.to_bytes(), rng),
            )
            for node in self.nodes
            if node.id != self.id
        ]
        return FirstMessage(self.id, encrypted_shares, Poly(list(self.vss_pk.coefficients)))

    def create_second_message(
        self, messages: Sequence[FirstMessage], rng=None
    ) -> tuple[SharesMap, SecondMessage]:
        """Process exactly ``threshold`` first messages.

        Returns the valid shares received so far and the complaints to broadcast.
        """
        if len(messages) != self._threshold:
            raise DkgError(f"expected exactly {self._threshold} first messages")
        unique_senders = {message.sender for message in messages}
        if len(unique_senders) != len(messages):
            raise DkgError("first messages must come from distinct senders")

        my_id = self.id
        shares: SharesMap = {}
        next_message = SecondMessage(my_id, [])
        ecies_oracle = self.random_oracle.extend("ecies")

        for message in messages:
            # Messages with another threshold are ignored by all honest parties.
            if message.vss_pk.degree() != self._threshold - 1:
                continue
            if message.sender == my_id:
                shares[message.sender] = self._vss_sk.eval(my_id).value
                continue
            encrypted_share = next(
                (s for s in message.encrypted_shares if s.receiver == my_id), None
            )
            if encrypted_share is None:
                next_message.complaints.append(NoShareComplaint(message.sender))
                continue
            try:
                shares[message.sender] = self._decrypt_and_check_share(
                    my_id, message.vss_pk, encrypted_share
                )
            except ValueError:
                package = self._ecies_sk.create_recovery_package(
                    encrypted_share.encryption, ecies_oracle, rng
                )
                next_message.complaints.append(InvalidShareComplaint(message.sender, package))

        if not shares:
            raise DkgError("no valid share among the first messages")
        return shares, next_message

    def process_responses(
        self,
        first_messages: Sequence[FirstMessage],
        second_messages: Sequence[SecondMessage],
        shares: SharesMap,
        minimal_threshold: int,
    ) -> SharesMap:
        """Check every complaint and return the updated set of valid shares."""
        if len(first_messages) != self._threshold or len(second_messages) < minimal_threshold:
            raise DkgError("wrong number of first or second messages")

        id_to_pk = {node.id: node.pk for node in self.nodes}
        id_to_m1 = {message.sender: message for message in first_messages}
        ecies_oracle = self.random_oracle.extend("ecies")
        shares = dict(shares)

        for m2 in second_messages:
            accuser = m2.sender
            for complaint in m2.complaints:
                accused = complaint.accused
                if accused not in shares:
                    continue
                accuser_pk = id_to_pk.get(accuser)
                if accuser_pk is None:
                    raise DkgError(f"complaint from unknown node {accuser}")
                if self._is_valid_complaint(
                    complaint, accuser, accuser_pk, id_to_m1.get(accused), ecies_oracle
                ):
                    del shares[accused]
                else:
                    # Ignore the accuser from now on, including its other complaints.
                    shares.pop(accuser, None)
                    break
        return shares

    def aggregate(self, first_messages: Sequence[FirstMessage], shares: SharesMap) -> DkgOutput:
        """Sum the valid shares and the matching VSS public keys."""
        id_to_m1 = {message.sender: message for message in first_messages}
        vss_pk = Poly.zero(self.group)
        secret = Scalar(0)
        for sender, share in shares.items():
            message = id_to_m1.get(sender)
            if message is None:
                raise DkgError(f"no first message from node {sender}")
            vss_pk.add(message.vss_pk)
            secret = secret + share
        return DkgOutput(list(self.nodes), vss_pk, IndexedValue(self.id, secret))

    @staticmethod
    def _is_valid_complaint(
        complaint: Complaint,
        accuser: int,
        accuser_pk: PublicKey,
        related_m1: Optional[FirstMessage],
        random_oracle: RandomOracle,
    ) -> bool:
        if related_m1 is None:
            return False
        encrypted_share = next(
            (s for s in related_m1.encrypted_shares if s.receiver == accuser), None
        )
        if isinstance(complaint, NoShareComplaint):
            return encrypted_share is None
        if encrypted_share is None:
            return False
        try:
            Party._check_delegated_key_and_share(
                complaint.recovery_package,
                accuser_pk,
                accuser,
                related_m1.vss_pk,
                encrypted_share,
                random_oracle,
            )
        except ValueError:
            return False
        return True

    def _decrypt_and_check_share(
        self, index: int, vss_pk: Poly, encrypted_share: EncryptedShare
    ) -> Scalar:
        buffer = self._ecies_sk.decrypt(encrypted_share.encryption)
        return self._deserialize_and_check_share(buffer, index, vss_pk)

    @staticmethod
    def _deserialize_and_check_share(buffer: bytes, index: int, vss_pk: Poly) -> Scalar:
        try:
            share = Scalar.from_bytes(buffer)
        except ValueError:
            raise DkgError("share cannot be decoded") from None
        if not vss_pk.is_valid_share(index, share):
            raise DkgError("share does not match the VSS public key")
        return share

    @staticmethod
    def _check_delegated_key_and_share(
        recovery_package: RecoveryPackage,
        ecies_pk: PublicKey,
        index: int,
        vss_pk: Poly,
        encrypted_share: EncryptedShare,
        random_oracle: RandomOracle,
    ) -> Scalar:
        buffer = ecies_pk.decrypt_with_recovery_package(
            recovery_package, random_oracle, encrypted_share.encryption
        )
        return Party._deserialize_and_check_share(buffer, index, vss_pk)