"""Polynomials for secret sharing, over scalars or over group elements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Sequence

from thresholdkit.groups import GroupElement, Scalar
from thresholdkit.types import IndexedValue, share_index

Eval = IndexedValue


def _zero_of(element_type: type) -> Any:
    zero = getattr(element_type, "zero", None)
    return zero() if callable(zero) else element_type(0)


@dataclass
class Poly:
    """A polynomial in a scalar variable whose coefficients are scalars or group elements.

    Coefficients are ordered from the constant term upwards.
    """

    coefficients: List[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.coefficients = list(self.coefficients)
        if not self.coefficients:
            raise ValueError("a polynomial needs at least one coefficient")

    def __len__(self) -> int:
        return len(self.coefficients)

    def __iter__(self):
        return iter(self.coefficients)

    @property
    def _element_type(self) -> type:
        return type(self.coefficients[0])

    def degree(self) -> int:
        """Degree of the polynomial: the number of coefficients minus one."""
        return len(self.coefficients) - 1

    @classmethod
    def zero(cls, element_type: type = Scalar) -> Poly:
        """The polynomial holding only the zero element of ``element_type``."""
        return cls([_zero_of(element_type)])

    def add(self, other: Poly) -> None:
        """Add ``other`` to this polynomial in place, padding with zeros as needed."""
        missing = len(other.coefficients) - len(self.coefficients)
        if missing > 0:
            zero = _zero_of(self._element_type)
            self.coefficients.extend([zero] * missing)
        for position, coefficient in enumerate(other.coefficients):
            self.coefficients[position] = self.coefficients[position] + coefficient

    def eval(self, index: int) -> IndexedValue:
        """Evaluate the polynomial at the share index ``index``."""
        share_index(index)
        x = Scalar(index)
        result = _zero_of(self._element_type)
        for coefficient in reversed(self.coefficients):
            result = result * x + coefficient
        return IndexedValue(index, result)

    @classmethod
    def recover_c0(cls, threshold: int, shares: Sequence[IndexedValue]) -> Any:
        """Recover the constant term from exactly ``threshold`` distinct evaluations."""
        if len(shares) < threshold:
            raise ValueError(f"need at least {threshold} shares, got {len(shares)}")
        indices = {share.index for share in shares}
        if len(indices) != threshold:
            raise ValueError("shares must have exactly threshold distinct indices")

        acc = _zero_of(type(shares[0].value))
        for share_i in shares:
            numerator = Scalar(1)
            denominator = Scalar(1)
            for share_j in shares:
                if share_j.index == share_i.index:
                    continue
                numerator = numerator * share_j.index
                denominator = denominator * (Scalar(share_j.index) - share_i.index)
            acc = acc + share_i.value * (numerator * denominator.inverse())
        return acc

    def is_valid_share(self, index: int, share: Scalar) -> bool:
        """Check a scalar share against this committed (public) polynomial."""
        expected = self._element_type.generator() * share
        return self.eval(index).value == expected

    def c0(self) -> Any:
        """The constant term."""
        return self.coefficients[0]

    @classmethod
    def rand(cls, degree: int, rng=None) -> Poly:
        """A scalar polynomial of the given degree with uniformly random coefficients."""
        if degree < 0:
            raise ValueError("degree must not be negative")
        return cls([Scalar.rand(rng) for _ in range(degree + 1)])

    def commit(self, group: type = GroupElement) -> Poly:
        """Commit a scalar polynomial to ``group`` by multiplying its generator."""
        generator = group.generator()
        return Poly([generator * coefficient for coefficient in self.coefficients])


PrivatePoly = Poly
PublicPoly = Poly