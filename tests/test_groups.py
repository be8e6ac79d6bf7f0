import random

import pytest

from thresholdkit.groups import (
    ORDER,
    POINT_BYTES,
    SCALAR_BYTES,
    GroupElement,
    GroupError,
    Scalar,
)

G = GroupElement.generator()


def test_scalar_arithmetic():
    assert Scalar(7) - Scalar(2) == Scalar(5)
    assert Scalar(-1) + 1 == Scalar(0)
    assert Scalar(ORDER) == Scalar(0)
    assert -Scalar(3) + Scalar(3) == Scalar(0)
    assert Scalar(3) / Scalar(3) == Scalar(1)


def test_scalar_inverse():
    x = Scalar.rand(random.Random(7))
    assert x * x.inverse() == Scalar(1)
    assert 1 / x == x.inverse()


def test_zero_scalar_has_no_inverse():
    with pytest.raises(ZeroDivisionError):
        Scalar(0).inverse()
    with pytest.raises(ZeroDivisionError):
        Scalar(1) / Scalar(0)


def test_scalar_rand_is_reproducible_with_seeded_rng():
    assert Scalar.rand(random.Random(1)) == Scalar.rand(random.Random(1))
    assert Scalar.rand(random.Random(1)) != Scalar.rand(random.Random(2))


def test_scalar_bytes_round_trip():
    x = Scalar.rand(random.Random(3))
    encoded = x.to_bytes()
    assert len(encoded) == SCALAR_BYTES
    assert Scalar.from_bytes(encoded) == x


def test_scalar_from_bytes_rejects_bad_input():
    with pytest.raises(GroupError):
        Scalar.from_bytes(ORDER.to_bytes(SCALAR_BYTES, "big"))
    with pytest.raises(GroupError):
        Scalar.from_bytes(b"\x01")


def test_hash_to_scalar_is_deterministic():
    assert Scalar.hash_to_scalar(b"abc") == Scalar.hash_to_scalar(b"abc")
    assert Scalar.hash_to_scalar(b"abc") != Scalar.hash_to_scalar(b"abd")


def test_point_arithmetic_agrees():
    five = G * Scalar(5)
    assert G + G + G + G + G + G - G == five
    assert G * (Scalar(7) - Scalar(2)) == five
    assert Scalar(5) * G == five
    assert G * 5 == five
    acc = GroupElement.zero()
    acc += five
    assert acc == five


def test_generator_has_prime_order():
    assert G != GroupElement.zero()
    assert G * ORDER == GroupElement.zero()
    assert G * Scalar(ORDER - 1) == -G


def test_point_bytes_round_trip():
    p = G * Scalar.rand(random.Random(5))
    encoded = p.to_bytes()
    assert len(encoded) == POINT_BYTES
    assert GroupElement.from_bytes(encoded) == p
    zero = GroupElement.zero()
    assert GroupElement.from_bytes(zero.to_bytes()) == zero


def test_point_from_bytes_rejects_bad_input():
    encoded = G.to_bytes()
    with pytest.raises(GroupError):
        GroupElement.from_bytes(encoded[:-1])
    with pytest.raises(GroupError):
        GroupElement.from_bytes(bytes([4]) + encoded[1:])
    with pytest.raises(GroupError):
        GroupElement.from_bytes(bytes([2]) + b"\xff" * (POINT_BYTES - 1))
    with pytest.raises(GroupError):
        GroupElement.from_bytes(bytes(POINT_BYTES - 1) + b"\x01")


def test_hash_to_group_element():
    a = GroupElement.hash_to_group_element(b"alice")
    assert a == GroupElement.hash_to_group_element(b"alice")
    assert a != GroupElement.hash_to_group_element(b"bob")
    assert a != GroupElement.zero()
    assert a * ORDER == GroupElement.zero()


def test_pairing_is_bilinear_and_non_degenerate():
    rng = random.Random(11)
    a, b = Scalar.rand(rng), Scalar.rand(rng)
    base = G @ G
    assert (G * a) @ (G * b) == (G * (a * b)) @ G
    assert (G * a) @ G == G @ (G * a)
    assert base != GroupElement.zero() @ G
    assert (G + G) @ G == base * base