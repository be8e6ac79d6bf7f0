import pytest

from thresholdkit.groups import GroupElement, Scalar
from thresholdkit.random_oracle import RandomOracle, serialize


def test_random_oracle():
    ro1 = RandomOracle("abc")
    assert ro1.evaluate("alice") == ro1.evaluate("alice")
    assert ro1.evaluate("alice") != ro1.evaluate("bob")
    ro2 = RandomOracle("def")
    assert ro1.evaluate("alice") != ro2.evaluate("alice")
    ro3 = ro1.extend("def")
    assert ro1.evaluate("alice") != ro3.evaluate("alice")
    ro4 = RandomOracle("abc-def")
    assert ro3.evaluate("alice") == ro4.evaluate("alice")


def test_extend_joins_prefixes():
    assert RandomOracle("abc").extend("def") == RandomOracle("abc-def")
    assert RandomOracle("dkg").extend("ecies").prefix == "dkg-ecies"


def test_output_is_64_bytes():
    assert len(RandomOracle("abc").evaluate(b"")) == 64


def test_serialize_string_is_length_prefixed():
    assert serialize("alice") == b"\x05\x00\x00\x00\x00\x00\x00\x00alice"


def test_serialize_integer_is_u64_little_endian():
    assert serialize(7) == b"\x07" + bytes(7)


def test_serialize_tuple_concatenates_and_list_counts():
    assert serialize(("a", b"b")) == serialize("a") + serialize(b"b")
    assert serialize([1, 2]) == serialize(2) + serialize(1) + serialize(2)


def test_serialize_group_values_use_their_encoding():
    x = Scalar(5)
    g = GroupElement.generator()
    assert serialize(x) == x.to_bytes()
    assert serialize((g, x)) == g.to_bytes() + x.to_bytes()


def test_evaluate_group_tuple_is_deterministic():
    ro = RandomOracle("test")
    g = GroupElement.generator()
    assert ro.evaluate((g, g + g)) == ro.evaluate((g, g + g))
    assert ro.evaluate((g, g + g)) != ro.evaluate((g + g, g))


def test_serialize_rejects_unsupported_values():
    with pytest.raises(TypeError):
        serialize(1.5)
    with pytest.raises(ValueError):
        serialize(-1)
    with pytest.raises(ValueError):
        serialize(2**64)