import dataclasses

import pytest

from thresholdkit.types import MAX_SHARE_INDEX, IndexedValue, share_index


def test_share_index_accepts_bounds():
    assert share_index(1) == 1
    assert share_index(MAX_SHARE_INDEX) == MAX_SHARE_INDEX


@pytest.mark.parametrize("value", [0, -1, MAX_SHARE_INDEX + 1])
def test_share_index_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        share_index(value)


@pytest.mark.parametrize("value", [True, 1.0, "1", None])
def test_share_index_rejects_non_int(value):
    with pytest.raises(TypeError):
        share_index(value)


def test_indexed_value_equality():
    assert IndexedValue(3, "x") == IndexedValue(3, "x")
    assert IndexedValue(3, "x") != IndexedValue(4, "x")


def test_indexed_value_rejects_zero_index():
    with pytest.raises(ValueError):
        IndexedValue(0, "x")


def test_indexed_value_is_frozen():
    item = IndexedValue(2, "x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        item.index = 5  # type: ignore[misc]
    assert item.index == 2