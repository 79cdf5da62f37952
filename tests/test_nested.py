from __future__ import annotations

from typing import Any

import numpy as np
import pytest

from ndraster.core.config import BadConfigError
from ndraster.core.nested import flatten_nested, get_nested_shape, is_nested_sequence
from ndraster.errors import DataError


@pytest.mark.parametrize(
    ("data", "expected"),
    [([1], True), ((1, 2), True), ([], True), ([[1]], True)],
)
def test_is_nested_sequence(data: Any, expected: bool) -> None:
    assert is_nested_sequence(data) is expected


@pytest.mark.parametrize("data", [np.zeros(2), "ab", b"ab", range(3), 1, None, bytearray(2)])
def test_is_nested_sequence_false(data: Any) -> None:
    assert not is_nested_sequence(data)


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ([1, 2, 3], (3,)),
        ([[1, 2, 3], [4, 5, 6]], (2, 3)),
        ([[0, 1, 2], [3, 4, 5], [6, 7, 8], [9, 10, 11]], (4, 3)),
        (((1,), (2,)), (2, 1)),
        ([[[1, 2]], [[3, 4]], [[5, 6]]], (3, 1, 2)),
    ],
)
def test_get_nested_shape(data: Any, expected: tuple[int, ...]) -> None:
    assert get_nested_shape(data) == expected


def test_get_nested_shape_only_follows_first_elements() -> None:
    assert get_nested_shape([[1, 2], [3]]) == (2, 2)


@pytest.mark.parametrize("data", [[], [[]], [[[]]], ([], [1])])
def test_get_nested_shape_empty(data: Any) -> None:
    with pytest.raises(DataError, match="An empty sequence cannot be used as data."):
        get_nested_shape(data)


@pytest.mark.parametrize("data", [np.zeros(2), "abc", 3])
def test_get_nested_shape_not_a_sequence(data: Any) -> None:
    with pytest.raises(DataError, match="Expected a list or a tuple"):
        get_nested_shape(data)


def test_get_nested_shape_max_depth() -> None:
    data: Any = 1
    for _ in range(5):
        data = [data]
    assert get_nested_shape(data, max_depth=5) == (1, 1, 1, 1, 1)
    with pytest.raises(DataError, match="deeper than the maximum of 4 dimensions"):
        get_nested_shape(data, max_depth=4)
    with pytest.raises(BadConfigError):
        get_nested_shape(data, max_depth=0)


def test_get_nested_shape_default_max_depth() -> None:
    data: Any = 1
    for _ in range(33):
        data = [data]
    with pytest.raises(DataError, match="deeper than the maximum of 32 dimensions"):
        get_nested_shape(data)


@pytest.mark.parametrize(
    ("data", "values", "shape"),
    [
        ([1, 2, 3], [1, 2, 3], (3,)),
        ([[1, 2, 3], [4, 5, 6]], [1, 2, 3, 4, 5, 6], (2, 3)),
        (((1.5, 2), (3, 4.5)), [1.5, 2, 3, 4.5], (2, 2)),
        ([[[1, 2], [3, 4]], [[5, 6], [7, 8]]], [1, 2, 3, 4, 5, 6, 7, 8], (2, 2, 2)),
        ([np.int8(1), np.float32(2.5), True], [np.int8(1), np.float32(2.5), True], (3,)),
    ],
)
def test_flatten_nested(data: Any, values: list[Any], shape: tuple[int, ...]) -> None:
    assert flatten_nested(data) == (values, shape)


@pytest.mark.parametrize(
    ("data", "match"),
    [
        ([[1, 2], [3]], "expected 2 elements at depth 1, got 1"),
        ([[1, 2], [3, 4, 5]], "expected 2 elements at depth 1, got 3"),
        ([[1, 2], 3], "found 3 at depth 1"),
        ([1, [2]], "found a sequence at depth 1"),
        ([[1, 2], [3, []]], "found a sequence at depth 2"),
        ([1, "2"], "non-numeric value: '2'"),
        ([[1, None]], "non-numeric value: None"),
        ([1 + 2j], "non-numeric value"),
    ],
)
def test_flatten_nested_invalid(data: Any, match: str) -> None:
    with pytest.raises(DataError, match=match):
        flatten_nested(data)
