from __future__ import annotations

import functools
import operator
from collections.abc import Iterable, Sequence
from typing import Any, NamedTuple

from ndraster.errors import ConfigurationError, ShapeError

ShapeLike = Iterable[int] | int
Shape = tuple[int, ...]
Strides = tuple[int, ...]
Position = tuple[int, ...]
PositionLike = Sequence[int]


class Bounds(NamedTuple):
    """The inclusive range of values a data type can store."""

    min: int | float
    max: int | float


def product(tup: Iterable[int]) -> int:
    return functools.reduce(operator.mul, tup, 1)


def _is_int(value: object) -> bool:
    # bool is an int subclass, but a shape of (True, 3) is a mistake
    if isinstance(value, bool):
        return False
    try:
        operator.index(value)  # type: ignore[arg-type]
    except TypeError:
        return False
    return True


def parse_shapelike(data: ShapeLike) -> Shape:
    """
    Normalize an integer or an iterable of integers to a shape, i.e. a non-empty tuple of
    positive integers.

    Raises
    ------
    ConfigurationError
        If the input is not an integer or an iterable of integers, if it is empty, or if any of
        its elements is not positive.
    """
    if _is_int(data):
        data = (operator.index(data),)  # type: ignore[arg-type]
    try:
        data_tuple = tuple(data)  # type: ignore[arg-type]
    except TypeError as e:
        msg = f"Expected an integer or an iterable of integers. Got {data!r} instead."
        raise ConfigurationError(msg) from e

    if len(data_tuple) == 0:
        raise ConfigurationError("Expected at least one dimension. Got an empty shape.")
    if not all(_is_int(v) for v in data_tuple):
        msg = f"Expected an iterable of integers. Got {data!r} instead."
        raise ConfigurationError(msg)
    if not all(v > 0 for v in data_tuple):
        msg = f"Expected all values to be positive. Got {data!r} instead."
        raise ConfigurationError(msg)
    return tuple(operator.index(v) for v in data_tuple)


def derive_strides(shape: Sequence[int], expected_size: int | None = None) -> Strides:
    """
    Compute the row-major ('C' order) strides of a shape, in elements.

    The last dimension is the fastest varying one, so its stride is 1, and the stride of every
    other dimension is the size of the next dimension times its stride.

    Parameters
    ----------
    shape : Sequence[int]
        The shape, from the slowest varying dimension to the fastest.
    expected_size : int | None, default=None
        If provided, the number of elements the shape must describe.

    Returns
    -------
    tuple[int, ...]
        One stride per dimension.

    Raises
    ------
    ShapeError
        If the shape is empty, has a non-positive or non-integer entry, or does not describe
        ``expected_size`` elements.

    Examples
    --------
    >>> derive_strides((2, 3, 4))
    (12, 4, 1)
    """
    if len(shape) == 0:
        raise ShapeError("A shape must have at least one dimension.")
    for idx, dim in enumerate(shape):
        if not _is_int(dim) or dim < 1:
            raise ShapeError(
                f"Invalid size {dim!r} for dimension {idx} of shape {tuple(shape)!r}. "
                "Sizes must be positive integers."
            )
    if expected_size is not None and product(shape) != expected_size:
        raise ShapeError(tuple(shape), expected_size)

    strides = [0] * len(shape)
    strides[-1] = 1
    for i in range(len(shape) - 2, -1, -1):
        strides[i] = shape[i + 1] * strides[i + 1]
    return tuple(strides)


def parse_bool(data: Any) -> bool:
    if isinstance(data, bool):
        return data
    raise ConfigurationError("copy", "a bool", data)
