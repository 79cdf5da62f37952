"""
Nested sequences, e.g. ``[[0, 1, 2], [3, 4, 5]]``, are lists or tuples of lists or tuples of
numbers. They are the plain python representation of N-dimensional data: the nesting depth is the
number of dimensions and the lengths at each level are the shape, from the slowest varying
dimension to the fastest.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeGuard

from ndraster.core.config import config, parse_max_depth
from ndraster.core.dtype.npy.common import RealLike, check_real
from ndraster.errors import DataError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ndraster.core.common import Shape

logger = logging.getLogger(__name__)


def is_nested_sequence(data: object) -> TypeGuard[Sequence[Any]]:
    """
    Tell whether ``data`` is a generic python sequence (a list or a tuple), as opposed to a typed
    buffer such as a NumPy array.
    """
    return isinstance(data, list | tuple)


def _max_depth(max_depth: int | None) -> int:
    if max_depth is None:
        return parse_max_depth(config.get("nested.max_depth"))
    return parse_max_depth(max_depth)


def get_nested_shape(data: Sequence[Any], *, max_depth: int | None = None) -> Shape:
    """
    Get the shape of a nested sequence by following its first elements down to a scalar.

    The shape is not validated beyond the first element of every level; ``flatten_nested``
    checks that every sub-sequence of a level has the same length.

    Examples
    --------
    >>> get_nested_shape([[0, 1, 2], [3, 4, 5], [6, 7, 8], [9, 10, 11]])
    (4, 3)

    Raises
    ------
    DataError
        If ``data`` is not a list or a tuple, if a sub-sequence is empty, or if the nesting is
        deeper than ``max_depth`` (default: the ``nested.max_depth`` config value).
    """
    if not is_nested_sequence(data):
        raise DataError(f"Expected a list or a tuple. Got {type(data).__name__} instead.")

    limit = _max_depth(max_depth)
    shape: list[int] = []
    level: Any = data
    while is_nested_sequence(level):
        if len(level) == 0:
            raise DataError("An empty sequence cannot be used as data.")
        if len(shape) == limit:
            raise DataError(f"The nested sequence is deeper than the maximum of {limit} dimensions.")
        shape.append(len(level))
        level = level[0]
    return tuple(shape)


def _flatten_level(
    level: Sequence[Any], shape: Shape, depth: int, out: list[RealLike]
) -> None:
    if len(level) != shape[depth]:
        raise DataError(
            f"The nested sequence has size inconsistencies: expected {shape[depth]} elements at "
            f"depth {depth}, got {len(level)}."
        )
    if depth == len(shape) - 1:
        for item in level:
            if is_nested_sequence(item):
                raise DataError(
                    f"The nested sequence has size inconsistencies: found a sequence at depth "
                    f"{depth + 1}, expected a number."
                )
            if not check_real(item):
                raise DataError(f"The nested sequence contains a non-numeric value: {item!r}.")
            out.append(item)
        return
    for item in level:
        if not is_nested_sequence(item):
            raise DataError(
                f"The nested sequence has size inconsistencies: found {item!r} at depth "
                f"{depth + 1}, expected a sequence of length {shape[depth + 1]}."
            )
        _flatten_level(item, shape, depth + 1, out)


def flatten_nested(
    data: Sequence[Any], *, max_depth: int | None = None
) -> tuple[list[RealLike], Shape]:
    """
    Flatten a nested sequence in row-major order and get its shape.

    Parameters
    ----------
    data : Sequence
        A list or tuple, possibly of lists or tuples, of numbers.
    max_depth : int | None, default=None
        The maximum number of dimensions. Defaults to the ``nested.max_depth`` config value.

    Returns
    -------
    tuple[list, tuple[int, ...]]
        The flat list of numbers and the shape of the nested sequence.

    Raises
    ------
    DataError
        If the sequence is empty at some level, is irregular, mixes numbers and sequences at the
        same level, contains something else than numbers, or is too deep.

    Examples
    --------
    >>> flatten_nested([[1, 2, 3], [4, 5, 6]])
    ([1, 2, 3, 4, 5, 6], (2, 3))
    """
    shape = get_nested_shape(data, max_depth=max_depth)
    out: list[RealLike] = []
    _flatten_level(data, shape, 0, out)
    logger.debug("flatten_nested: flattened %d elements with shape %s", len(out), shape)
    return out, shape
