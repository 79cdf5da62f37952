from __future__ import annotations

import builtins
import logging
import operator
from typing import TYPE_CHECKING, NamedTuple

from ndraster.errors import PositionError, ShapeError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from ndraster.core.common import Position, PositionLike, Shape, Strides

logger = logging.getLogger(__name__)


def normalize_position_component(dim_sel: object, dim: int, dim_len: int) -> int:
    # normalize type to int
    if isinstance(dim_sel, bool):
        raise PositionError(f"Position component {dim} must be an integer. Got {dim_sel!r}.")
    try:
        dim_sel = operator.index(dim_sel)  # type: ignore[arg-type]
    except TypeError as e:
        raise PositionError(
            f"Position component {dim} must be an integer. Got {dim_sel!r}."
        ) from e

    # no wraparound: negative components are out of bounds
    if dim_sel < 0 or dim_sel >= dim_len:
        raise PositionError(dim, dim_len - 1)

    return dim_sel


def check_position(position: PositionLike, shape: Shape) -> Position:
    """
    Validate a position against a shape.

    Raises
    ------
    PositionError
        If the position does not have one component per dimension, or if a component is not an
        integer in ``[0, shape[i] - 1]``.
    """
    try:
        n_components = len(position)
    except TypeError as e:
        raise PositionError(
            f"Expected a sequence of {len(shape)} integers as position. Got {position!r}."
        ) from e
    if n_components != len(shape):
        raise PositionError(
            f"The position argument contains {n_components} elements instead of {len(shape)}."
        )
    return tuple(
        normalize_position_component(p, dim, dim_len)
        for dim, (p, dim_len) in enumerate(zip(position, shape, strict=True))
    )


def flat_offset(position: Position, strides: Strides) -> int:
    """
    The offset of a position in a flat buffer: the dot product of the position and the strides.
    """
    return sum(p * s for p, s in zip(position, strides, strict=True))


def next_position(
    position: Sequence[int], min: Sequence[int], max: Sequence[int]
) -> Position | None:
    """
    Within an N-dimensional bounding box and given a position in this bounding box, find the next
    position in row-major order, i.e. the one closest to it in a flat 'C' order buffer.

    The fastest varying (last) dimension is incremented first. When it reaches its upper bound,
    it goes back to its lower bound and the next slower dimension is incremented.

    Parameters
    ----------
    position : Sequence[int]
        The current position, from the slowest varying dimension to the fastest.
    min : Sequence[int]
        The inclusive lower bound of the bounding box.
    max : Sequence[int]
        The exclusive upper bound of the bounding box.

    Returns
    -------
    tuple[int, ...] | None
        The next position, or None if ``position`` is the last position of the bounding box or
        is not inside the bounding box.

    Examples
    --------
    >>> next_position((0, 2), (0, 0), (2, 3))
    (1, 0)
    >>> next_position((1, 2), (0, 0), (2, 3)) is None
    True
    """
    for p, lo, hi in zip(position, min, max, strict=True):
        if p < lo or p >= hi:
            return None

    next_pos = list(position)
    for i in range(len(position) - 1, -1, -1):
        if next_pos[i] + 1 < max[i]:
            next_pos[i] += 1
            return tuple(next_pos)
        # back to the beginning of this dimension, the next slower one is incremented
        next_pos[i] = min[i]
    return None


def iter_positions(min: Sequence[int], max: Sequence[int]) -> Iterator[Position]:
    """
    Iterate over all the positions of an N-dimensional bounding box in row-major order.

    Examples
    --------
    >>> tuple(iter_positions((1, 1), (3, 3)))
    ((1, 1), (1, 2), (2, 1), (2, 2))
    """
    if len(min) != len(max):
        msg = (
            "The lower and upper bounds must have the same length. "
            f"Got {len(min)} elements in min, but {len(max)} elements in max."
        )
        raise ShapeError(msg)
    position: Position | None = tuple(min)
    if any(lo >= hi for lo, hi in zip(min, max, strict=True)):
        # empty bounding box
        return
    while position is not None:
        yield position
        position = next_position(position, min, max)


class Region(NamedTuple):
    """An axis-aligned region of a raster, with inclusive ``min`` and exclusive ``max``."""

    min: Position
    max: Position

    @property
    def shape(self) -> Shape:
        return tuple(hi - lo for lo, hi in zip(self.min, self.max, strict=True))


def _parse_bound(data: Sequence[int], name: str, ndim: int) -> Position:
    try:
        bound = tuple(data)
    except TypeError as e:
        raise ShapeError(f"The {name} boundary must be a sequence of {ndim} integers.") from e
    if len(bound) != ndim:
        raise ShapeError(f"The boundaries must contain {ndim} elements. Got {len(bound)} in {name}.")
    try:
        return tuple(operator.index(b) for b in bound)
    except TypeError as e:
        raise ShapeError(f"The {name} boundary must contain integers. Got {bound!r}.") from e


def parse_region(
    shape: Shape,
    min: Sequence[int] | None = None,
    max: Sequence[int] | None = None,
    *,
    strict: bool = False,
) -> Region:
    """
    Resolve the bounds of a region of an array of the given shape.

    Parameters
    ----------
    shape : tuple[int, ...]
        The shape of the array the region belongs to.
    min : Sequence[int] | None, default=None
        The inclusive lower bound of the region, one integer per dimension. Defaults to the
        origin.
    max : Sequence[int] | None, default=None
        The exclusive upper bound of the region, one integer per dimension. Defaults to ``shape``.
    strict : bool, default=False
        In strict mode, bounds outside of the array are an error. Otherwise they are clamped to
        ``[0, shape[i]]``.

    Raises
    ------
    ShapeError
        If a bound does not have one integer per dimension, or if the region is empty.
    PositionError
        In strict mode, if a bound lies outside of the array.
    """
    ndim = len(shape)
    lower = (0,) * ndim if min is None else _parse_bound(min, "min", ndim)
    upper = tuple(shape) if max is None else _parse_bound(max, "max", ndim)

    if strict:
        for i, (lo, hi, dim_len) in enumerate(zip(lower, upper, shape, strict=True)):
            if lo < 0 or lo > dim_len - 1 or hi < 1 or hi > dim_len:
                raise PositionError(
                    f"The largest boundaries possible for dimension {i} are [0, {dim_len}]. "
                    f"Got [{lo}, {hi}]."
                )
    else:
        # the bound arguments shadow the min and max builtins
        clamped_lower = tuple(
            builtins.min(builtins.max(lo, 0), d) for lo, d in zip(lower, shape, strict=True)
        )
        clamped_upper = tuple(
            builtins.min(builtins.max(hi, 0), d) for hi, d in zip(upper, shape, strict=True)
        )
        if clamped_lower != lower or clamped_upper != upper:
            logger.debug(
                "parse_region: clamped region [%s, %s) to [%s, %s) for shape %s",
                lower,
                upper,
                clamped_lower,
                clamped_upper,
                shape,
            )
        lower, upper = clamped_lower, clamped_upper

    region = Region(lower, upper)
    if any(extent <= 0 for extent in region.shape):
        raise ShapeError(f"The region [{lower}, {upper}) is empty.")
    return region

