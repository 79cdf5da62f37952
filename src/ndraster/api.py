"""
Functions that create rasters.

``raster`` picks between aliasing and copying the input from its type, its data type and the
``copy`` option, the way a typed array constructor would. ``zeros``, ``borrow`` and ``from_data``
each commit to one of those outcomes, and should be preferred when the caller knows which one it
wants.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ndraster.core.buffer import buffer_from_scalars, copy_as_type, empty_buffer, flat_view
from ndraster.core.common import parse_bool, parse_shapelike, product
from ndraster.core.config import config
from ndraster.core.dtype import (
    as_typed_buffer,
    infer_dtype,
    parse_dtype,
    parse_dtype_default,
)
from ndraster.core.nested import flatten_nested, is_nested_sequence
from ndraster.core.raster import Raster
from ndraster.errors import ConfigurationError, DataError

if TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt

    from ndraster.core.common import Shape, ShapeLike
    from ndraster.core.dtype import RDType, RDTypeLike

__all__ = ["borrow", "from_data", "raster", "zeros"]

logger = logging.getLogger(__name__)


def _resolve_dtype(dtype: RDTypeLike | None) -> RDType[Any, Any]:
    if dtype is None:
        return parse_dtype_default()
    return parse_dtype(dtype)


def _resolve_shape(shape: Shape | None, default: Shape, size: int) -> Shape:
    """
    Pick the explicit shape if there is one, and check that it describes ``size`` elements.
    """
    if shape is None:
        return default
    if product(shape) != size:
        raise ConfigurationError("shape", f"a shape describing {size} elements", shape)
    return shape


def _buffer_shape(buffer: npt.NDArray[np.generic]) -> Shape:
    if buffer.size == 0:
        raise DataError("An empty buffer cannot be used as data.")
    if buffer.ndim == 0:
        return (1,)
    return tuple(buffer.shape)


def _from_nested(data: Any, shape: Shape | None, dtype: RDTypeLike | None) -> Raster:
    values, nested_shape = flatten_nested(data)
    target = _resolve_dtype(dtype)
    resolved = _resolve_shape(shape, nested_shape, len(values))
    return Raster(buffer_from_scalars(values, target), data_type=target, shape=resolved)


def raster(
    data: object = None,
    *,
    shape: ShapeLike | None = None,
    dtype: RDTypeLike | None = None,
    copy: bool | None = None,
) -> Raster:
    """
    Create a raster from data, from a shape, or from both.

    Parameters
    ----------
    data : object, optional
        The initial content of the raster: a nested sequence of numbers, e.g.
        ``[[1, 2], [3, 4]]``, or a typed buffer, i.e. a NumPy array or any object exposing the
        buffer protocol such as ``array.array`` or ``bytearray``.
    shape : int or tuple of int, optional
        The shape of the raster. Required if ``data`` is not given. Otherwise it overrides the
        shape of the data and must describe as many elements.
    dtype : str, RDType or np.dtype, optional
        The data type of the raster. Defaults to the data type of a typed buffer, or to the
        ``raster.dtype`` config value (``float64``) for nested sequences and shapes.
    copy : bool, optional
        Whether a typed buffer is copied even when it could be used in place. Defaults to the
        ``raster.copy`` config value (False).

    Returns
    -------
    Raster
        A zero-filled raster if only a shape is given. A raster borrowing the memory of ``data``
        if it is a C-contiguous typed buffer of the requested data type and ``copy`` is False.
        Otherwise a raster owning a saturated copy of ``data``.

    Raises
    ------
    ConfigurationError
        If neither ``data`` nor ``shape`` are given, if ``shape`` or ``dtype`` are invalid, or if
        ``shape`` does not describe as many elements as ``data``.
    DataError
        If ``data`` is neither a well-formed nested sequence nor a typed buffer.

    Examples
    --------
    >>> import numpy as np
    >>> import ndraster
    >>> ndraster.raster([[1, 2, 3], [4, 5, 6]]).shape
    (2, 3)
    >>> buffer = np.arange(4, dtype="uint8")
    >>> ndraster.raster(buffer, shape=(2, 2)).owns_data
    False
    """
    copy = parse_bool(config.get("raster.copy") if copy is None else copy)
    shape_parsed = None if shape is None else parse_shapelike(shape)

    if data is None:
        if shape_parsed is None:
            raise ConfigurationError("Either data or a shape is required to create a raster.")
        return zeros(shape_parsed, dtype=dtype)

    if is_nested_sequence(data):
        return _from_nested(data, shape_parsed, dtype)

    buffer = as_typed_buffer(data)
    if buffer is None:
        raise DataError(
            "Expected a nested sequence of numbers or a typed buffer as data. "
            f"Got {type(data).__name__} instead."
        )
    inferred = infer_dtype(buffer)
    target = inferred if dtype is None else parse_dtype(dtype)
    if target is None:
        raise DataError(
            f"The data type of the buffer ({buffer.dtype}) is not supported. "
            "Provide a data type to convert it."
        )
    resolved = _resolve_shape(shape_parsed, _buffer_shape(buffer), buffer.size)

    if not copy and target == inferred:
        if buffer.flags.c_contiguous:
            logger.debug("raster: borrowing a %s buffer of %d elements", target, buffer.size)
            return Raster(flat_view(buffer), data_type=target, shape=resolved, owns_data=False)
        logger.debug("raster: copying a buffer that is not C-contiguous")

    logger.debug(
        "raster: copying a %s buffer of %d elements as %s", buffer.dtype, buffer.size, target
    )
    return Raster(copy_as_type(buffer, target), data_type=target, shape=resolved)


def zeros(shape: ShapeLike, *, dtype: RDTypeLike | None = None) -> Raster:
    """Create a raster filled with zeros.

    Parameters
    ----------
    shape : int or tuple of int
        Shape of the raster.
    dtype : str, RDType or np.dtype, optional
        The data type of the raster. Defaults to the ``raster.dtype`` config value.

    Returns
    -------
    Raster
        The new raster.
    """
    shape_parsed = parse_shapelike(shape)
    target = _resolve_dtype(dtype)
    return Raster(empty_buffer(target, product(shape_parsed)), data_type=target, shape=shape_parsed)


def borrow(
    buffer: object, *, shape: ShapeLike | None = None, dtype: RDTypeLike | None = None
) -> Raster:
    """
    Create a raster sharing the memory of a typed buffer. Writes to the raster are visible in the
    buffer, and the other way around.

    Parameters
    ----------
    buffer : object
        A C-contiguous NumPy array, or an object exposing the buffer protocol.
    shape : int or tuple of int, optional
        The shape of the raster. Defaults to the shape of the buffer.
    dtype : str, RDType or np.dtype, optional
        The expected data type. It must be the data type of the buffer.

    Raises
    ------
    DataError
        If the buffer cannot be used in place: it is not a typed buffer, its data type is not
        supported or is not ``dtype``, or it is not C-contiguous.
    ConfigurationError
        If ``shape`` or ``dtype`` are invalid, or if ``shape`` does not describe as many elements
        as the buffer.
    """
    array = as_typed_buffer(buffer)
    if array is None:
        raise DataError(f"Only typed buffers can be borrowed. Got {type(buffer).__name__}.")
    inferred = infer_dtype(array)
    if inferred is None:
        raise DataError(f"Buffers of data type {array.dtype} cannot be borrowed.")
    if dtype is not None and parse_dtype(dtype) != inferred:
        raise DataError(
            f"The buffer has data type {inferred}, which is not the requested {parse_dtype(dtype)}."
        )
    shape_parsed = None if shape is None else parse_shapelike(shape)
    resolved = _resolve_shape(shape_parsed, _buffer_shape(array), array.size)
    return Raster(flat_view(array), data_type=inferred, shape=resolved, owns_data=False)


def from_data(
    data: object, *, shape: ShapeLike | None = None, dtype: RDTypeLike | None = None
) -> Raster:
    """
    Create a raster owning a copy of a nested sequence or of a typed buffer. The elements are
    saturated into the bounds of ``dtype``.

    Parameters
    ----------
    data : object
        A nested sequence of numbers or a typed buffer.
    shape : int or tuple of int, optional
        The shape of the raster. Defaults to the shape of the data.
    dtype : str, RDType or np.dtype, optional
        The data type of the raster. Defaults to the data type of a typed buffer, or to the
        ``raster.dtype`` config value for nested sequences.

    Raises
    ------
    DataError
        If ``data`` is neither a well-formed nested sequence nor a typed buffer.
    ConfigurationError
        If ``shape`` or ``dtype`` are invalid, or if ``shape`` does not describe as many elements
        as ``data``.
    """
    if data is None:
        raise DataError("Data is required. Use zeros to create a raster from a shape.")
    return raster(data, shape=shape, dtype=dtype, copy=True)
