from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from ndraster.core.dtype import as_typed_buffer, infer_dtype
from ndraster.errors import DataError

if TYPE_CHECKING:
    from collections.abc import Iterable

    import numpy.typing as npt

    from ndraster.core.dtype import RDType
    from ndraster.core.dtype.npy.common import RealLike


def empty_buffer(dtype: RDType[Any, Any], length: int) -> npt.NDArray[np.generic]:
    """
    Allocate a zero-filled flat buffer of ``length`` elements of ``dtype``.
    """
    return np.zeros(length, dtype=dtype.to_native_dtype())


def buffer_from_scalars(
    values: Iterable[RealLike], dtype: RDType[Any, Any]
) -> npt.NDArray[np.generic]:
    """
    Allocate a flat buffer of ``dtype`` and fill it with ``values``, saturated one by one into
    the bounds of ``dtype``.
    """
    return np.array([dtype.cast_scalar(v) for v in values], dtype=dtype.to_native_dtype())


def flat_view(buffer: npt.NDArray[np.generic]) -> npt.NDArray[np.generic]:
    """
    Return a one-dimensional view of a C-contiguous array, without copying.

    Raises
    ------
    DataError
        If the array is not C-contiguous, in which case no flat view of it exists.
    """
    if not buffer.flags.c_contiguous:
        raise DataError("Only C-contiguous buffers can be used without copying them.")
    return buffer.reshape(-1)


def copy_as_type(data: object, dtype: RDType[Any, Any]) -> npt.NDArray[np.generic]:
    """
    Copy a typed buffer into a new flat buffer of ``dtype``.

    If the buffer already has the requested data type, its elements are duplicated verbatim.
    Otherwise every element is converted, clamped to the bounds of ``dtype``.

    Parameters
    ----------
    data : object
        A NumPy array or an object exposing the buffer protocol.
    dtype : RDType
        The data type of the copy.

    Returns
    -------
    np.ndarray
        A new one-dimensional array, in 'C' order, that shares no memory with ``data``.

    Raises
    ------
    DataError
        If ``data`` is not a typed buffer, or if its elements are not numbers.
    """
    buffer = as_typed_buffer(data)
    if buffer is None:
        raise DataError(f"Expected a typed buffer. Got {type(data).__name__} instead.")
    if infer_dtype(buffer) == dtype:
        return np.array(buffer, copy=True, order="C").reshape(-1)
    return dtype.saturate(np.ravel(buffer, order="C"))
