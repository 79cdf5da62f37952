from __future__ import annotations

from typing import TYPE_CHECKING, Final, TypeAlias

import numpy as np
import numpy.typing as npt

from ndraster.core.config import config
from ndraster.core.dtype.common import (
    DataTypeValidationError,
    NumericClass,
)
from ndraster.core.dtype.npy.float import Float32, Float64
from ndraster.core.dtype.npy.int import Int8, Int16, Int32, Int64, UInt8, UInt16, UInt32, UInt64
from ndraster.core.dtype.registry import DataTypeRegistry
from ndraster.core.dtype.wrapper import RDType, TBaseDType, TBaseScalar
from ndraster.errors import ConfigurationError

if TYPE_CHECKING:
    from ndraster.core.common import Bounds

__all__ = [
    "FLOAT_DTYPE",
    "INTEGER_DTYPE",
    "DataTypeRegistry",
    "DataTypeValidationError",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "NumericClass",
    "RDType",
    "RDTypeLike",
    "TBaseDType",
    "TBaseScalar",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "as_typed_buffer",
    "bounds_of",
    "data_type_registry",
    "infer_dtype",
    "is_valid_dtype",
    "parse_dtype",
    "parse_dtype_default",
]

data_type_registry = DataTypeRegistry()

INTEGER_DTYPE: Final = UInt8, Int8, UInt16, Int16, UInt32, Int32, UInt64, Int64

FLOAT_DTYPE: Final = Float32, Float64

ANY_DTYPE: Final = (*INTEGER_DTYPE, *FLOAT_DTYPE)

# This type models inputs that can be coerced to an RDType
RDTypeLike: TypeAlias = RDType[TBaseDType, TBaseScalar] | str | npt.DTypeLike

for dtype in ANY_DTYPE:
    data_type_registry.register(dtype._tag, dtype)  # type: ignore[arg-type]


def is_valid_dtype(tag: object) -> bool:
    """
    Tell whether a tag names one of the registered data types, e.g. ``"uint8"``.
    """
    return isinstance(tag, str) and tag in data_type_registry.contents


def parse_dtype(dtype_like: RDTypeLike) -> RDType[TBaseDType, TBaseScalar]:
    """
    Convert the input to an RDType.

    Parameters
    ----------
    dtype_like : RDTypeLike
        An RDType, which is returned directly, the tag of a registered data type, or anything
        ``np.dtype`` accepts that resolves to one of the registered data types.

    Returns
    -------
    RDType[TBaseDType, TBaseScalar]
        The RDType corresponding to the input.

    Raises
    ------
    ConfigurationError
        If the input does not resolve to a registered data type.

    Examples
    --------
    >>> parse_dtype("uint8")
    UInt8()
    >>> parse_dtype(np.dtype("<f4"))
    Float32()
    """
    if isinstance(dtype_like, RDType):
        return dtype_like
    if is_valid_dtype(dtype_like):
        return data_type_registry.get(dtype_like)()  # type: ignore[arg-type]
    if dtype_like is not None:
        try:
            return data_type_registry.match_dtype(np.dtype(dtype_like))
        except (TypeError, ValueError):
            # DataTypeValidationError is a ValueError
            pass
    raise ConfigurationError("dtype", f"one of {tuple(data_type_registry.contents)}", dtype_like)


def bounds_of(tag: RDTypeLike) -> Bounds:
    """
    The inclusive ``(min, max)`` range of values a data type can store.

    Examples
    --------
    >>> bounds_of("int8")
    Bounds(min=-128, max=127)
    """
    return parse_dtype(tag).bounds


def parse_dtype_default() -> RDType[TBaseDType, TBaseScalar]:
    """
    The data type of rasters created without an explicit data type, read from the
    ``raster.dtype`` config value.

    Raises
    ------
    ConfigurationError
        If the config value does not name a registered data type.
    """
    return parse_dtype(config.get("raster.dtype"))


def as_typed_buffer(data: object) -> npt.NDArray[np.generic] | None:
    """
    Return a NumPy array sharing memory with ``data`` if ``data`` is a typed buffer, i.e. a NumPy
    array or an object exposing the buffer protocol (``array.array``, ``bytearray``,
    ``memoryview``...). Return None otherwise.

    Python lists and tuples, strings and scalars are not typed buffers.
    """
    if isinstance(data, np.ndarray):
        return data
    if isinstance(data, list | tuple | str):
        return None
    try:
        view = memoryview(data)  # type: ignore[arg-type]
    except TypeError:
        return None
    try:
        return np.asarray(view)
    except (TypeError, ValueError):
        # buffer formats that numpy does not understand
        return None


def infer_dtype(data: object) -> RDType[TBaseDType, TBaseScalar] | None:
    """
    Determine the data type of a typed buffer from the element type it carries.

    Returns
    -------
    RDType | None
        The matching data type, or None if ``data`` is not a typed buffer or if its element type
        is not one of the registered data types.
    """
    buffer = as_typed_buffer(data)
    if buffer is None:
        return None
    try:
        return data_type_registry.match_dtype(buffer.dtype)
    except DataTypeValidationError:
        return None
