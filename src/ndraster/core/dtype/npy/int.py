from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Literal, TypeGuard, TypeVar

import numpy as np

from ndraster.core.common import Bounds
from ndraster.core.dtype.npy.common import (
    RealLike,
    check_convertible_array,
    check_real,
    real_to_python,
)
from ndraster.core.dtype.wrapper import RDType

if TYPE_CHECKING:
    import numpy.typing as npt

_NumpyIntDType = (
    np.dtypes.Int8DType
    | np.dtypes.Int16DType
    | np.dtypes.Int32DType
    | np.dtypes.Int64DType
    | np.dtypes.UInt8DType
    | np.dtypes.UInt16DType
    | np.dtypes.UInt32DType
    | np.dtypes.UInt64DType
)
_NumpyIntScalar = (
    np.int8 | np.int16 | np.int32 | np.int64 | np.uint8 | np.uint16 | np.uint32 | np.uint64
)
TIntDType_co = TypeVar("TIntDType_co", bound=_NumpyIntDType, covariant=True)
TIntScalar_co = TypeVar("TIntScalar_co", bound=_NumpyIntScalar, covariant=True)


@dataclass(frozen=True)
class BaseInt(RDType[TIntDType_co, TIntScalar_co]):
    """
    A base class for integer data types.

    The bounds of an integer data type are the full range of its width. Writes outside of that
    range saturate: they are clamped to the nearest bound. Floating point values are truncated
    toward zero, and NaN is stored as 0.
    """

    @property
    def bounds(self) -> Bounds:
        info = np.iinfo(self.to_native_dtype())
        return Bounds(int(info.min), int(info.max))

    def _check_scalar(self, data: object) -> TypeGuard[RealLike]:
        return check_real(data)

    def _cast_scalar_unchecked(self, data: RealLike) -> TIntScalar_co:
        value = real_to_python(data)
        lo, hi = self.bounds
        if isinstance(value, float) and math.isnan(value):
            value = 0
        elif value < lo:
            value = lo
        elif value > hi:
            value = hi
        return self.to_native_dtype().type(math.trunc(value))  # type: ignore[return-value]

    def saturate(self, values: npt.NDArray[np.generic]) -> npt.NDArray[np.generic]:
        check_convertible_array(values)
        target = self.to_native_dtype()
        lo, hi = self.bounds

        if values.dtype.kind == "b":
            values = values.astype(np.uint8)

        if values.dtype.kind in ("i", "u"):
            # clipping within the range of the source keeps the bounds representable
            info = np.iinfo(values.dtype)
            return np.clip(values, max(lo, int(info.min)), min(hi, int(info.max))).astype(target)

        data = values.astype(np.float64)
        out = np.zeros(values.shape, dtype=target)
        below = data <= lo
        above = data >= hi
        inside = ~(below | above | np.isnan(data))
        out[inside] = data[inside].astype(target)
        out[below] = lo
        out[above] = hi
        return out


@dataclass(frozen=True, kw_only=True)
class Int8(BaseInt[np.dtypes.Int8DType, np.int8]):
    """
    A data type for rasters containing 8-bit signed integers.

    Wraps the ``np.dtypes.Int8DType`` data type. Scalars for this data type are
    instances of ``np.int8``.
    """

    dtype_cls = np.dtypes.Int8DType
    _tag: ClassVar[Literal["int8"]] = "int8"
    numeric_class: ClassVar[Literal["signed"]] = "signed"


@dataclass(frozen=True, kw_only=True)
class UInt8(BaseInt[np.dtypes.UInt8DType, np.uint8]):
    """
    A data type for rasters containing 8-bit unsigned integers.

    Wraps the ``np.dtypes.UInt8DType`` data type. Scalars for this data type are instances of
    ``np.uint8``.
    """

    dtype_cls = np.dtypes.UInt8DType
    _tag: ClassVar[Literal["uint8"]] = "uint8"
    numeric_class: ClassVar[Literal["unsigned"]] = "unsigned"


@dataclass(frozen=True, kw_only=True)
class Int16(BaseInt[np.dtypes.Int16DType, np.int16]):
    """
    A data type for rasters containing 16-bit signed integers.
    """

    dtype_cls = np.dtypes.Int16DType
    _tag: ClassVar[Literal["int16"]] = "int16"
    numeric_class: ClassVar[Literal["signed"]] = "signed"


@dataclass(frozen=True, kw_only=True)
class UInt16(BaseInt[np.dtypes.UInt16DType, np.uint16]):
    """
    A data type for rasters containing 16-bit unsigned integers.
    """

    dtype_cls = np.dtypes.UInt16DType
    _tag: ClassVar[Literal["uint16"]] = "uint16"
    numeric_class: ClassVar[Literal["unsigned"]] = "unsigned"


@dataclass(frozen=True, kw_only=True)
class Int32(BaseInt[np.dtypes.Int32DType, np.int32]):
    """
    A data type for rasters containing 32-bit signed integers.
    """

    dtype_cls = np.dtypes.Int32DType
    _tag: ClassVar[Literal["int32"]] = "int32"
    numeric_class: ClassVar[Literal["signed"]] = "signed"


@dataclass(frozen=True, kw_only=True)
class UInt32(BaseInt[np.dtypes.UInt32DType, np.uint32]):
    """
    A data type for rasters containing 32-bit unsigned integers.
    """

    dtype_cls = np.dtypes.UInt32DType
    _tag: ClassVar[Literal["uint32"]] = "uint32"
    numeric_class: ClassVar[Literal["unsigned"]] = "unsigned"


@dataclass(frozen=True, kw_only=True)
class Int64(BaseInt[np.dtypes.Int64DType, np.int64]):
    """
    A data type for rasters containing 64-bit signed integers.
    """

    dtype_cls = np.dtypes.Int64DType
    _tag: ClassVar[Literal["int64"]] = "int64"
    numeric_class: ClassVar[Literal["signed"]] = "signed"


@dataclass(frozen=True, kw_only=True)
class UInt64(BaseInt[np.dtypes.UInt64DType, np.uint64]):
    """
    A data type for rasters containing 64-bit unsigned integers.
    """

    dtype_cls = np.dtypes.UInt64DType
    _tag: ClassVar[Literal["uint64"]] = "uint64"
    numeric_class: ClassVar[Literal["unsigned"]] = "unsigned"
