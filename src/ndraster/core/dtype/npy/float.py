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

TFloatDType_co = TypeVar(
    "TFloatDType_co", bound=np.dtypes.Float32DType | np.dtypes.Float64DType, covariant=True
)
TFloatScalar_co = TypeVar("TFloatScalar_co", bound=np.float32 | np.float64, covariant=True)


@dataclass(frozen=True)
class BaseFloat(RDType[TFloatDType_co, TFloatScalar_co]):
    """
    A base class for data types that wrap NumPy float data types.

    Float data types are bounded by -inf and +inf, so saturation never changes a value. Values
    too large for the width of the data type become infinite.
    """

    @property
    def bounds(self) -> Bounds:
        return Bounds(-math.inf, math.inf)

    def _check_scalar(self, data: object) -> TypeGuard[RealLike]:
        return check_real(data)

    def _cast_scalar_unchecked(self, data: RealLike) -> TFloatScalar_co:
        value = real_to_python(data)
        if isinstance(value, int):
            try:
                value = float(value)
            except OverflowError:
                value = math.inf if value > 0 else -math.inf
        with np.errstate(over="ignore"):
            return self.to_native_dtype().type(value)  # type: ignore[return-value]

    def saturate(self, values: npt.NDArray[np.generic]) -> npt.NDArray[np.generic]:
        check_convertible_array(values)
        with np.errstate(over="ignore"):
            return values.astype(self.to_native_dtype())


@dataclass(frozen=True, kw_only=True)
class Float32(BaseFloat[np.dtypes.Float32DType, np.float32]):
    """
    A data type for rasters containing 32-bit floating point numbers.

    Wraps the ``np.dtypes.Float32DType`` data type. Scalars for this data type are instances
    of ``np.float32``.
    """

    dtype_cls = np.dtypes.Float32DType
    _tag: ClassVar[Literal["float32"]] = "float32"
    numeric_class: ClassVar[Literal["float"]] = "float"


@dataclass(frozen=True, kw_only=True)
class Float64(BaseFloat[np.dtypes.Float64DType, np.float64]):
    """
    A data type for rasters containing 64-bit floating point numbers.

    Wraps the ``np.dtypes.Float64DType`` data type. Scalars for this data type are instances
    of ``np.float64``. This is the default data type of a raster.
    """

    dtype_cls = np.dtypes.Float64DType
    _tag: ClassVar[Literal["float64"]] = "float64"
    numeric_class: ClassVar[Literal["float"]] = "float"
