from __future__ import annotations

import math
import numbers
from typing import TypeGuard

import numpy as np
import numpy.typing as npt

from ndraster.core.dtype.common import CONVERTIBLE_KINDS
from ndraster.errors import DataError

RealLike = numbers.Real | np.bool_


def check_real(data: object) -> TypeGuard[RealLike]:
    """
    Check that an object is a real number. Booleans count as the integers 0 and 1.
    NumPy integer and floating scalars are registered as ``numbers.Real``.
    """
    return isinstance(data, numbers.Real | np.bool_)


def is_nan(data: RealLike) -> bool:
    return isinstance(data, float | np.floating) and math.isnan(data)


def real_to_python(data: RealLike) -> int | float:
    """
    Convert a real number to a python ``int`` or ``float``, so that comparisons against the bounds
    of any data type are exact.
    """
    if isinstance(data, numbers.Integral | np.bool_):
        return int(data)
    return float(data)


def check_convertible_array(values: npt.NDArray[np.generic]) -> None:
    if values.dtype.kind not in CONVERTIBLE_KINDS:
        raise DataError(
            f"Cannot convert an array with data type {values.dtype} to a numeric raster data type."
        )
