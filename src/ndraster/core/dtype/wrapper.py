"""
Wrapper for the native array data types a raster can store.

The ``RDType`` class is an abstract base class for wrapping fixed-width numeric NumPy dtypes.
Instances of the class can be created from a native data type instance, and a native data type
instance can be created from an instance of the wrapper class.

The wrapper class is responsible for:
- Naming the data type with a short tag, e.g. ``"uint8"``, used by the registry and by users.
- Describing the storage of the data type: its width in bytes and its numeric class.
- Describing the inclusive range of values the data type can hold, and saturating scalars and
  arrays into that range. Values outside the range are clamped to the nearest bound; they never
  wrap around.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    ClassVar,
    Generic,
    Self,
    TypeGuard,
    TypeVar,
)

import numpy as np

from ndraster.core.dtype.common import DataTypeValidationError, HasItemSize

if TYPE_CHECKING:
    import numpy.typing as npt

    from ndraster.core.common import Bounds
    from ndraster.core.dtype.common import NumericClass

TBaseScalar = np.generic
TBaseDType = np.dtype[np.generic]

# These two type parameters are covariant because we want
# x : RDType[BaseDType, BaseScalar] = RDType[SubDType, SubScalar]
# to type check
TScalar_co = TypeVar("TScalar_co", bound=TBaseScalar, covariant=True)
TDType_co = TypeVar("TDType_co", bound=TBaseDType, covariant=True)


@dataclass(frozen=True, kw_only=True, slots=True)
class RDType(ABC, HasItemSize, Generic[TDType_co, TScalar_co]):
    """
    Abstract base class for wrapping the fixed-width numeric NumPy dtypes a raster can store.

    Attributes
    ----------
    dtype_cls : ClassVar[type[TDType]]
        The wrapped dtype class. This is a class variable.
    _tag : ClassVar[str]
        The name of the data type, unique across data types.
    numeric_class : ClassVar[NumericClass]
        Whether the data type stores unsigned integers, signed integers or floats.
    """

    dtype_cls: ClassVar[type[TDType_co]]  # type: ignore[misc]
    _tag: ClassVar[str]
    numeric_class: ClassVar[NumericClass]

    @property
    def tag(self) -> str:
        return self._tag

    @classmethod
    def _check_native_dtype(cls: type[Self], dtype: TBaseDType) -> TypeGuard[TDType_co]:
        """
        Check that a native data type matches the dtype_cls class attribute, regardless of its
        byte order.

        Used as a type guard. Equality is used rather than a class check because some numpy
        dtypes share a width and a kind but not a class, e.g. ``np.dtype("q")`` and
        ``np.dtype("l")`` on 64-bit Linux.

        Parameters
        ----------
        dtype : TDType
            The dtype to check.

        Returns
        -------
        Bool
            True if the dtype matches, False otherwise.
        """
        if not isinstance(dtype, np.dtype):
            return False
        return bool(dtype.newbyteorder("=") == cls.dtype_cls())

    @classmethod
    def from_native_dtype(cls: type[Self], dtype: TBaseDType) -> Self:
        """
        Create an RDType instance from a native data type.

        Parameters
        ----------
        dtype : TDType
            The native data type object to wrap.

        Returns
        -------
        Self
            The RDType that wraps the native data type.

        Raises
        ------
        DataTypeValidationError
            If the native data type is not consistent with the wrapped data type.
        """
        if cls._check_native_dtype(dtype):
            return cls()
        raise DataTypeValidationError(
            f"Invalid data type: {dtype}. Expected an instance of {cls.dtype_cls}"
        )

    def to_native_dtype(self: Self) -> TDType_co:
        """
        Return an instance of the wrapped data type. This operation inverts ``from_native_dtype``.

        Returns
        -------
        TDType
            The native data type wrapped by this RDType, in native byte order.
        """
        return self.dtype_cls()

    @property
    def item_size(self) -> int:
        return self.to_native_dtype().itemsize

    @property
    @abstractmethod
    def bounds(self) -> Bounds:
        """
        The inclusive range of values this data type can store.
        """
        raise NotImplementedError  # pragma: no cover

    @abstractmethod
    def _check_scalar(self, data: object) -> bool:
        """
        Check that a python object is a valid scalar value for the wrapped data type.
        """
        raise NotImplementedError  # pragma: no cover

    @abstractmethod
    def _cast_scalar_unchecked(self, data: object) -> TScalar_co:
        """
        Saturate a valid scalar into the range of this data type and cast it to the native
        scalar type.
        """
        raise NotImplementedError  # pragma: no cover

    def cast_scalar(self, data: object) -> TScalar_co:
        """
        Cast a python object to the native scalar type, clamping it to the bounds of this data
        type.

        Raises
        ------
        TypeError
            If the object is not a real number.
        """
        if self._check_scalar(data):
            return self._cast_scalar_unchecked(data)
        msg = (
            f"Cannot convert object {data!r} with type {type(data)} to a scalar compatible with the "
            f"data type {self}."
        )
        raise TypeError(msg)

    def default_scalar(self) -> TScalar_co:
        """
        Get the default value, which is 0 cast to this dtype.
        """
        return self._cast_scalar_unchecked(0)

    @abstractmethod
    def saturate(self, values: npt.NDArray[np.generic]) -> npt.NDArray[np.generic]:
        """
        Convert an array of numbers into a newly allocated array of this data type, clamping
        every element to the bounds of this data type.

        Raises
        ------
        DataError
            If the array is not of a boolean, integer or floating kind.
        """
        raise NotImplementedError  # pragma: no cover

    def __str__(self) -> str:
        return self._tag
