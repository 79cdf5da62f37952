from __future__ import annotations

import logging
import operator
from typing import TYPE_CHECKING, Any

import numpy as np

from ndraster.core.buffer import copy_as_type
from ndraster.core.common import derive_strides
from ndraster.core.dtype import parse_dtype
from ndraster.core.dtype.npy.common import check_real, is_nan
from ndraster.core.indexing import check_position, flat_offset, iter_positions, parse_region
from ndraster.errors import DataError, InvalidValueError, ShapeError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    import numpy.typing as npt

    from ndraster.core.common import Bounds, PositionLike, Shape, Strides
    from ndraster.core.dtype import RDType, RDTypeLike

logger = logging.getLogger(__name__)


class Raster:
    """
    A fixed-width N-dimensional array of numbers.

    The elements are stored in a flat, one-dimensional buffer in row-major ('C') order. The shape
    and the strides, both from the slowest varying dimension to the fastest, map a position to an
    offset in that buffer. Every element written to a raster is saturated into the bounds of its
    data type: out of range values are clamped to the nearest bound instead of wrapping around.

    Rasters are usually created with ``ndraster.raster``, ``ndraster.zeros``, ``ndraster.borrow``
    or ``ndraster.from_data`` rather than by calling this class directly.

    Parameters
    ----------
    data : np.ndarray
        A one-dimensional array with one element per position of the raster.
    data_type : RDType
        The data type of the elements. It must match the dtype of ``data``.
    shape : tuple[int, ...]
        The shape of the raster. Its product must equal the length of ``data``.
    owns_data : bool, default=True
        False if ``data`` is an alias of a buffer owned by the caller.

    Raises
    ------
    DataError
        If ``data`` is not a one-dimensional array of ``data_type``.
    ShapeError
        If ``shape`` is not a valid shape for ``data``.
    """

    _data: npt.NDArray[np.generic]
    _data_type: RDType[Any, Any]
    _shape: Shape
    _strides: Strides
    _owns_data: bool

    def __init__(
        self,
        data: npt.NDArray[np.generic],
        *,
        data_type: RDType[Any, Any],
        shape: Sequence[int],
        owns_data: bool = True,
    ) -> None:
        if not isinstance(data, np.ndarray) or data.ndim != 1:
            raise DataError("The data of a raster must be a one-dimensional NumPy array.")
        if not data_type._check_native_dtype(data.dtype):
            raise DataError(
                f"The data has dtype {data.dtype}, which does not match the data type {data_type}."
            )
        shape = tuple(shape)
        self._strides = derive_strides(shape, expected_size=data.size)
        self._shape = shape
        self._data = data
        self._data_type = data_type
        self._owns_data = owns_data

    @property
    def shape(self) -> Shape:
        """Returns the shape of the raster.

        Returns
        -------
        tuple[int, ...]
            The length of every dimension, from the slowest varying to the fastest.
        """
        return self._shape

    @property
    def strides(self) -> Strides:
        """Returns the strides of the raster, in elements.

        Returns
        -------
        tuple[int, ...]
            The offset between two consecutive positions along every dimension.
        """
        return self._strides

    @property
    def dtype(self) -> str:
        """Returns the tag of the data type of the raster, e.g. ``"uint8"``."""
        return self._data_type.tag

    @property
    def data_type(self) -> RDType[Any, Any]:
        """
        The wrapper of the data type of the raster.
        """
        return self._data_type

    @property
    def data(self) -> npt.NDArray[np.generic]:
        """
        The flat buffer holding the elements. This is not a copy: writes to it are visible
        through the raster, and through the caller's buffer if the raster borrows it.
        """
        return self._data

    @property
    def bounds(self) -> Bounds:
        """
        The inclusive range of values the raster can store.
        """
        return self._data_type.bounds

    @property
    def dimensions(self) -> int:
        """Returns the number of dimensions of the raster.

        Returns
        -------
        int
            The number of dimensions of the raster.
        """
        return len(self._shape)

    @property
    def size(self) -> int:
        """Returns the total number of elements in the raster.

        Returns
        -------
        int
            Total number of elements in the raster.
        """
        return int(self._data.size)

    @property
    def owns_data(self) -> bool:
        """
        False if the buffer of the raster is shared with the object it was created from.
        """
        return self._owns_data

    def _offset(self, position: PositionLike) -> int:
        return flat_offset(check_position(position, self._shape), self._strides)

    def get(self, position: PositionLike) -> np.generic:
        """
        Read the element at a position.

        Parameters
        ----------
        position : Sequence[int]
            One integer per dimension, each in ``[0, shape[i] - 1]``.

        Returns
        -------
        np.generic
            The element, as a scalar of the data type of the raster.

        Raises
        ------
        PositionError
            If the position does not address an element of the raster.

        Examples
        --------
        >>> import ndraster
        >>> r = ndraster.raster([[1, 2, 3], [4, 5, 6]], dtype="int16")
        >>> r.get((1, 2))
        np.int16(6)
        """
        return self._data[self._offset(position)]  # type: ignore[no-any-return]

    def set(self, position: PositionLike, value: object) -> None:
        """
        Write an element at a position.

        The value is saturated into the bounds of the data type of the raster. For integer data
        types, floating point values are truncated toward zero.

        Parameters
        ----------
        position : Sequence[int]
            One integer per dimension, each in ``[0, shape[i] - 1]``.
        value : numbers.Real
            The value to write. It must be a number, and not NaN.

        Raises
        ------
        PositionError
            If the position does not address an element of the raster.
        InvalidValueError
            If the value is not a number, or is NaN.

        Examples
        --------
        >>> import ndraster
        >>> r = ndraster.zeros((2, 2), dtype="uint8")
        >>> r.set((0, 1), 300)
        >>> r.get((0, 1))
        np.uint8(255)
        """
        offset = self._offset(position)
        if not check_real(value):
            raise InvalidValueError(f"The value must be a number. Got {value!r}.")
        if is_nan(value):
            raise InvalidValueError("NaN cannot be written to a raster.")
        self._data[offset] = self._data_type.cast_scalar(value)

    def __getitem__(self, position: PositionLike | int) -> np.generic:
        if isinstance(position, int):
            position = (position,)
        return self.get(position)

    def __setitem__(self, position: PositionLike | int, value: object) -> None:
        if isinstance(position, int):
            position = (position,)
        self.set(position, value)

    def __len__(self) -> int:
        return self._shape[0]

    def __repr__(self) -> str:
        return f"<Raster shape={self._shape} dtype={self.dtype}>"

    def reshape(self, shape: Iterable[int] | int) -> None:
        """
        Change the shape of the raster in place. The data is neither moved nor copied.

        Parameters
        ----------
        shape : Iterable[int] | int
            The new shape. It must describe as many elements as the raster holds.

        Raises
        ------
        ShapeError
            If the new shape is malformed or does not describe ``size`` elements. The raster is
            left unchanged.
        """
        if isinstance(shape, int):
            shape = (shape,)
        try:
            new_shape = tuple(shape)
        except TypeError as e:
            raise ShapeError(f"Expected an iterable of integers as shape. Got {shape!r}.") from e
        # strides are derived first so a failure leaves the raster untouched
        strides = derive_strides(new_shape, expected_size=self.size)
        logger.debug("reshape: %s -> %s", self._shape, new_shape)
        self._shape = tuple(operator.index(d) for d in new_shape)
        self._strides = strides

    def copy(self, dtype: RDTypeLike | None = None) -> Raster:
        """
        Create a raster of the same shape with a newly allocated buffer.

        Parameters
        ----------
        dtype : RDTypeLike | None, default=None
            The data type of the copy. Defaults to the data type of this raster, in which case the
            elements are duplicated verbatim. Otherwise every element is saturated into the
            bounds of the new data type.

        Raises
        ------
        ConfigurationError
            If ``dtype`` is not a valid data type.
        """
        target = self._data_type if dtype is None else parse_dtype(dtype)
        logger.debug("copy: %s -> %s, %d elements", self._data_type, target, self.size)
        return Raster(
            copy_as_type(self._data, target), data_type=target, shape=self._shape, owns_data=True
        )

    def astype(self, dtype: RDTypeLike) -> Raster:
        """
        Copy the raster into a new data type, saturating every element. Equivalent to
        ``copy(dtype)``.
        """
        return self.copy(dtype)

    def slice(
        self,
        *,
        min: Sequence[int] | None = None,
        max: Sequence[int] | None = None,
        dtype: RDTypeLike | None = None,
        strict: bool = False,
    ) -> Raster:
        """
        Copy an axis-aligned region of the raster into a new raster.

        Parameters
        ----------
        min : Sequence[int] | None, default=None
            The inclusive lower bound of the region, one integer per dimension. Defaults to the
            origin.
        max : Sequence[int] | None, default=None
            The exclusive upper bound of the region, one integer per dimension. Defaults to the
            shape of the raster.
        dtype : RDTypeLike | None, default=None
            The data type of the new raster. Defaults to the data type of this raster.
        strict : bool, default=False
            If True, bounds outside of the raster are an error. Otherwise they are clamped to
            ``[0, shape[i]]``.

        Returns
        -------
        Raster
            A raster of shape ``max - min`` that owns its buffer.

        Raises
        ------
        ShapeError
            If a bound does not have one integer per dimension, or if the region is empty.
        PositionError
            In strict mode, if a bound lies outside of the raster.
        ConfigurationError
            If ``dtype`` is not a valid data type.

        Examples
        --------
        >>> import ndraster
        >>> r = ndraster.raster([[0, 1, 2, 3], [4, 5, 6, 7], [8, 9, 10, 11], [12, 13, 14, 15]])
        >>> r.slice(min=(1, 1), max=(3, 3)).tolist()
        [[5.0, 6.0], [9.0, 10.0]]
        """
        if min is None and max is None:
            return self.copy(dtype)
        target = self._data_type if dtype is None else parse_dtype(dtype)
        region = parse_region(self._shape, min, max, strict=strict)
        values = np.array(
            [self.get(position) for position in iter_positions(region.min, region.max)],
            dtype=self._data_type.to_native_dtype(),
        )
        return Raster(
            copy_as_type(values, target), data_type=target, shape=region.shape, owns_data=True
        )

    def to_numpy(self) -> npt.NDArray[np.generic]:
        """
        Return an N-dimensional view of the buffer of the raster, without copying.
        """
        return self._data.reshape(self._shape)

    def tolist(self) -> Any:
        """
        Return the elements of the raster as nested lists of python numbers.
        """
        return self.to_numpy().tolist()
