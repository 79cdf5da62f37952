import math
from typing import Any

import hypothesis.extra.numpy as npst
import hypothesis.strategies as st
import numpy.typing as npt
from hypothesis import event

import ndraster
from ndraster.core.dtype import INTEGER_DTYPE, RDType, data_type_registry
from ndraster.core.raster import Raster

data_type_tags: st.SearchStrategy[str] = st.sampled_from(tuple(data_type_registry.contents))
integer_data_type_tags: st.SearchStrategy[str] = st.sampled_from(
    tuple(cls._tag for cls in INTEGER_DTYPE)
)
# We de-prioritize rasters having dim sizes 1 and 2
raster_shapes = npst.array_shapes(
    min_dims=1, max_dims=4, min_side=3, max_side=5
) | npst.array_shapes(min_dims=1, max_dims=4, min_side=1, max_side=5)


def data_types() -> st.SearchStrategy[RDType[Any, Any]]:
    return data_type_tags.map(lambda tag: data_type_registry.get(tag)())


@st.composite
def numpy_arrays(
    draw: st.DrawFn,
    *,
    shapes: st.SearchStrategy[tuple[int, ...]] = raster_shapes,
    data_type: RDType[Any, Any] | None = None,
    allow_nan: bool = False,
) -> npt.NDArray[Any]:
    """
    Generate numpy arrays with the native dtype of a raster data type.
    """
    if data_type is None:
        data_type = draw(data_types())
    dtype = data_type.to_native_dtype()
    elements = None
    if data_type.numeric_class == "float":
        elements = st.floats(
            allow_nan=allow_nan, allow_infinity=False, width=8 * data_type.item_size
        )
    return draw(npst.arrays(dtype=dtype, shape=shapes, elements=elements))


@st.composite
def rasters(
    draw: st.DrawFn,
    *,
    shapes: st.SearchStrategy[tuple[int, ...]] = raster_shapes,
    data_types: st.SearchStrategy[RDType[Any, Any]] = data_types(),  # noqa: B008
) -> Raster:
    """
    Generate rasters owning a copy of a random numpy array.
    """
    data_type = draw(data_types, label="data type")
    array = draw(numpy_arrays(shapes=shapes, data_type=data_type), label="data")
    event("dimensions", len(array.shape))
    return ndraster.from_data(array)


@st.composite
def positions(draw: st.DrawFn, *, shape: tuple[int, ...]) -> tuple[int, ...]:
    return draw(st.tuples(*[st.integers(min_value=0, max_value=size - 1) for size in shape]))


@st.composite
def out_of_bounds_positions(draw: st.DrawFn, *, shape: tuple[int, ...]) -> tuple[int, ...]:
    """
    Positions with exactly one component outside of ``[0, shape[i] - 1]``.
    """
    position = list(draw(positions(shape=shape)))
    dim = draw(st.integers(min_value=0, max_value=len(shape) - 1))
    position[dim] = draw(
        st.integers(max_value=-1) | st.integers(min_value=shape[dim]), label="component"
    )
    return tuple(position)


@st.composite
def regions(
    draw: st.DrawFn, *, shape: tuple[int, ...]
) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """
    Non-empty regions ``(min, max)`` of an array of the given shape, with inclusive ``min`` and
    exclusive ``max``.
    """
    lower = draw(positions(shape=shape))
    upper = draw(
        st.tuples(
            *[
                st.integers(min_value=lo + 1, max_value=size)
                for lo, size in zip(lower, shape, strict=True)
            ]
        )
    )
    return lower, upper


@st.composite
def nested_sequences(
    draw: st.DrawFn,
    *,
    shapes: st.SearchStrategy[tuple[int, ...]] = raster_shapes,
    elements: st.SearchStrategy[Any] = st.integers(min_value=-(2**40), max_value=2**40),  # noqa: B008
) -> tuple[list[Any], tuple[int, ...]]:
    """
    Generate regular nested lists of numbers along with their shape.
    """
    shape = draw(shapes)
    size = math.prod(shape)
    flat = draw(st.lists(elements, min_size=size, max_size=size))
    nested: Any = flat
    for dim_len in reversed(shape[1:]):
        nested = [nested[i : i + dim_len] for i in range(0, len(nested), dim_len)]
    return nested, shape
