from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

    from ndraster.core.raster import Raster

__all__ = ["assert_raster_equal"]


def assert_raster_equal(actual: Raster, expected: Raster | npt.ArrayLike) -> None:
    """Helper function to assert that a raster has the expected shape and elements

    If ``expected`` is a raster, its data type must also match.
    """
    from ndraster.core.raster import Raster

    if isinstance(expected, Raster):
        assert actual.dtype == expected.dtype
        expected = expected.to_numpy()
    expected_array = np.asarray(expected)
    assert actual.shape == expected_array.shape
    np.testing.assert_array_equal(actual.to_numpy(), expected_array)
