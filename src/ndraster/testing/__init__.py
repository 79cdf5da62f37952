from ndraster.testing.utils import assert_raster_equal

__all__ = ["assert_raster_equal"]
