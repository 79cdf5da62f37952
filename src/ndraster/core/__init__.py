"""
The ``ndraster.core`` module is considered private API and should not be imported
directly by 3rd-party code.
"""

from __future__ import annotations

from ndraster.core.raster import Raster  # noqa: F401
