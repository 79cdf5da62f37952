"""
The config module is responsible for managing the configuration of ndraster and is based on the
Donfig python library.

Example:
    The data type used for rasters created without an explicit ``dtype`` is read from
    ``raster.dtype``. It can be changed programmatically, for a block of code or globally:

    ```python
    from ndraster.core.config import config

    with config.set({"raster.dtype": "uint8"}):
        ...
    ```

    Instead of setting the value programmatically with ``config.set``, you can also set the value
    with an environment variable. The environment variable ``NDRASTER_RASTER__DTYPE`` can be set to
    ``uint8``. The double underscore ``__`` is used to indicate nested access.

    ```bash
    export NDRASTER_RASTER__DTYPE="uint8"
    ```

For more information, see the Donfig documentation at https://github.com/pytroll/donfig.
"""

from __future__ import annotations

from typing import Any

from donfig import Config as DConfig


class BadConfigError(ValueError):
    _msg = "bad Config: %r"


class Config(DConfig):  # type: ignore[misc]
    """The Config will collect configuration from config files and environment variables

    Example environment variables:
    Grabs environment variables of the form "NDRASTER_FOO__BAR_BAZ=123" and
    turns these into config variables of the form ``{"foo": {"bar-baz": 123}}``
    It transforms the key and value in the following way:

    -  Lower-cases the key text
    -  Treats ``__`` (double-underscore) as nested access
    -  Calls ``ast.literal_eval`` on the value

    """

    def reset(self) -> None:
        self.clear()
        self.refresh()


# The default configuration for ndraster
config = Config(
    "ndraster",
    defaults=[
        {
            "raster": {
                "dtype": "float64",
                "copy": False,
            },
            "nested": {
                "max_depth": 32,
            },
        }
    ],
)


def parse_max_depth(data: Any) -> int:
    if isinstance(data, int) and not isinstance(data, bool) and data > 0:
        return data
    msg = f"Expected a positive integer for 'nested.max_depth', got {data!r} instead."
    raise BadConfigError(msg)
