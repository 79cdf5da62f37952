__all__ = [
    "BaseRasterError",
    "ConfigurationError",
    "DataError",
    "InvalidValueError",
    "PositionError",
    "ShapeError",
]


class BaseRasterError(ValueError):
    """
    Base error which all ndraster errors are sub-classed from.
    """

    _msg: str = "{}"

    def __init__(self, *args: object) -> None:
        """
        If a single argument is passed, treat it as a pre-formatted message.

        If multiple arguments are passed, they are used as arguments for a template string class
        variable.
        """
        if len(args) == 1:
            super().__init__(args[0])
        else:
            super().__init__(self._msg.format(*args))


class ConfigurationError(BaseRasterError):
    """
    Raised when the options used to construct a raster are invalid: a missing shape and data,
    an unknown data type, a malformed shape, or a shape that does not match the data.
    """

    _msg = "Invalid value for '{}'. Expected {}. Got {!r}."


class ShapeError(BaseRasterError):
    """
    Raised when a shape or a pair of region bounds is inconsistent with the data of a raster.
    """

    _msg = "The shape {!r} does not describe {} elements."


class PositionError(BaseRasterError, IndexError):
    """
    Raised when a position does not address an element of a raster.
    """

    _msg = "Position component {} is out of bounds. Must be in [0, {}]."


class InvalidValueError(BaseRasterError):
    """
    Raised when a value that is not a number, or that is NaN, is written to a raster.
    """

    _msg = "The value must be a number. Got {!r}."


class DataError(BaseRasterError):
    """
    Raised when the data used to construct a raster is neither a typed buffer nor a well-formed
    nested sequence.
    """
