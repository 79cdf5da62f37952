from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

NumericClass = Literal["unsigned", "signed", "float"]
NUMERIC_CLASS: Final = "unsigned", "signed", "float"

# numpy dtype kinds that can be converted into one of the raster data types
CONVERTIBLE_KINDS: Final = "b", "i", "u", "f"


class DataTypeValidationError(ValueError): ...


@dataclass(frozen=True, kw_only=True)
class HasItemSize:
    """
    A mix-in class for data types with an item size attribute.
    This mix-in bears a property ``item_size``, which denotes the size of each element of the data
    type, in bytes.
    """

    @property
    def item_size(self) -> int:
        raise NotImplementedError
