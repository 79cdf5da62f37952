from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Self

from ndraster.core.dtype.common import DataTypeValidationError

if TYPE_CHECKING:
    from ndraster.core.dtype.wrapper import TBaseDType, TBaseScalar, RDType


@dataclass(frozen=True, kw_only=True)
class DataTypeRegistry:
    """
    A registry for RDType classes.

    This registry is a mapping from data type tags to their corresponding RDType classes.

    Attributes
    ----------
    contents : dict[str, type[RDType[TBaseDType, TBaseScalar]]]
        The mapping from data type tags to their corresponding RDType classes.
    """

    contents: dict[str, type[RDType[TBaseDType, TBaseScalar]]] = field(
        default_factory=dict, init=False
    )

    def register(self: Self, key: str, cls: type[RDType[TBaseDType, TBaseScalar]]) -> None:
        """
        Register a data type with the registry.

        Parameters
        ----------
        key : str
            The tag of the data type.
        cls : type[RDType[TBaseDType, TBaseScalar]]
            The class of the data type to register.

        Notes
        -----
        This method is idempotent. If the data type is already registered, this
        method does nothing.
        """
        if key not in self.contents or self.contents[key] != cls:
            self.contents[key] = cls

    def unregister(self, key: str) -> None:
        """
        Unregister a data type from the registry.

        Raises
        ------
        KeyError
            If the data type is not found in the registry.
        """
        if key in self.contents:
            del self.contents[key]
        else:
            raise KeyError(f"Data type '{key}' not found in registry.")

    def get(self, key: str) -> type[RDType[TBaseDType, TBaseScalar]]:
        """
        Retrieve a registered RDType class by its tag.

        Raises
        ------
        KeyError
            If the key is not found in the registry.
        """

        return self.contents[key]

    def match_dtype(self, dtype: TBaseDType) -> RDType[TBaseDType, TBaseScalar]:
        """
        Match a native NumPy data type to a registered RDType.

        Parameters
        ----------
        dtype : TBaseDType
            The native data type to match.

        Returns
        -------
        RDType[TBaseDType, TBaseScalar]
            The matched RDType corresponding to the provided NumPy data type.

        Raises
        ------
        DataTypeValidationError
            If multiple or no registered data types match the provided dtype.
        """
        matched: list[RDType[TBaseDType, TBaseScalar]] = []
        for val in self.contents.values():
            try:
                matched.append(val.from_native_dtype(dtype))
            except DataTypeValidationError:
                continue
        if len(matched) == 1:
            return matched[0]
        elif len(matched) > 1:
            msg = (
                f"Data type resolution from {dtype} failed. "
                f"Multiple data type wrappers found that match dtype '{dtype}': {matched}. "
                "Unregister one of these data types, or provide a data type explicitly."
            )
            raise DataTypeValidationError(msg)
        raise DataTypeValidationError(f"No raster data type found that matches dtype '{dtype!r}'")
