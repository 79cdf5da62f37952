from __future__ import annotations

import array
import math
import re
from typing import Any

import numpy as np
import pytest

from ndraster.core.config import config
from ndraster.core.dtype import (
    DataTypeRegistry,
    Float32,
    Float64,
    Int8,
    Int64,
    RDType,
    TBaseDType,
    TBaseScalar,
    UInt8,
    UInt16,
    as_typed_buffer,
    bounds_of,
    data_type_registry,
    infer_dtype,
    is_valid_dtype,
    parse_dtype,
    parse_dtype_default,
)
from ndraster.core.dtype.common import DataTypeValidationError
from ndraster.errors import ConfigurationError

from .test_dtype.conftest import rdtype_examples

ALL_TAGS = (
    "uint8",
    "int8",
    "uint16",
    "int16",
    "uint32",
    "int32",
    "uint64",
    "int64",
    "float32",
    "float64",
)


@pytest.fixture
def data_type_registry_fixture() -> DataTypeRegistry:
    return DataTypeRegistry()


class TestRegistry:
    @staticmethod
    def test_register(data_type_registry_fixture: DataTypeRegistry) -> None:
        """
        Test that registering a dtype in a data type registry works.
        """
        data_type_registry_fixture.register(UInt8._tag, UInt8)
        assert data_type_registry_fixture.get(UInt8._tag) == UInt8
        assert isinstance(data_type_registry_fixture.match_dtype(np.dtype("uint8")), UInt8)

    @staticmethod
    def test_override(data_type_registry_fixture: DataTypeRegistry) -> None:
        """
        Test that registering a new dtype with the same tag works (overriding the previous one).
        """
        data_type_registry_fixture.register(UInt8._tag, UInt8)

        class NewUInt8(UInt8):
            def default_scalar(self) -> np.uint8:
                return np.uint8(1)

        data_type_registry_fixture.register(NewUInt8._tag, NewUInt8)
        assert isinstance(data_type_registry_fixture.match_dtype(np.dtype("uint8")), NewUInt8)

    @staticmethod
    def test_unregister(data_type_registry_fixture: DataTypeRegistry) -> None:
        data_type_registry_fixture.register(UInt8._tag, UInt8)
        data_type_registry_fixture.unregister(UInt8._tag)
        assert UInt8._tag not in data_type_registry_fixture.contents
        with pytest.raises(KeyError, match="not found in registry"):
            data_type_registry_fixture.unregister(UInt8._tag)

    @staticmethod
    def test_ambiguous_match(data_type_registry_fixture: DataTypeRegistry) -> None:
        """
        Test that match_dtype refuses to pick between two wrappers of the same dtype.
        """
        data_type_registry_fixture.register("uint8", UInt8)
        data_type_registry_fixture.register("byte", UInt8)
        with pytest.raises(DataTypeValidationError, match="Multiple data type wrappers"):
            data_type_registry_fixture.match_dtype(np.dtype("uint8"))

    @staticmethod
    def test_unregistered_dtype(data_type_registry_fixture: DataTypeRegistry) -> None:
        """
        Test that match_dtype raises an error if the dtype is not registered.
        """
        outside_dtype_name = "int8"
        outside_dtype = np.dtype(outside_dtype_name)
        msg = f"No raster data type found that matches dtype '{outside_dtype!r}'"
        with pytest.raises(ValueError, match=re.escape(msg)):
            data_type_registry_fixture.match_dtype(outside_dtype)

        with pytest.raises(KeyError):
            data_type_registry_fixture.get(outside_dtype_name)

    @staticmethod
    @pytest.mark.parametrize("rdtype", rdtype_examples)
    def test_registered_dtypes_match_dtype(rdtype: RDType[TBaseDType, TBaseScalar]) -> None:
        """
        Test that the registered dtypes can be retrieved from the registry.
        """
        assert data_type_registry.match_dtype(rdtype.to_native_dtype()) == rdtype


def test_registry_contents() -> None:
    assert tuple(data_type_registry.contents) == ALL_TAGS


@pytest.mark.parametrize("tag", ALL_TAGS)
def test_is_valid_dtype(tag: str) -> None:
    assert is_valid_dtype(tag)


@pytest.mark.parametrize("tag", ["float16", "bool", "UINT8", "", None, 8, np.dtype("uint8")])
def test_is_valid_dtype_invalid(tag: Any) -> None:
    assert not is_valid_dtype(tag)


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("uint8", (0, 255)),
        ("int8", (-128, 127)),
        ("uint16", (0, 65535)),
        ("int16", (-32768, 32767)),
        ("uint32", (0, 4294967295)),
        ("int32", (-2147483648, 2147483647)),
        ("uint64", (0, 18446744073709551615)),
        ("int64", (-9223372036854775808, 9223372036854775807)),
        ("float32", (-math.inf, math.inf)),
        ("float64", (-math.inf, math.inf)),
    ],
)
def test_bounds_of(tag: str, expected: tuple[float, float]) -> None:
    bounds = bounds_of(tag)
    assert bounds == expected
    assert (bounds.min, bounds.max) == expected


@pytest.mark.parametrize(
    ("dtype_like", "expected"),
    [
        ("uint8", UInt8()),
        (UInt16(), UInt16()),
        (np.dtype("int8"), Int8()),
        (np.float32, Float32()),
        ("<f8", Float64()),
        ("i8", Int64()),
    ],
)
def test_parse_dtype(dtype_like: Any, expected: RDType[Any, Any]) -> None:
    assert parse_dtype(dtype_like) == expected


@pytest.mark.parametrize("dtype_like", ["float16", "bool", "U4", "not a dtype", None, np.complex128])
def test_parse_dtype_invalid(dtype_like: Any) -> None:
    with pytest.raises(ConfigurationError, match="Invalid value for 'dtype'"):
        parse_dtype(dtype_like)


def test_parse_dtype_default() -> None:
    assert parse_dtype_default() == Float64()
    with config.set({"raster.dtype": "int16"}):
        assert parse_dtype_default().tag == "int16"
    with config.set({"raster.dtype": "complex"}), pytest.raises(ConfigurationError):
        parse_dtype_default()


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (np.zeros(3, dtype="uint8"), UInt8()),
        (np.zeros((2, 2), dtype=">i8"), Int64()),
        (array.array("d", [1.0]), Float64()),
        (array.array("b", [1]), Int8()),
        (bytearray(b"ab"), UInt8()),
        (memoryview(b"ab"), UInt8()),
    ],
)
def test_infer_dtype(data: object, expected: RDType[Any, Any]) -> None:
    assert infer_dtype(data) == expected


@pytest.mark.parametrize(
    "data",
    [
        [1, 2, 3],
        (1.0, 2.0),
        "abc",
        1.5,
        None,
        np.zeros(3, dtype="float16"),
        np.zeros(3, dtype="bool"),
        np.zeros(3, dtype="complex64"),
    ],
)
def test_infer_dtype_none(data: object) -> None:
    assert infer_dtype(data) is None


def test_as_typed_buffer_shares_memory() -> None:
    source = bytearray(4)
    buffer = as_typed_buffer(source)
    assert buffer is not None
    buffer[1] = 7
    assert source[1] == 7
    assert as_typed_buffer([1, 2]) is None
