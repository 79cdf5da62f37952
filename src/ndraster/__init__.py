from ndraster._version import version as __version__
from ndraster.api import borrow, from_data, raster, zeros
from ndraster.core.buffer import copy_as_type
from ndraster.core.common import Bounds, derive_strides
from ndraster.core.config import config
from ndraster.core.dtype import bounds_of, infer_dtype, is_valid_dtype, parse_dtype
from ndraster.core.indexing import iter_positions, next_position
from ndraster.core.nested import flatten_nested, get_nested_shape, is_nested_sequence
from ndraster.core.raster import Raster


def print_debug_info() -> None:
    """
    Print version info for use in bug reports.
    """
    import platform
    from importlib.metadata import PackageNotFoundError, version

    def print_packages(packages: list[str]) -> None:
        not_installed = []
        for package in packages:
            try:
                print(f"{package}: {version(package)}")
            except PackageNotFoundError:
                not_installed.append(package)
        if not_installed:
            print("\n**Not Installed:**")
            for package in not_installed:
                print(package)

    required = [
        "numpy",
        "donfig",
    ]
    optional = [
        "hypothesis",
        "pytest",
    ]

    print(f"platform: {platform.platform()}")
    print(f"python: {platform.python_version()}")
    print(f"ndraster: {__version__}\n")
    print("**Required dependencies:**")
    print_packages(required)
    print("\n**Optional dependencies:**")
    print_packages(optional)


__all__ = [
    "Bounds",
    "Raster",
    "__version__",
    "borrow",
    "bounds_of",
    "config",
    "copy_as_type",
    "derive_strides",
    "flatten_nested",
    "from_data",
    "get_nested_shape",
    "infer_dtype",
    "is_nested_sequence",
    "is_valid_dtype",
    "iter_positions",
    "next_position",
    "parse_dtype",
    "print_debug_info",
    "raster",
    "zeros",
]
