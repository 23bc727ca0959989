"""
numderive - derive numeric conversions for Python enumerations.

Generates FromPrimitive (from_i64 / from_u64) and ToPrimitive
(to_i64 / to_u64) implementations from the syntax tree of an enum class.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .config import DeriveOptions
from .core import ir
from .core.errors import DescriptorError, GenerationError, NumDeriveError, ValidationError
from .derive import (
    FROM_PRIMITIVE,
    TO_PRIMITIVE,
    derive,
    derive_definition,
    derive_from_primitive,
    derive_source,
    derive_to_primitive,
)
from .traits import FromPrimitive, ToPrimitive

try:
    __version__ = version("numderive")
except PackageNotFoundError:
    # Source checkout without an install
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "ir",
    "DeriveOptions",
    "FROM_PRIMITIVE",
    "TO_PRIMITIVE",
    "derive",
    "derive_definition",
    "derive_from_primitive",
    "derive_source",
    "derive_to_primitive",
    "FromPrimitive",
    "ToPrimitive",
    "NumDeriveError",
    "DescriptorError",
    "ValidationError",
    "GenerationError",
]
