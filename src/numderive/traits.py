"""
Runtime numeric-conversion capabilities.

Generated code imports this module inside its private scope and attaches
the derived methods with :func:`implement`. The capability classes are
abstract base classes; a derived type is registered as a virtual subclass
and receives the default methods it does not define itself.

Integer widths follow two's complement. The cast helpers reinterpret bit
patterns without range checks, so ``u64_to_i64(2**64 - 1) == -1`` and
``i64_to_u64(-1) == 2**64 - 1``.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Self

I8_MIN, I8_MAX = -(2**7), 2**7 - 1
I16_MIN, I16_MAX = -(2**15), 2**15 - 1
I32_MIN, I32_MAX = -(2**31), 2**31 - 1
I64_MIN, I64_MAX = -(2**63), 2**63 - 1
U8_MAX = 2**8 - 1
U16_MAX = 2**16 - 1
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1


def wrap_i64(n: int) -> int:
    """Reduce ``n`` to the signed 64-bit range by two's-complement wrapping."""
    return ((n - I64_MIN) & U64_MAX) + I64_MIN


def u64_to_i64(n: int) -> int:
    """Reinterpret an unsigned 64-bit value as signed."""
    return wrap_i64(n & U64_MAX)


def i64_to_u64(n: int) -> int:
    """Reinterpret a signed 64-bit value as unsigned."""
    return n & U64_MAX


def _in_range(n: int | None, low: int, high: int) -> int | None:
    if n is None or not low <= n <= high:
        return None
    return n


class FromPrimitive(ABC):
    """
    Capability to build a value from an integer.

    Implementors provide :meth:`from_i64` and :meth:`from_u64`; the other
    constructors delegate to them. Inputs outside the named width give None.
    """

    @classmethod
    @abstractmethod
    def from_i64(cls, n: int) -> Self | None:
        """Convert a signed 64-bit integer, None when no value matches."""

    @classmethod
    @abstractmethod
    def from_u64(cls, n: int) -> Self | None:
        """Convert an unsigned 64-bit integer, None when no value matches."""

    @classmethod
    def from_i8(cls, n: int) -> Self | None:
        return cls.from_i64(n) if _in_range(n, I8_MIN, I8_MAX) is not None else None

    @classmethod
    def from_i16(cls, n: int) -> Self | None:
        return cls.from_i64(n) if _in_range(n, I16_MIN, I16_MAX) is not None else None

    @classmethod
    def from_i32(cls, n: int) -> Self | None:
        return cls.from_i64(n) if _in_range(n, I32_MIN, I32_MAX) is not None else None

    @classmethod
    def from_u8(cls, n: int) -> Self | None:
        return cls.from_u64(n) if _in_range(n, 0, U8_MAX) is not None else None

    @classmethod
    def from_u16(cls, n: int) -> Self | None:
        return cls.from_u64(n) if _in_range(n, 0, U16_MAX) is not None else None

    @classmethod
    def from_u32(cls, n: int) -> Self | None:
        return cls.from_u64(n) if _in_range(n, 0, U32_MAX) is not None else None

    @classmethod
    def from_int(cls, n: int) -> Self | None:
        """Convert any Python int, trying the signed range first."""
        if I64_MIN <= n <= I64_MAX:
            return cls.from_i64(n)
        if 0 <= n <= U64_MAX:
            return cls.from_u64(n)
        return None

    @classmethod
    def from_float(cls, x: float) -> Self | None:
        """Convert a float truncated toward zero; NaN and infinities give None."""
        if math.isnan(x) or math.isinf(x):
            return None
        return cls.from_int(math.trunc(x))


class ToPrimitive(ABC):
    """
    Capability to extract an integer from a value.

    Implementors provide :meth:`to_i64`; :meth:`to_u64` reinterprets it and
    the narrower conversions range-check it.
    """

    @abstractmethod
    def to_i64(self) -> int | None:
        """Return the value as a signed 64-bit integer."""

    def to_u64(self) -> int | None:
        value = self.to_i64()
        return i64_to_u64(value) if value is not None else None

    def to_i8(self) -> int | None:
        return _in_range(self.to_i64(), I8_MIN, I8_MAX)

    def to_i16(self) -> int | None:
        return _in_range(self.to_i64(), I16_MIN, I16_MAX)

    def to_i32(self) -> int | None:
        return _in_range(self.to_i64(), I32_MIN, I32_MAX)

    def to_u8(self) -> int | None:
        return _in_range(self.to_i64(), 0, U8_MAX)

    def to_u16(self) -> int | None:
        return _in_range(self.to_i64(), 0, U16_MAX)

    def to_u32(self) -> int | None:
        return _in_range(self.to_i64(), 0, U32_MAX)

    def to_float(self) -> float | None:
        value = self.to_i64()
        return float(value) if value is not None else None


def _default_methods(trait: type) -> dict[str, Any]:
    """Collect the non-abstract public methods a trait provides."""
    defaults = {}
    for name, attr in vars(trait).items():
        if name.startswith("_") or name in trait.__abstractmethods__:
            continue
        if callable(attr) or isinstance(attr, classmethod):
            defaults[name] = attr
    return defaults


def implement(cls: type, trait: type, **methods: Any) -> type:
    """
    Attach a capability's methods to ``cls`` and register it with the trait.

    Args:
        cls: Type receiving the capability
        trait: FromPrimitive, ToPrimitive or another ABC
        **methods: Method objects by name (functions or classmethods)

    Returns:
        ``cls``, for chaining

    Raises:
        TypeError: If an abstract method of the trait is left undefined
    """
    missing = sorted(
        name for name in trait.__abstractmethods__ if name not in methods and not hasattr(cls, name)
    )
    if missing:
        raise TypeError(
            f"Cannot implement {trait.__name__} for {cls.__name__}: "
            f"missing {', '.join(missing)}"
        )

    for name, method in methods.items():
        setattr(cls, name, method)
    for name, method in _default_methods(trait).items():
        if not hasattr(cls, name):
            setattr(cls, name, method)

    trait.register(cls)
    return cls
