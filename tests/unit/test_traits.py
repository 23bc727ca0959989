"""Tests for the runtime capability classes and casts."""

import math
from enum import Enum

import pytest

from numderive.traits import (
    I64_MAX,
    I64_MIN,
    U64_MAX,
    FromPrimitive,
    ToPrimitive,
    i64_to_u64,
    implement,
    u64_to_i64,
    wrap_i64,
)


class TestCasts:
    """Test two's-complement reinterpretation."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, 0),
            (-1, -1),
            (I64_MAX, I64_MAX),
            (I64_MAX + 1, I64_MIN),
            (I64_MIN - 1, I64_MAX),
            (2**64, 0),
            (2**64 + 5, 5),
        ],
    )
    def test_wrap_i64(self, value, expected):
        assert wrap_i64(value) == expected

    def test_u64_to_i64(self):
        assert u64_to_i64(5) == 5
        assert u64_to_i64(I64_MAX) == I64_MAX
        assert u64_to_i64(2**63) == I64_MIN
        assert u64_to_i64(U64_MAX) == -1

    def test_i64_to_u64(self):
        assert i64_to_u64(7) == 7
        assert i64_to_u64(-1) == U64_MAX
        assert i64_to_u64(I64_MIN) == 2**63

    def test_round_trip(self):
        for value in (0, 1, -1, I64_MIN, I64_MAX, 123456789):
            assert u64_to_i64(i64_to_u64(value)) == value


class Level(Enum):
    LOW = 1
    MID = 200
    HIGH = 300
    NEG = -1


def _from_i64(cls, n):
    for member in cls:
        if member.value == n:
            return member
    return None


def _from_u64(cls, n):
    return cls.from_i64(u64_to_i64(n))


def _to_i64(self):
    return self.value


implement(
    Level,
    FromPrimitive,
    from_i64=classmethod(_from_i64),
    from_u64=classmethod(_from_u64),
)
implement(Level, ToPrimitive, to_i64=_to_i64)


class TestImplement:
    """Test attaching capabilities to a type."""

    def test_registered_as_virtual_subclass(self):
        assert issubclass(Level, FromPrimitive)
        assert isinstance(Level.LOW, ToPrimitive)

    def test_missing_abstract_method(self):
        class Other(Enum):
            A = 1

        with pytest.raises(TypeError) as exc_info:
            implement(Other, FromPrimitive, from_i64=classmethod(_from_i64))
        assert str(exc_info.value) == "Cannot implement FromPrimitive for Other: missing from_u64"
        assert not issubclass(Other, FromPrimitive)

    def test_existing_methods_kept(self):
        class Custom(Enum):
            A = 1

            def to_i8(self):
                return 99

        implement(Custom, ToPrimitive, to_i64=_to_i64)
        assert Custom.A.to_i8() == 99
        assert Custom.A.to_i16() == 1

    def test_returns_class(self):
        class Solo(Enum):
            A = 0

        assert implement(Solo, ToPrimitive, to_i64=_to_i64) is Solo


class TestFromPrimitiveDefaults:
    """Test constructors derived from from_i64 / from_u64."""

    def test_narrow_signed(self):
        assert Level.from_i8(1) is Level.LOW
        assert Level.from_i8(200) is None
        assert Level.from_i16(200) is Level.MID
        assert Level.from_i32(-1) is Level.NEG

    def test_narrow_unsigned(self):
        assert Level.from_u8(200) is Level.MID
        assert Level.from_u8(300) is None
        assert Level.from_u16(300) is Level.HIGH
        assert Level.from_u32(-1) is None

    def test_from_int(self):
        assert Level.from_int(300) is Level.HIGH
        assert Level.from_int(U64_MAX) is Level.NEG
        assert Level.from_int(2**64) is None

    def test_from_float(self):
        assert Level.from_float(200.9) is Level.MID
        assert Level.from_float(-1.5) is Level.NEG
        assert Level.from_float(math.nan) is None
        assert Level.from_float(math.inf) is None


class TestToPrimitiveDefaults:
    """Test accessors derived from to_i64."""

    def test_to_u64_reinterprets(self):
        assert Level.LOW.to_u64() == 1
        assert Level.NEG.to_u64() == U64_MAX

    def test_narrow_range_checked(self):
        assert Level.MID.to_i8() is None
        assert Level.MID.to_u8() == 200
        assert Level.HIGH.to_u8() is None
        assert Level.HIGH.to_i16() == 300
        assert Level.NEG.to_u32() is None
        assert Level.NEG.to_i32() == -1

    def test_to_float(self):
        assert Level.HIGH.to_float() == 300.0
