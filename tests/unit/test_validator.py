"""
Unit tests for the validator module.

Tests cover rejection of non-enumerations and data-carrying variants,
integer discriminant checks, duplicate warnings and error context.
"""

import pytest

from numderive.core import ir
from numderive.core.errors import ValidationError
from numderive.core.validator import (
    ensure_derivable,
    validate_type_definition,
    validate_type_kind,
    validate_variants,
)

from .conftest import describe_source, make_enum, make_variant

# =============================================================================
# Type Kind Tests
# =============================================================================


class TestValidateTypeKind:
    """Test that only enumerations pass."""

    def test_enumeration_passes(self):
        errors, warnings = validate_type_kind(make_enum(), "FromPrimitive")
        assert errors == []
        assert warnings == []

    @pytest.mark.parametrize(
        ("kind", "article"),
        [(ir.TypeKind.STRUCTURE, "a structure"), (ir.TypeKind.UNION, "a union")],
    )
    def test_other_kinds_rejected(self, kind, article):
        definition = ir.TypeDefinition(name="Point", kind=kind)
        errors, _ = validate_type_kind(definition, "ToPrimitive")
        assert errors == [f"`ToPrimitive` can be derived only for enumerations, Point is {article}"]


# =============================================================================
# Variant Tests
# =============================================================================


class TestValidateVariants:
    """Test variant shape checks."""

    def test_unit_variants_pass(self):
        definition = make_enum(variants=[make_variant("RED"), make_variant("GREEN", "42")])
        errors, warnings = validate_variants(definition, "FromPrimitive")
        assert errors == []
        assert warnings == []

    def test_positional_data_rejected(self):
        definition = make_enum(
            variants=[
                make_variant("RED"),
                make_variant("RGB", field_kind=ir.FieldKind.POSITIONAL),
            ]
        )
        errors, _ = validate_variants(definition, "FromPrimitive")
        assert errors == [
            "`FromPrimitive` can be derived only for unit-only enumerations, "
            "Color.RGB carries positional data"
        ]

    def test_named_data_rejected(self):
        definition = make_enum(variants=[make_variant("HSV", field_kind=ir.FieldKind.NAMED)])
        errors, _ = validate_variants(definition, "ToPrimitive")
        assert len(errors) == 1
        assert "Color.HSV carries named data" in errors[0]

    def test_every_offending_variant_reported(self):
        definition = make_enum(
            variants=[
                make_variant("RGB", field_kind=ir.FieldKind.POSITIONAL),
                make_variant("HSV", field_kind=ir.FieldKind.NAMED),
            ]
        )
        errors, _ = validate_variants(definition, "FromPrimitive")
        assert len(errors) == 2

    @pytest.mark.parametrize(
        ("literal", "type_name"),
        [('"red"', "str"), ("1.5", "float"), ("True", "bool"), ("None", "NoneType"), ("-2.0", "float")],
    )
    def test_non_integer_literal_rejected(self, literal, type_name):
        definition = make_enum(variants=[make_variant("RED", literal)])
        errors, _ = validate_variants(definition, "FromPrimitive")
        assert errors == [
            f"`FromPrimitive` requires integer discriminants, "
            f"Color.RED is declared with a {type_name} value"
        ]

    def test_symbolic_discriminant_accepted(self):
        definition = make_enum(variants=[make_variant("RED", "_BASE << 2")])
        errors, _ = validate_variants(definition, "FromPrimitive")
        assert errors == []

    def test_duplicate_discriminants_warn(self):
        definition = make_enum(
            name="Dup", variants=[make_variant("A", "5"), make_variant("B", "5")]
        )
        errors, warnings = validate_variants(definition, "FromPrimitive")
        assert errors == []
        assert warnings == [
            "Dup.A and Dup.B share discriminant 5; conversion from 5 yields Dup.A"
        ]


# =============================================================================
# Full Validation Tests
# =============================================================================


class TestValidateTypeDefinition:
    """Test the combined validation."""

    def test_structure_skips_variant_checks(self):
        definition = ir.TypeDefinition(name="Point", kind=ir.TypeKind.STRUCTURE)
        errors, _ = validate_type_definition(definition, "FromPrimitive")
        assert len(errors) == 1

    def test_empty_enumeration_passes(self):
        errors, warnings = validate_type_definition(make_enum(name="Never"), "ToPrimitive")
        assert errors == []
        assert warnings == []


class TestEnsureDerivable:
    """Test the raising entry point."""

    def test_valid_returns_warnings(self):
        definition = make_enum(variants=[make_variant("A", "1"), make_variant("B", "1")])
        assert len(ensure_derivable(definition, "FromPrimitive")) == 1

    def test_single_error_message(self):
        definition = ir.TypeDefinition(name="Point", kind=ir.TypeKind.STRUCTURE)
        with pytest.raises(ValidationError) as exc_info:
            ensure_derivable(definition, "FromPrimitive")
        assert exc_info.value.message == (
            "`FromPrimitive` can be derived only for enumerations, Point is a structure"
        )
        assert exc_info.value.context is None

    def test_multiple_errors_listed(self):
        definition = make_enum(
            variants=[
                make_variant("RGB", field_kind=ir.FieldKind.POSITIONAL),
                make_variant("HSV", field_kind=ir.FieldKind.NAMED),
            ]
        )
        with pytest.raises(ValidationError) as exc_info:
            ensure_derivable(definition, "ToPrimitive")
        message = exc_info.value.message
        assert message.startswith("Cannot derive `ToPrimitive` for Color:\n")
        assert "  - `ToPrimitive` can be derived only for unit-only enumerations, Color.RGB" in message
        assert "Color.HSV carries named data" in message

    def test_context_points_at_variant(self):
        definition = describe_source(
            """\
            from enum import Enum


            class Color(Enum):
                RED = 1
                RGB = (255, 0, 0)
            """
        )
        with pytest.raises(ValidationError) as exc_info:
            ensure_derivable(definition, "FromPrimitive")

        context = exc_info.value.context
        assert (context.line, context.column) == (6, 5)
        rendered = str(exc_info.value)
        assert rendered.startswith("<unknown>:6:5\n")
        assert "   6 |     RGB = (255, 0, 0)" in rendered
        assert "^^^" in rendered
