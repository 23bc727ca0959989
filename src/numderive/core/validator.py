"""
Semantic validation of type definitions.

A capability can be derived only for an enumeration whose variants carry no
data. Validation runs once per derivation, before any generator, and a
failure means no declarations are produced.
"""

from __future__ import annotations

import ast
import logging

from . import ir
from .discriminants import find_duplicates, resolve_discriminants
from .errors import make_validation_error

logger = logging.getLogger(__name__)

_KIND_ARTICLES = {
    ir.TypeKind.STRUCTURE: "a structure",
    ir.TypeKind.UNION: "a union",
}

_FIELD_KIND_DESCRIPTIONS = {
    ir.FieldKind.POSITIONAL: "carries positional data",
    ir.FieldKind.NAMED: "carries named data",
}


def _non_integer_literal(node: ast.expr | None) -> str | None:
    """Return the type name of a literal that is not an int, else None."""
    if isinstance(node, ast.UnaryOp):
        node = node.operand
    if not isinstance(node, ast.Constant):
        return None
    if isinstance(node.value, int) and not isinstance(node.value, bool):
        return None
    return type(node.value).__name__


def validate_type_kind(
    definition: ir.TypeDefinition, capability: str
) -> tuple[list[str], list[str]]:
    """
    Validate that the type is an enumeration.

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    if not definition.is_enumeration:
        errors.append(
            f"`{capability}` can be derived only for enumerations, "
            f"{definition.name} is {_KIND_ARTICLES[definition.kind]}"
        )
    return errors, []


def validate_variants(
    definition: ir.TypeDefinition, capability: str
) -> tuple[list[str], list[str]]:
    """
    Validate the variants of an enumeration.

    Checks:
    - Every variant is a unit variant
    - Explicit discriminants are not non-integer literals
    - Duplicate discriminant values (warning only, first declared wins)

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []

    for variant in definition.variants:
        qualified = f"{definition.name}.{variant.identifier}"
        if not variant.is_unit:
            errors.append(
                f"`{capability}` can be derived only for unit-only enumerations, "
                f"{qualified} {_FIELD_KIND_DESCRIPTIONS[variant.field_kind]}"
            )
            continue

        literal_type = _non_integer_literal(variant.explicit_discriminant)
        if literal_type:
            errors.append(
                f"`{capability}` requires integer discriminants, "
                f"{qualified} is declared with a {literal_type} value"
            )

    if errors:
        return errors, warnings

    duplicates = find_duplicates(resolve_discriminants(definition.variants))
    for value, names in sorted(duplicates.items()):
        shadowed = ", ".join(f"{definition.name}.{name}" for name in names[1:])
        warnings.append(
            f"{definition.name}.{names[0]} and {shadowed} share discriminant {value}; "
            f"conversion from {value} yields {definition.name}.{names[0]}"
        )

    return errors, warnings


def validate_type_definition(
    definition: ir.TypeDefinition, capability: str
) -> tuple[list[str], list[str]]:
    """
    Run all validations for one derivation.

    Variant checks only run once the type is known to be an enumeration.

    Returns:
        Tuple of (errors, warnings)
    """
    errors, warnings = validate_type_kind(definition, capability)
    if errors:
        return errors, warnings

    variant_errors, variant_warnings = validate_variants(definition, capability)
    return errors + variant_errors, warnings + variant_warnings


def _first_offending_location(definition: ir.TypeDefinition) -> tuple[int, int]:
    for variant in definition.variants:
        if not variant.is_unit or _non_integer_literal(variant.explicit_discriminant):
            if variant.line:
                return variant.line, variant.column
    return definition.line, definition.column


def ensure_derivable(definition: ir.TypeDefinition, capability: str) -> list[str]:
    """
    Validate a definition, raising if any check fails.

    Args:
        definition: Described type
        capability: Capability being derived, used in messages

    Returns:
        Warnings for the caller to report

    Raises:
        ValidationError: If the capability cannot be derived for the type
    """
    errors, warnings = validate_type_definition(definition, capability)

    if errors:
        if len(errors) == 1:
            message = errors[0]
        else:
            message = f"Cannot derive `{capability}` for {definition.name}:\n" + "\n".join(
                f"  - {e}" for e in errors
            )
        line, column = _first_offending_location(definition)
        raise make_validation_error(
            message,
            file=definition.filename,
            line=line,
            column=column,
            source=definition.source,
        )

    logger.debug("%s passes validation for `%s`", definition.name, capability)
    return warnings
