"""
numderive Intermediate Representation (IR) types.

A TypeDefinition is the normalized description of one annotated type.
It is built by the adapter, checked by the validator, and read by the
generators. All models are frozen and built fresh for each derivation.

Example:

    class Color(Enum):
        RED = auto()
        BLUE = auto()
        GREEN = 42

    TypeDefinition(
        name="Color",
        kind=TypeKind.ENUMERATION,
        variants=[
            Variant(identifier="RED"),
            Variant(identifier="BLUE"),
            Variant(identifier="GREEN", explicit_discriminant=ast.Constant(42)),
        ],
    )
"""

from __future__ import annotations

import ast
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TypeKind(str, Enum):
    """Shape of an annotated type."""

    ENUMERATION = "enumeration"
    STRUCTURE = "structure"
    UNION = "union"


class FieldKind(str, Enum):
    """Shape of the data carried by an enumeration variant."""

    UNIT = "unit"
    POSITIONAL = "positional-data"
    NAMED = "named-data"


class Variant(BaseModel):
    """
    A single enumeration variant.

    Attributes:
        identifier: Member name
        field_kind: Whether the member carries data
        explicit_discriminant: Declared value expression, None for auto()
        line: Source line (1-indexed), 0 when unknown
        column: Source column (1-indexed), 0 when unknown
    """

    identifier: str
    field_kind: FieldKind = FieldKind.UNIT
    explicit_discriminant: ast.expr | None = None
    line: int = 0
    column: int = 0

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("identifier")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        """Ensure the variant name is a valid identifier."""
        if not v.isidentifier():
            raise ValueError(f"Variant name '{v}' is not a valid identifier")
        return v

    @property
    def is_unit(self) -> bool:
        """Check if the variant carries no data."""
        return self.field_kind == FieldKind.UNIT


class TypeDefinition(BaseModel):
    """
    Normalized description of an annotated type.

    Attributes:
        name: Type identifier
        kind: Enumeration, structure or union
        variants: Enumeration members in declaration order (empty otherwise)
        line: Source line of the declaration, 0 when unknown
        column: Source column of the declaration, 0 when unknown
        filename: Source file name used in diagnostics
        source: Source text used for diagnostic snippets
    """

    name: str
    kind: TypeKind
    variants: list[Variant] = Field(default_factory=list)
    line: int = 0
    column: int = 0
    filename: str | None = None
    source: str | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure the type name is a valid identifier."""
        if not v.isidentifier():
            raise ValueError(f"Type name '{v}' is not a valid identifier")
        return v

    @property
    def is_enumeration(self) -> bool:
        return self.kind == TypeKind.ENUMERATION

    def get_variant(self, identifier: str) -> Variant | None:
        """Get variant by name."""
        for variant in self.variants:
            if variant.identifier == identifier:
                return variant
        return None


class Discriminant(BaseModel):
    """
    Resolved discriminant of one variant.

    ``expression`` evaluates to the discriminant at the declaration site.
    ``value`` is set when the expression folds to a constant, already
    reduced to the signed 64-bit range.
    """

    variant: Variant
    expression: ast.expr
    value: int | None = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def is_constant(self) -> bool:
        return self.value is not None


class GeneratedModule(BaseModel):
    """
    Declarations generated for one (capability, type) pair.

    Attributes:
        scope_name: Name of the private wrapping scope
        capability: Capability name, e.g. FromPrimitive
        type_name: Name of the type the capability is derived for
        declarations: Statements to splice after the type declaration
    """

    scope_name: str
    capability: str
    type_name: str
    declarations: list[ast.stmt] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def to_source(self) -> str:
        """Render the declarations as Python source text."""
        module = ast.Module(body=list(self.declarations), type_ignores=[])
        return ast.unparse(ast.fix_missing_locations(module)) + "\n"
