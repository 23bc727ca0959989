"""
Base generator classes for capability code generation.

Each generator emits the methods of one capability:
- FromPrimitiveGenerator: from_i64 / from_u64
- ToPrimitiveGenerator: to_i64 / to_u64

Generators build ``ast`` nodes and never touch text; the emitter wraps
their output in a private scope and attaches the methods to the type.
"""

from __future__ import annotations

import ast
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

from ..config import DeriveOptions
from ..core import ir


@dataclass
class MethodSpec:
    """A generated function and how it binds to the type."""

    function: ast.FunctionDef
    is_classmethod: bool = False

    @property
    def name(self) -> str:
        return self.function.name


@dataclass
class GeneratorResult:
    """
    Result from a generator execution.

    Attributes:
        methods: Generated functions in emission order
        scope_imports: Extra import statements needed inside the scope
    """

    methods: list[MethodSpec] = field(default_factory=list)
    scope_imports: list[ast.stmt] = field(default_factory=list)

    def add_method(self, function: ast.FunctionDef, is_classmethod: bool = False) -> None:
        """Record a generated method."""
        self.methods.append(MethodSpec(function=function, is_classmethod=is_classmethod))

    def add_import(self, statement: ast.stmt) -> None:
        """Record an import the generated methods rely on."""
        self.scope_imports.append(statement)


class Generator(ABC):
    """
    Base class for all capability generators.

    Subclasses set ``capability`` to the name of the class they implement
    in the traits module.

    Example:
        class FromPrimitiveGenerator(Generator):
            capability = "FromPrimitive"

            def generate(self) -> GeneratorResult:
                result = GeneratorResult()
                result.add_method(self._build_from_i64(), is_classmethod=True)
                return result
    """

    capability: ClassVar[str]

    def __init__(
        self,
        definition: ir.TypeDefinition,
        discriminants: list[ir.Discriminant],
        options: DeriveOptions | None = None,
    ):
        """
        Initialize generator.

        Args:
            definition: Validated enumeration definition
            discriminants: Resolved discriminants, one per variant
            options: Derivation options
        """
        self.definition = definition
        self.discriminants = discriminants
        self.options = options or DeriveOptions()

    @abstractmethod
    def generate(self) -> GeneratorResult:
        """
        Generate the capability's methods.

        Returns:
            GeneratorResult with the generated functions
        """
        pass

    def _traits_attr(self, name: str) -> ast.Attribute:
        """Reference ``<traits alias>.<name>``."""
        return ast.Attribute(
            value=ast.Name(id=self.options.traits_alias, ctx=ast.Load()),
            attr=name,
            ctx=ast.Load(),
        )

    def _variant_ref(self, identifier: str) -> ast.Attribute:
        """Reference ``<Type>.<VARIANT>``."""
        return ast.Attribute(
            value=ast.Name(id=self.definition.name, ctx=ast.Load()),
            attr=identifier,
            ctx=ast.Load(),
        )

    @staticmethod
    def _function(name: str, params: list[str], body: list[ast.stmt]) -> ast.FunctionDef:
        """Build a plain ``def name(params): body``."""
        return ast.FunctionDef(
            name=name,
            args=ast.arguments(
                posonlyargs=[],
                args=[ast.arg(arg=param) for param in params],
                vararg=None,
                kwonlyargs=[],
                kw_defaults=[],
                kwarg=None,
                defaults=[],
            ),
            body=body,
            decorator_list=[],
            returns=None,
            type_params=[],
        )
