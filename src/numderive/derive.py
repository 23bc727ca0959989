"""
Derivation pipeline.

    ast node -> describe_type -> ensure_derivable -> resolve_discriminants
             -> generator -> emit -> GeneratedModule

Every call is independent: nothing is cached between derivations, and a
validation failure raises before any declaration is built.
"""

from __future__ import annotations

import ast
import logging

from .config import DeriveOptions
from .core import ir
from .core.adapter import describe_type, parse_type_declaration
from .core.discriminants import resolve_discriminants
from .core.validator import ensure_derivable
from .emitter import emit, render
from .generators import get_registry

logger = logging.getLogger(__name__)

FROM_PRIMITIVE = "FromPrimitive"
TO_PRIMITIVE = "ToPrimitive"


def derive_definition(
    definition: ir.TypeDefinition,
    *capabilities: str,
    options: DeriveOptions | None = None,
) -> list[ir.GeneratedModule]:
    """
    Derive capabilities for an already described type.

    All capabilities are validated before the first one is generated.

    Raises:
        GenerationError: If a capability is unknown
        ValidationError: If the type cannot carry a capability
    """
    options = options or DeriveOptions()
    registry = get_registry()
    generator_classes = [registry.get(capability) for capability in capabilities]

    warnings: list[str] = []
    for capability in capabilities:
        for warning in ensure_derivable(definition, capability):
            if warning not in warnings:
                warnings.append(warning)

    discriminants = resolve_discriminants(definition.variants)

    modules = []
    for generator_class in generator_classes:
        generator = generator_class(definition, discriminants, options)
        result = generator.generate()
        modules.append(emit(generator, result))

    for warning in warnings:
        logger.warning(warning)

    logger.debug("Derived %s for %s", ", ".join(capabilities), definition.name)
    return modules


def derive(
    node: ast.AST,
    *capabilities: str,
    options: DeriveOptions | None = None,
    filename: str | None = None,
    source: str | None = None,
) -> list[ir.GeneratedModule]:
    """
    Derive one or more capabilities for an annotated type.

    Args:
        node: Type declaration node
        *capabilities: Capability names; both built-ins when omitted
        options: Derivation options
        filename: Optional file name for diagnostics
        source: Optional source text for diagnostic snippets

    Returns:
        One GeneratedModule per capability, in the order requested
    """
    definition = describe_type(node, filename=filename, source=source)
    return derive_definition(
        definition,
        *(capabilities or (FROM_PRIMITIVE, TO_PRIMITIVE)),
        options=options,
    )


def derive_from_primitive(
    node: ast.AST, options: DeriveOptions | None = None
) -> list[ast.stmt]:
    """Generate the FromPrimitive declarations for a type."""
    (module,) = derive(node, FROM_PRIMITIVE, options=options)
    return module.declarations


def derive_to_primitive(node: ast.AST, options: DeriveOptions | None = None) -> list[ast.stmt]:
    """Generate the ToPrimitive declarations for a type."""
    (module,) = derive(node, TO_PRIMITIVE, options=options)
    return module.declarations


def derive_source(
    source: str,
    *capabilities: str,
    name: str | None = None,
    options: DeriveOptions | None = None,
    filename: str = "<unknown>",
) -> str:
    """
    Parse a type declaration from text and render the derived code.

    Args:
        source: Source text holding the declaration
        *capabilities: Capability names; both built-ins when omitted
        name: Name of the type to derive for; the first type when omitted
        options: Derivation options
        filename: File name for diagnostics

    Returns:
        Generated Python source text
    """
    node = parse_type_declaration(source, name, filename=filename)
    modules = derive(node, *capabilities, options=options, filename=filename, source=source)
    return render(modules)
