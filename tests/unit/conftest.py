"""Shared pytest fixtures for numderive tests."""

from __future__ import annotations

import ast
import textwrap
from typing import Any

import pytest

from numderive.core import ir
from numderive.core.adapter import describe_type, parse_type_declaration
from numderive.derive import derive

COLOR_SOURCE = """\
from enum import Enum, auto


class Color(Enum):
    RED = auto()
    BLUE = auto()
    GREEN = 42
"""


def load_derived(source: str, *capabilities: str, name: str | None = None) -> dict[str, Any]:
    """
    Execute a declaration followed by its derived code.

    Mirrors what the host does: the generated statements are spliced after
    the declaration and the whole module runs in a fresh namespace.

    Returns:
        The module namespace after execution
    """
    source = textwrap.dedent(source)
    node = parse_type_declaration(source, name)
    modules = derive(node, *capabilities, source=source)

    tree = ast.parse(source)
    for module in modules:
        tree.body.extend(module.declarations)
    ast.fix_missing_locations(tree)

    namespace: dict[str, Any] = {"__name__": "derived_fixture"}
    exec(compile(tree, "<derived>", "exec"), namespace)
    return namespace


def describe_source(source: str, name: str | None = None) -> ir.TypeDefinition:
    """Parse source text and describe the named (or first) type."""
    source = textwrap.dedent(source)
    return describe_type(parse_type_declaration(source, name), source=source)


def make_variant(identifier: str, discriminant: str | None = None, **kwargs: Any) -> ir.Variant:
    """Create a variant, parsing ``discriminant`` as an expression."""
    expr = ast.parse(discriminant, mode="eval").body if discriminant is not None else None
    return ir.Variant(identifier=identifier, explicit_discriminant=expr, **kwargs)


def make_enum(name: str = "Color", variants: list[ir.Variant] | None = None) -> ir.TypeDefinition:
    """Create an enumeration definition with sensible defaults."""
    return ir.TypeDefinition(
        name=name,
        kind=ir.TypeKind.ENUMERATION,
        variants=variants if variants is not None else [],
    )


@pytest.fixture
def color_source() -> str:
    """Return source for Color: RED, BLUE implicit, GREEN = 42."""
    return COLOR_SOURCE


@pytest.fixture
def color_definition() -> ir.TypeDefinition:
    """Return the described Color enumeration."""
    return describe_source(COLOR_SOURCE)


@pytest.fixture
def color_namespace() -> dict[str, Any]:
    """Return a namespace where Color derives both capabilities."""
    return load_derived(COLOR_SOURCE)
