"""
Type descriptor adapter.

Turns the syntax tree of an annotated type into a TypeDefinition. Parsing
is delegated to the standard library ``ast`` module; this module only reads
the tree. No shape validation happens here, the validator owns that.
"""

from __future__ import annotations

import ast
import logging

from . import ir
from .errors import make_descriptor_error

logger = logging.getLogger(__name__)

# Base class names that make a class an enumeration
ENUM_BASES = frozenset({"Enum", "IntEnum", "Flag", "IntFlag", "StrEnum", "ReprEnum"})

# Subscripted or called names that build a union type
UNION_NAMES = frozenset({"Union", "Optional"})

# Wrappers whose values stay plain class attributes instead of members
NON_MEMBER_CALLS = frozenset(
    {"nonmember", "property", "cached_property", "classmethod", "staticmethod"}
)


def _terminal_name(node: ast.expr) -> str | None:
    """Return ``Enum`` for both ``Enum`` and ``enum.Enum``."""
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def _is_dunder_or_sunder(name: str) -> bool:
    return len(name) > 2 and name.startswith("_") and name.endswith("_")


def _is_private(name: str) -> bool:
    """``__name`` is mangled to ``_Type__name`` and never becomes a member."""
    return name.startswith("__") and not name.endswith("__")


def _is_call_to(node: ast.expr, name: str) -> bool:
    return isinstance(node, ast.Call) and _terminal_name(node.func) == name


def _is_union_expr(node: ast.expr) -> bool:
    """Check for ``A | B`` and ``Union[A, B]`` style expressions."""
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        return True
    if isinstance(node, ast.Subscript):
        return _terminal_name(node.value) in UNION_NAMES
    return False


def classify_value(value: ast.expr) -> tuple[ir.FieldKind, ast.expr | None]:
    """
    Classify a member value.

    Returns:
        Tuple of (field kind, explicit discriminant expression)
    """
    if _is_call_to(value, "auto"):
        return ir.FieldKind.UNIT, None
    if isinstance(value, ast.Tuple):
        return ir.FieldKind.POSITIONAL, None
    if isinstance(value, ast.Dict) or _is_call_to(value, "dict"):
        return ir.FieldKind.NAMED, None
    return ir.FieldKind.UNIT, value


def _member_target(stmt: ast.stmt) -> tuple[ast.expr, ast.expr] | None:
    """Return (target, value) for assignments in a class body."""
    if isinstance(stmt, ast.Assign):
        return stmt.targets[0], stmt.value
    if isinstance(stmt, ast.AnnAssign) and stmt.value is not None:
        return stmt.target, stmt.value
    return None


def _ignored_names(node: ast.ClassDef) -> set[str]:
    """
    Read the names listed in a class's ``_ignore_`` attribute.

    Accepts a list, tuple or set of strings, or one string of names
    separated by whitespace or commas.
    """
    for stmt in node.body:
        member = _member_target(stmt)
        if member is None:
            continue
        target, value = member
        if not (isinstance(target, ast.Name) and target.id == "_ignore_"):
            continue
        if isinstance(value, ast.Constant) and isinstance(value.value, str):
            return set(value.value.replace(",", " ").split())
        if isinstance(value, (ast.List, ast.Tuple, ast.Set)):
            return {
                elt.value
                for elt in value.elts
                if isinstance(elt, ast.Constant) and isinstance(elt.value, str)
            }
    return set()


def extract_variants(
    node: ast.ClassDef,
    filename: str | None = None,
    source: str | None = None,
) -> list[ir.Variant]:
    """
    Extract enumeration members from a class body in declaration order.

    Skips docstrings, methods, nested classes, bare annotations, dunder,
    sunder and private names, names listed in ``_ignore_``, lambdas,
    ``nonmember(...)`` values and descriptors such as ``property(...)``.

    Raises:
        DescriptorError: If a member uses chained or unpacking assignment
    """
    variants = []
    ignored = _ignored_names(node)
    for stmt in node.body:
        member = _member_target(stmt)
        if member is None:
            continue
        target, value = member

        if isinstance(stmt, ast.Assign) and len(stmt.targets) != 1:
            raise make_descriptor_error(
                f"{node.name}: chained assignment cannot declare enumeration members",
                stmt,
                filename,
                source,
            )
        if not isinstance(target, ast.Name):
            raise make_descriptor_error(
                f"{node.name}: unsupported member declaration '{ast.unparse(target)}'",
                stmt,
                filename,
                source,
            )
        if _is_dunder_or_sunder(target.id) or _is_private(target.id) or target.id in ignored:
            continue
        if isinstance(value, ast.Lambda) or any(
            _is_call_to(value, name) for name in NON_MEMBER_CALLS
        ):
            continue
        if _is_call_to(value, "member") and value.args:
            value = value.args[0]

        field_kind, discriminant = classify_value(value)
        variants.append(
            ir.Variant(
                identifier=target.id,
                field_kind=field_kind,
                explicit_discriminant=discriminant,
                line=stmt.lineno,
                column=stmt.col_offset + 1,
            )
        )
    return variants


def describe_type(
    node: ast.AST,
    *,
    filename: str | None = None,
    source: str | None = None,
) -> ir.TypeDefinition:
    """
    Describe an annotated type declaration.

    Args:
        node: ``ClassDef``, type alias ``Assign``/``AnnAssign`` or ``TypeAlias``
        filename: Optional file name for diagnostics
        source: Optional source text for diagnostic snippets

    Returns:
        TypeDefinition with name, kind and ordered variants

    Raises:
        DescriptorError: If the node does not declare a type
    """
    common = {
        "line": getattr(node, "lineno", 0),
        "column": getattr(node, "col_offset", -1) + 1,  # 0 when unknown
        "filename": filename,
        "source": source,
    }

    if isinstance(node, ast.ClassDef):
        base_names = {_terminal_name(base) for base in node.bases}
        if base_names & ENUM_BASES:
            variants = extract_variants(node, filename, source)
            logger.debug("Described enumeration %s with %d variants", node.name, len(variants))
            return ir.TypeDefinition(
                name=node.name,
                kind=ir.TypeKind.ENUMERATION,
                variants=variants,
                **common,
            )
        logger.debug("Described structure %s", node.name)
        return ir.TypeDefinition(name=node.name, kind=ir.TypeKind.STRUCTURE, **common)

    if isinstance(node, ast.stmt) and _is_type_declaration(node):
        name = _declared_name(node)
        logger.debug("Described union %s", name)
        return ir.TypeDefinition(name=name, kind=ir.TypeKind.UNION, **common)

    raise make_descriptor_error(
        f"{type(node).__name__} node does not declare a type",
        node,
        filename,
        source,
    )


def _declared_name(stmt: ast.stmt) -> str | None:
    if isinstance(stmt, ast.ClassDef):
        return stmt.name
    type_alias = getattr(ast, "TypeAlias", None)
    if type_alias is not None and isinstance(stmt, type_alias):
        return stmt.name.id
    if isinstance(stmt, ast.AnnAssign) and isinstance(stmt.target, ast.Name):
        return stmt.target.id
    if isinstance(stmt, ast.Assign) and len(stmt.targets) == 1:
        target = stmt.targets[0]
        if isinstance(target, ast.Name):
            return target.id
    return None


def _is_type_declaration(stmt: ast.stmt) -> bool:
    if isinstance(stmt, ast.ClassDef):
        return True
    type_alias = getattr(ast, "TypeAlias", None)
    if type_alias is not None and isinstance(stmt, type_alias):
        return True
    if isinstance(stmt, ast.AnnAssign) and isinstance(stmt.target, ast.Name):
        return _terminal_name(stmt.annotation) == "TypeAlias" or (
            stmt.value is not None and _is_union_expr(stmt.value)
        )
    if isinstance(stmt, ast.Assign) and len(stmt.targets) == 1:
        return isinstance(stmt.targets[0], ast.Name) and _is_union_expr(stmt.value)
    return False


def parse_type_declaration(
    source: str,
    name: str | None = None,
    *,
    filename: str = "<unknown>",
) -> ast.stmt:
    """
    Parse source text and return a top-level type declaration node.

    Args:
        source: Python source text
        name: Name of the declaration to return; the first one when omitted
        filename: File name used by the parser and in diagnostics

    Returns:
        The declaration node

    Raises:
        DescriptorError: If the text does not parse or holds no such declaration
    """
    try:
        module = ast.parse(source, filename=filename)
    except SyntaxError as e:
        raise make_descriptor_error(f"Cannot parse {filename}: {e.msg}") from e

    for stmt in module.body:
        if not _is_type_declaration(stmt):
            continue
        if name is None or _declared_name(stmt) == name:
            return stmt

    if name is None:
        raise make_descriptor_error(f"No type declaration found in {filename}")
    raise make_descriptor_error(f"Type '{name}' not found in {filename}")
