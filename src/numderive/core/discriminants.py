"""
Discriminant resolution.

Each variant's discriminant is its explicit value, or the previous
variant's discriminant plus one; the first variant starts at 0. The
resolved expression is kept symbolic so generated code re-reads it at the
declaration site, and folded to a signed 64-bit constant when possible.
"""

from __future__ import annotations

import ast
import copy
import operator
from collections.abc import Callable

from numderive.traits import wrap_i64

from . import ir

# Largest shift or exponent folded at generation time
MAX_FOLD_SHIFT = 128

_BINARY_OPS: dict[type[ast.operator], Callable[[int, int], int]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
    ast.LShift: operator.lshift,
    ast.RShift: operator.rshift,
    ast.BitOr: operator.or_,
    ast.BitAnd: operator.and_,
    ast.BitXor: operator.xor,
}

_UNARY_OPS: dict[type[ast.unaryop], Callable[[int], int]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
    ast.Invert: operator.invert,
}


def is_int_literal(node: ast.expr) -> bool:
    """Check for an int constant; bools are not integers here."""
    return (
        isinstance(node, ast.Constant)
        and isinstance(node.value, int)
        and not isinstance(node.value, bool)
    )


def fold_constant(node: ast.expr) -> int | None:
    """
    Evaluate an integer expression built only from literals.

    Supports unary ``+ - ~`` and the arithmetic, shift and bitwise binary
    operators. Anything that refers to a name, or would divide by zero or
    shift by an unreasonable amount, is left unfolded.

    Returns:
        The exact (unwrapped) integer value, or None
    """
    if is_int_literal(node):
        return node.value

    if isinstance(node, ast.UnaryOp):
        op = _UNARY_OPS.get(type(node.op))
        operand = fold_constant(node.operand)
        if op is None or operand is None:
            return None
        return op(operand)

    if isinstance(node, ast.BinOp):
        op = _BINARY_OPS.get(type(node.op))
        left = fold_constant(node.left)
        right = fold_constant(node.right)
        if op is None or left is None or right is None:
            return None
        if isinstance(node.op, (ast.FloorDiv, ast.Mod)) and right == 0:
            return None
        if isinstance(node.op, (ast.LShift, ast.RShift, ast.Pow)) and not (
            0 <= right <= MAX_FOLD_SHIFT
        ):
            return None
        return op(left, right)

    return None


class _MemberSubstitution(ast.NodeTransformer):
    """Replace references to earlier members with their discriminants."""

    def __init__(self, members: dict[str, ast.expr]):
        self.members = members

    def visit_Name(self, node: ast.Name) -> ast.expr:
        if isinstance(node.ctx, ast.Load) and node.id in self.members:
            return copy.deepcopy(self.members[node.id])
        return node


def resolve_discriminants(variants: list[ir.Variant]) -> list[ir.Discriminant]:
    """
    Resolve the discriminant of every variant in declaration order.

    An implicit variant following an explicit one reuses the explicit
    expression plus an offset, e.g. ``(BASE + 1) + 2``. Names of earlier
    members inside an explicit expression (``HIGH = LOW + 1``) are replaced
    by those members' discriminants, because member names are only bound
    inside the class body.

    Args:
        variants: Validated unit variants

    Returns:
        One Discriminant per variant, same order
    """
    resolved = []
    members: dict[str, ast.expr] = {}
    anchor: ast.expr | None = None
    offset = -1

    for variant in variants:
        if variant.explicit_discriminant is not None:
            anchor = _MemberSubstitution(members).visit(
                copy.deepcopy(variant.explicit_discriminant)
            )
            offset = 0
        else:
            offset += 1

        if anchor is None:
            expression: ast.expr = ast.Constant(value=offset)
        elif offset == 0:
            expression = copy.deepcopy(anchor)
        else:
            expression = ast.BinOp(
                left=copy.deepcopy(anchor),
                op=ast.Add(),
                right=ast.Constant(value=offset),
            )

        members[variant.identifier] = expression
        folded = fold_constant(expression)
        resolved.append(
            ir.Discriminant(
                variant=variant,
                expression=expression,
                value=wrap_i64(folded) if folded is not None else None,
            )
        )

    return resolved


def find_duplicates(discriminants: list[ir.Discriminant]) -> dict[int, list[str]]:
    """
    Group variant names sharing a folded discriminant value.

    Returns:
        Mapping of value to variant names (declaration order), only for
        values owned by more than one variant
    """
    owners: dict[int, list[str]] = {}
    for discriminant in discriminants:
        if not discriminant.is_constant:
            continue
        owners.setdefault(discriminant.value, []).append(discriminant.variant.identifier)
    return {value: names for value, names in owners.items() if len(names) > 1}


def discriminant_expr(discriminant: ir.Discriminant, traits_alias: str) -> ast.expr:
    """
    Build the expression generated code uses for a discriminant.

    Constants are emitted as literals. Symbolic expressions are wrapped in
    ``<traits_alias>.wrap_i64(...)`` so the runtime value is reduced to the
    signed 64-bit range the same way folded values are.
    """
    if discriminant.is_constant:
        if discriminant.value < 0:
            return ast.UnaryOp(op=ast.USub(), operand=ast.Constant(value=-discriminant.value))
        return ast.Constant(value=discriminant.value)

    return ast.Call(
        func=ast.Attribute(
            value=ast.Name(id=traits_alias, ctx=ast.Load()),
            attr="wrap_i64",
            ctx=ast.Load(),
        ),
        args=[copy.deepcopy(discriminant.expression)],
        keywords=[],
    )
