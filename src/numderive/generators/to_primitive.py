"""
ToPrimitive generation.

Generates, for ``Color`` with ``RED``, ``BLUE`` and ``GREEN = 42``:

    def to_i64(self):
        match self:
            case Color.RED:
                return 0
            case Color.BLUE:
                return 1
            case Color.GREEN:
                return 42

    def to_u64(self):
        value = self.to_i64()
        return None if value is None else _num_traits.i64_to_u64(value)

A value that matches no case, such as a combined ``Flag``, gives None from
both methods. Each case re-reads the variant's declared discriminant instead of the
member's runtime value, so ``auto()`` members and private constants
referenced by the declaration give the same numbers as the constructors.
"""

from __future__ import annotations

import ast

from ..core.discriminants import discriminant_expr
from .base import Generator, GeneratorResult

SELF_NAME = "self"
VALUE_NAME = "value"


class ToPrimitiveGenerator(Generator):
    """Generates the value-to-integer accessors."""

    capability = "ToPrimitive"

    def generate(self) -> GeneratorResult:
        result = GeneratorResult()

        if self.discriminants:
            result.add_method(self._build_to_i64())
        else:
            # No members means no instances: an exhaustive case analysis with no cases
            result.add_import(
                ast.ImportFrom(
                    module="typing",
                    names=[ast.alias(name="assert_never", asname=None)],
                    level=0,
                )
            )
            result.add_method(self._build_uninhabited_to_i64())

        result.add_method(self._build_to_u64())
        return result

    def _build_to_i64(self) -> ast.FunctionDef:
        cases = [
            ast.match_case(
                pattern=ast.MatchValue(value=self._variant_ref(d.variant.identifier)),
                guard=None,
                body=[ast.Return(value=discriminant_expr(d, self.options.traits_alias))],
            )
            for d in self.discriminants
        ]
        match = ast.Match(subject=ast.Name(id=SELF_NAME, ctx=ast.Load()), cases=cases)
        return self._function("to_i64", [SELF_NAME], [match])

    def _build_uninhabited_to_i64(self) -> ast.FunctionDef:
        never = ast.Call(
            func=ast.Name(id="assert_never", ctx=ast.Load()),
            args=[ast.Name(id=SELF_NAME, ctx=ast.Load())],
            keywords=[],
        )
        return self._function("to_i64", [SELF_NAME], [ast.Expr(value=never)])

    def _build_to_u64(self) -> ast.FunctionDef:
        signed = ast.Call(
            func=ast.Attribute(
                value=ast.Name(id=SELF_NAME, ctx=ast.Load()),
                attr="to_i64",
                ctx=ast.Load(),
            ),
            args=[],
            keywords=[],
        )
        reinterpreted = ast.Call(
            func=self._traits_attr("i64_to_u64"),
            args=[ast.Name(id=VALUE_NAME, ctx=ast.Load())],
            keywords=[],
        )
        # Combined Flag values match no case and stay None
        passthrough = ast.IfExp(
            test=ast.Compare(
                left=ast.Name(id=VALUE_NAME, ctx=ast.Load()),
                ops=[ast.Is()],
                comparators=[ast.Constant(value=None)],
            ),
            body=ast.Constant(value=None),
            orelse=reinterpreted,
        )
        body: list[ast.stmt] = [
            ast.Assign(targets=[ast.Name(id=VALUE_NAME, ctx=ast.Store())], value=signed),
            ast.Return(value=passthrough),
        ]
        return self._function("to_u64", [SELF_NAME], body)
