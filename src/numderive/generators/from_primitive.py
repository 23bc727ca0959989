"""
FromPrimitive generation.

Generates, for ``Color`` with ``RED``, ``BLUE`` and ``GREEN = 42``:

    def from_i64(cls, n):
        if n == 0:
            return Color.RED
        elif n == 1:
            return Color.BLUE
        elif n == 42:
            return Color.GREEN
        else:
            return None

    def from_u64(cls, n):
        return cls.from_i64(_num_traits.u64_to_i64(n))

Tests run in declaration order and the first match wins, so a value shared
by several variants always produces the first of them.
"""

from __future__ import annotations

import ast

from ..core.discriminants import discriminant_expr
from .base import Generator, GeneratorResult

INPUT_NAME = "n"
UNUSED_INPUT_NAME = "_"


class FromPrimitiveGenerator(Generator):
    """Generates the integer-to-value constructors."""

    capability = "FromPrimitive"

    def generate(self) -> GeneratorResult:
        result = GeneratorResult()
        result.add_method(self._build_from_i64(), is_classmethod=True)
        result.add_method(self._build_from_u64(), is_classmethod=True)
        return result

    def _build_from_i64(self) -> ast.FunctionDef:
        # Nothing to compare against: skip the input entirely
        if not self.discriminants:
            return self._function(
                "from_i64",
                ["cls", UNUSED_INPUT_NAME],
                [ast.Return(value=ast.Constant(value=None))],
            )

        chain: list[ast.stmt] = [ast.Return(value=ast.Constant(value=None))]
        for discriminant in reversed(self.discriminants):
            test = ast.Compare(
                left=ast.Name(id=INPUT_NAME, ctx=ast.Load()),
                ops=[ast.Eq()],
                comparators=[discriminant_expr(discriminant, self.options.traits_alias)],
            )
            chain = [
                ast.If(
                    test=test,
                    body=[ast.Return(value=self._variant_ref(discriminant.variant.identifier))],
                    orelse=chain,
                )
            ]

        return self._function("from_i64", ["cls", INPUT_NAME], chain)

    def _build_from_u64(self) -> ast.FunctionDef:
        reinterpreted = ast.Call(
            func=self._traits_attr("u64_to_i64"),
            args=[ast.Name(id=INPUT_NAME, ctx=ast.Load())],
            keywords=[],
        )
        delegate = ast.Call(
            func=ast.Attribute(
                value=ast.Name(id="cls", ctx=ast.Load()),
                attr="from_i64",
                ctx=ast.Load(),
            ),
            args=[reinterpreted],
            keywords=[],
        )
        return self._function("from_u64", ["cls", INPUT_NAME], [ast.Return(value=delegate)])
