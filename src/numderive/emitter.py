"""
Emission of generated declarations.

Generated methods are wrapped in a private function that is called right
after its definition:

    def _impl_from_primitive_for_Color():
        import numderive.traits as _num_traits

        def from_i64(cls, n): ...

        def from_u64(cls, n): ...

        _num_traits.implement(
            Color,
            _num_traits.FromPrimitive,
            from_i64=classmethod(from_i64),
            from_u64=classmethod(from_u64),
        )

    _impl_from_primitive_for_Color()
    del _impl_from_primitive_for_Color

The function body gives the traits alias and the helper functions a scope
of their own, while name lookups still fall through to the module the type
is declared in, so private module-level names stay reachable.
"""

from __future__ import annotations

import ast
import logging

from .config import DeriveOptions
from .core import ir
from .core.mangle import scope_name
from .generators.base import Generator, GeneratorResult, MethodSpec

logger = logging.getLogger(__name__)


def _binding(method: MethodSpec) -> ast.keyword:
    value: ast.expr = ast.Name(id=method.name, ctx=ast.Load())
    if method.is_classmethod:
        value = ast.Call(
            func=ast.Name(id="classmethod", ctx=ast.Load()),
            args=[value],
            keywords=[],
        )
    return ast.keyword(arg=method.name, value=value)


def _implement_call(
    type_name: str, capability: str, result: GeneratorResult, options: DeriveOptions
) -> ast.Expr:
    traits = ast.Name(id=options.traits_alias, ctx=ast.Load())
    call = ast.Call(
        func=ast.Attribute(value=traits, attr="implement", ctx=ast.Load()),
        args=[
            ast.Name(id=type_name, ctx=ast.Load()),
            ast.Attribute(
                value=ast.Name(id=options.traits_alias, ctx=ast.Load()),
                attr=capability,
                ctx=ast.Load(),
            ),
        ],
        keywords=[_binding(method) for method in result.methods],
    )
    return ast.Expr(value=call)


def wrap_in_scope(
    name: str,
    body: list[ast.stmt],
) -> list[ast.stmt]:
    """
    Wrap statements in a private function, call it, then unbind it.

    Returns:
        ``[def name(): body, name(), del name]``
    """
    scope = ast.FunctionDef(
        name=name,
        args=ast.arguments(
            posonlyargs=[],
            args=[],
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
    invoke = ast.Expr(
        value=ast.Call(func=ast.Name(id=name, ctx=ast.Load()), args=[], keywords=[])
    )
    unbind = ast.Delete(targets=[ast.Name(id=name, ctx=ast.Del())])
    return [scope, invoke, unbind]


def emit(generator: Generator, result: GeneratorResult) -> ir.GeneratedModule:
    """
    Wrap a generator's output in its private scope.

    Args:
        generator: Generator that produced ``result``
        result: Generated methods and scope imports

    Returns:
        GeneratedModule with located declarations
    """
    definition = generator.definition
    options = generator.options
    capability = generator.capability
    name = scope_name(capability, definition.name)

    body: list[ast.stmt] = [
        ast.Import(names=[ast.alias(name=options.traits_module, asname=options.traits_alias)]),
        *result.scope_imports,
        *(method.function for method in result.methods),
        _implement_call(definition.name, capability, result, options),
    ]

    declarations = wrap_in_scope(name, body)
    for declaration in declarations:
        ast.fix_missing_locations(declaration)

    logger.debug(
        "Emitted %s for %s in scope %s (%d methods)",
        capability,
        definition.name,
        name,
        len(result.methods),
    )
    return ir.GeneratedModule(
        scope_name=name,
        capability=capability,
        type_name=definition.name,
        declarations=declarations,
    )


def render(modules: list[ir.GeneratedModule]) -> str:
    """Serialize generated modules to source text, separated by blank lines."""
    return "\n\n".join(module.to_source() for module in modules)
