"""
Capability generators for numderive.

Generators turn a validated TypeDefinition into the methods of one
capability. The registry maps capability names to generator classes.
"""

from __future__ import annotations

from ..core.errors import GenerationError
from .base import Generator, GeneratorResult, MethodSpec
from .from_primitive import FromPrimitiveGenerator
from .to_primitive import ToPrimitiveGenerator


class CapabilityRegistry:
    """
    Registry for capability generators.

    Supports:
    - Manual registration via register()
    - Lookup by capability name
    """

    def __init__(self) -> None:
        self._generators: dict[str, type[Generator]] = {}

    def register(self, name: str, generator_class: type[Generator]) -> None:
        """
        Register a generator class.

        Args:
            name: Capability name, e.g. ``FromPrimitive``
            generator_class: Generator class (must extend Generator)

        Raises:
            GenerationError: If name already registered or class invalid
        """
        if name in self._generators:
            raise GenerationError(
                f"Capability '{name}' is already registered. "
                f"Cannot register {generator_class.__name__}."
            )

        if not isinstance(generator_class, type) or not issubclass(generator_class, Generator):
            raise GenerationError(f"Generator class {generator_class!r} must extend Generator")

        self._generators[name] = generator_class

    def get(self, name: str) -> type[Generator]:
        """
        Get a generator class by capability name.

        Raises:
            GenerationError: If capability not found
        """
        if name not in self._generators:
            available = self.list_capabilities()
            raise GenerationError(
                f"Capability '{name}' not found. Available capabilities: {available}"
            )
        return self._generators[name]

    def list_capabilities(self) -> list[str]:
        """List all registered capability names."""
        return list(self._generators.keys())


def get_registry() -> CapabilityRegistry:
    """
    Build a registry holding the built-in capabilities.

    A fresh registry is returned on every call; nothing is cached.
    """
    registry = CapabilityRegistry()
    registry.register(FromPrimitiveGenerator.capability, FromPrimitiveGenerator)
    registry.register(ToPrimitiveGenerator.capability, ToPrimitiveGenerator)
    return registry


__all__ = [
    "CapabilityRegistry",
    "FromPrimitiveGenerator",
    "Generator",
    "GeneratorResult",
    "MethodSpec",
    "ToPrimitiveGenerator",
    "get_registry",
]
