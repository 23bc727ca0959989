"""Test the capability registry."""

import pytest

from numderive.core.errors import GenerationError
from numderive.generators import (
    CapabilityRegistry,
    FromPrimitiveGenerator,
    Generator,
    GeneratorResult,
    ToPrimitiveGenerator,
    get_registry,
)


class MockGenerator(Generator):
    """Mock generator for testing."""

    capability = "Mock"

    def generate(self) -> GeneratorResult:
        return GeneratorResult()


class TestCapabilityRegistry:
    def test_builtin_capabilities(self):
        registry = get_registry()
        assert registry.list_capabilities() == ["FromPrimitive", "ToPrimitive"]
        assert registry.get("FromPrimitive") is FromPrimitiveGenerator
        assert registry.get("ToPrimitive") is ToPrimitiveGenerator

    def test_fresh_registry_per_call(self):
        assert get_registry() is not get_registry()

    def test_register(self):
        registry = CapabilityRegistry()
        registry.register("Mock", MockGenerator)
        assert registry.get("Mock") is MockGenerator

    def test_duplicate_registration(self):
        registry = get_registry()
        with pytest.raises(GenerationError) as exc_info:
            registry.register("FromPrimitive", MockGenerator)
        assert "already registered" in str(exc_info.value)

    def test_invalid_class(self):
        registry = CapabilityRegistry()
        with pytest.raises(GenerationError) as exc_info:
            registry.register("Mock", dict)
        assert "must extend Generator" in str(exc_info.value)

    def test_missing_capability(self):
        with pytest.raises(GenerationError) as exc_info:
            get_registry().get("Signed")
        message = str(exc_info.value)
        assert "Capability 'Signed' not found" in message
        assert "Available capabilities: ['FromPrimitive', 'ToPrimitive']" in message
