"""
Scope name mangling.

Generated declarations live inside a private function whose name is derived
from the capability and the type, e.g. ``_impl_from_primitive_for_Color``.
The name is deterministic: uniqueness comes from the (capability, type)
pair, never from randomness or counters.
"""

from __future__ import annotations

import keyword
import re

SCOPE_PREFIX = "_impl"


def camel_to_snake(name: str) -> str:
    """
    Convert CamelCase to snake_case.

    Examples:
        >>> camel_to_snake("FromPrimitive")
        'from_primitive'
        >>> camel_to_snake("HTTPStatus")
        'http_status'
    """
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def scope_name(capability: str, type_name: str) -> str:
    """
    Build the private scope name for a derivation.

    The type name keeps its case so ``Color`` and ``COLOR`` never share a
    scope.

    Args:
        capability: Capability name, e.g. ``FromPrimitive``
        type_name: Name of the derived type

    Returns:
        Identifier like ``_impl_from_primitive_for_Color``

    Raises:
        ValueError: If either name is not a valid identifier
    """
    for label, value in (("capability", capability), ("type", type_name)):
        if not value.isidentifier() or keyword.iskeyword(value):
            raise ValueError(f"Invalid {label} name for scope: {value!r}")

    return f"{SCOPE_PREFIX}_{camel_to_snake(capability)}_for_{type_name}"
