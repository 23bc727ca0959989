"""
Derivation options.

Options are passed programmatically; no files or environment variables
are read.
"""

from __future__ import annotations

import keyword

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_TRAITS_MODULE = "numderive.traits"
DEFAULT_TRAITS_ALIAS = "_num_traits"


class DeriveOptions(BaseModel):
    """
    Options shared by every generator.

    Attributes:
        traits_module: Dotted path of the module defining the capabilities,
            imported inside the private scope
        traits_alias: Local name bound to that module inside the scope
    """

    traits_module: str = DEFAULT_TRAITS_MODULE
    traits_alias: str = DEFAULT_TRAITS_ALIAS

    model_config = ConfigDict(frozen=True)

    @field_validator("traits_module")
    @classmethod
    def validate_traits_module(cls, v: str) -> str:
        """Ensure every dotted segment is an identifier."""
        parts = v.split(".")
        if not all(part.isidentifier() and not keyword.iskeyword(part) for part in parts):
            raise ValueError(f"'{v}' is not a valid module path")
        return v

    @field_validator("traits_alias")
    @classmethod
    def validate_traits_alias(cls, v: str) -> str:
        """Ensure the alias is an identifier."""
        if not v.isidentifier() or keyword.iskeyword(v):
            raise ValueError(f"'{v}' is not a valid identifier")
        return v
