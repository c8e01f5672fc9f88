"""Base Pydantic model with strict defaults for codesafe configs.

All codesafe config schemas inherit from this base to ensure consistent
validation behavior across parameter, user, and internal configs.
"""

from pydantic import BaseModel, ConfigDict


class CodesafeBaseModel(BaseModel):
    """Base model for all codesafe configuration schemas.

    Enforces strict validation:
    - No extra fields allowed
    - Validates assignments after initialization
    - Strips whitespace from strings
    """

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )


class FrozenModel(CodesafeBaseModel):
    """Immutable variant used for runtime config and identity tokens."""

    model_config = ConfigDict(
        extra='forbid',
        frozen=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )
