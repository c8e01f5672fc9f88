"""ParamConfig: expert defaults for codesafe.

This module defines the complete default configuration. Every tunable
constant of the library has a default here; runtime code only ever sees
the resolved InternalConfig.
"""

from typing import Literal

from pydantic import Field, field_validator

from codesafe.schemas.base import CodesafeBaseModel

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Nested Configuration Models
# =============================================================================

class ParseConfig(CodesafeBaseModel):
    """Text-to-value parsing tokens (matched case-insensitively)."""
    truthy_tokens: list[str] = Field(
        default_factory=lambda: ["true", "1", "t", "yes", "y", "on"]
    )
    falsy_tokens: list[str] = Field(
        default_factory=lambda: ["false", "0", "f", "no", "n", "off"]
    )

    @field_validator("truthy_tokens", "falsy_tokens")
    @classmethod
    def lowercase_tokens(cls, v):
        """Store tokens lowercased so lookups can compare directly."""
        return [token.lower() for token in v]


class CheckConfig(CodesafeBaseModel):
    """Blank-string detection."""
    blank_tokens: list[str] = Field(
        default_factory=lambda: ["null", "undefined"],
        description="Strings treated as blank besides the empty string",
    )

    @field_validator("blank_tokens")
    @classmethod
    def lowercase_tokens(cls, v):
        """Store tokens lowercased so lookups can compare directly."""
        return [token.lower() for token in v]


class LoggingConfig(CodesafeBaseModel):
    """Log levels used by the library's own records."""
    absorbed_level: LogLevel = "DEBUG"
    unhandled_level: LogLevel = "WARNING"
    handler_level: LogLevel = "WARNING"


# =============================================================================
# Root Configuration
# =============================================================================

class ParamConfig(CodesafeBaseModel):
    """Complete expert defaults."""
    parse: ParseConfig = Field(default_factory=ParseConfig)
    check: CheckConfig = Field(default_factory=CheckConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
