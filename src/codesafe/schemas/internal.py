"""InternalConfig: authoritative runtime configuration.

This is the only config schema runtime code sees. It is fully validated,
immutable, and has no optional fields.
"""

import logging

from codesafe.schemas.base import FrozenModel
from codesafe.schemas.param import LogLevel


class InternalParseConfig(FrozenModel):
    """Runtime parsing tokens."""
    truthy_tokens: frozenset[str]
    falsy_tokens: frozenset[str]


class InternalCheckConfig(FrozenModel):
    """Runtime blank detection."""
    blank_tokens: frozenset[str]


class InternalLoggingConfig(FrozenModel):
    """Runtime log levels."""
    absorbed_level: LogLevel
    unhandled_level: LogLevel
    handler_level: LogLevel

    def level(self, name: str) -> int:
        """Numeric level for one of the configured level fields."""
        return logging.getLevelName(getattr(self, name))


class InternalConfig(FrozenModel):
    """Fully resolved runtime configuration."""
    parse: InternalParseConfig
    check: InternalCheckConfig
    logging: InternalLoggingConfig
