"""Contracts: fail-fast enforcement of caller obligations.

Contracts fail immediately and loudly when calling code misuses the
library (None where a value is required, an unset parser, colliding enum
keys). They are not recoverable and bypass every exception policy.

Key principle:
- Pydantic validates configuration
- Contracts validate caller correctness
- Exception policies decide what happens to upstream failures
"""

from codesafe.contracts.failure import (
    CodesafeError,
    ContractViolation,
    EnumIndexCollision,
    ParserAlreadyConfigured,
    ParserNotConfigured,
    Resolution,
    UnhandledFailure,
)
from codesafe.contracts.base import require, require_not_none

__all__ = [
    "CodesafeError",
    "ContractViolation",
    "EnumIndexCollision",
    "ParserAlreadyConfigured",
    "ParserNotConfigured",
    "Resolution",
    "UnhandledFailure",
    "require",
    "require_not_none",
]
