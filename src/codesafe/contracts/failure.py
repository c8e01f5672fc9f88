"""Failure types shared by every codesafe component.

Two outcomes leave the library as exceptions: a contract violation
(programmer error, never recoverable) and an unhandled failure (a wrapped
upstream failure that the scope's policy chose not to absorb).
"""

from enum import Enum
from typing import Optional


class Resolution(str, Enum):
    """Outcome of running a failure through an exception policy.

    FATAL: the resolved failure is re-raised as UnhandledFailure
    RECOVERED: a handler absorbed the failure, the caller gets a default
    """
    FATAL = "fatal"
    RECOVERED = "recovered"


class CodesafeError(Exception):
    """Base class for the errors codesafe raises itself."""
    pass


class ContractViolation(CodesafeError, RuntimeError):
    """Raised when a caller breaks a codesafe contract.

    This indicates a bug in calling code, not a recoverable runtime
    condition. Contract violations are raised directly and are never
    routed through an exception policy.

    Key distinction:
    - ContractViolation: misuse (None into Opt.check, unset parser, ...)
    - UnhandledFailure: an upstream failure the policy decided to re-raise
    """
    pass


class EnumIndexCollision(ContractViolation):
    """Raised when two enum variants produce the same index key."""

    def __init__(self, first, second, key):
        self.first = first
        self.second = second
        self.key = key
        super().__init__(
            f"Enum index must be unique, but found multiple variants: "
            f"{_variant_name(first)} and {_variant_name(second)} (key={key!r})"
        )


class ParserNotConfigured(ContractViolation):
    """Raised when a parser capability is used before being set."""
    pass


class ParserAlreadyConfigured(ContractViolation):
    """Raised on a second assignment of a set-once parser capability."""
    pass


class UnhandledFailure(CodesafeError, RuntimeError):
    """An upstream failure that survived policy resolution.

    The resolved failure is kept on ``failure`` and as ``__cause__`` so
    tracebacks show the original error.
    """

    def __init__(self, failure: BaseException, scope: Optional[str] = None):
        self.failure = failure
        self.scope = scope
        super().__init__(str(failure))

    def __reduce__(self):
        return (type(self), (self.failure, self.scope))


def _variant_name(variant) -> str:
    return getattr(variant, "name", repr(variant))
