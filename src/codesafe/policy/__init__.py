"""Exception-recovery policies.

- scope: Scope tokens
- exception_policy: Ordered handler chain and its resolution algorithm
- registry: Process-wide scope -> policy map
- handlers: Ready-made handler factories
"""

from codesafe.policy.scope import Scope
from codesafe.policy.exception_policy import ExceptionPolicy, Handler
from codesafe.policy.registry import PolicyRegistry, get_policy_registry
from codesafe.policy.handlers import (
    absorb,
    absorb_all,
    log_and_absorb,
    log_and_propagate,
    propagate,
    translate,
)

__all__ = [
    "Scope",
    "ExceptionPolicy",
    "Handler",
    "PolicyRegistry",
    "get_policy_registry",
    "absorb",
    "absorb_all",
    "log_and_absorb",
    "log_and_propagate",
    "propagate",
    "translate",
]
