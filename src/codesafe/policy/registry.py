"""Policy registry: process-wide map from scope to exception policy.

The registry lazily creates an empty (pass-through) policy on the first
lookup of a scope and keeps it for its whole lifetime. Nothing is ever
removed: there is no unregister and no reset. Applications configure
their scopes once, typically at startup:

    from codesafe.policy import get_policy_registry, log_and_absorb

    registry = get_policy_registry()
    registry.append_handlers("billing", log_and_absorb(logger))

Thread Safety:
    get-or-create is a single critical section, so concurrent first
    lookups of one scope always observe the same policy instance.
"""

import logging
import threading
from typing import Iterable

from codesafe.policy.exception_policy import ExceptionPolicy, Handler
from codesafe.policy.scope import Scope, ScopeLike

__all__ = ['PolicyRegistry', 'get_policy_registry']

logger = logging.getLogger(__name__)


class PolicyRegistry:
    """Thread-safe scope -> ExceptionPolicy map.

    Scopes may be given as Scope instances or anything Scope.of() accepts
    (a string, a class, a module).
    """

    def __init__(self):
        self._policies: dict[Scope, ExceptionPolicy] = {}
        self._lock = threading.Lock()

    def for_scope(self, token: ScopeLike) -> ExceptionPolicy:
        """Return the policy for ``token``, creating an empty one if absent.

        Parameters
        ----------
        token : Scope, str, type or module
            Scope identity.

        Returns
        -------
        ExceptionPolicy
            The same instance for every call with an equal scope.
        """
        scope = Scope.of(token)
        policy = self._policies.get(scope)
        if policy is not None:
            return policy
        with self._lock:
            policy = self._policies.get(scope)
            if policy is None:
                policy = ExceptionPolicy(scope.name)
                self._policies[scope] = policy
                logger.debug(f"Created exception policy for scope '{scope}'")
            return policy

    def append_handlers(self, token: ScopeLike, *handlers: Handler) -> ExceptionPolicy:
        """Append ``handlers`` to the scope's policy, in call order."""
        return self.for_scope(token).append(*handlers)

    def new_with_handlers(self, token: ScopeLike, handlers: Iterable[Handler]) -> ExceptionPolicy:
        """List form of append_handlers()."""
        return self.for_scope(token).append(*list(handlers))

    def scopes(self) -> list[Scope]:
        """Snapshot of registered scopes, sorted by name."""
        with self._lock:
            return sorted(self._policies, key=lambda s: s.name)

    def __contains__(self, token: ScopeLike) -> bool:
        return Scope.of(token) in self._policies

    def __len__(self) -> int:
        return len(self._policies)


_REGISTRY = PolicyRegistry()


def get_policy_registry() -> PolicyRegistry:
    """Return the process-wide registry (created at import, never reset)."""
    return _REGISTRY
