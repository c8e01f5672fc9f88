"""Failure-aware execution bound to a scope's exception policy.

A SafeOperator runs callables that may fail and routes every failure
through the ExceptionPolicy of its scope. There are exactly two outcomes:

- recovered: a handler absorbed the failure, the caller gets a default
  (None, or a kind's zero value for the ``get_*`` family)
- fatal: the resolved failure is re-raised as UnhandledFailure

Which one happens is decided entirely by the policy, never by the
operator. A scope nobody configured has an empty policy, so every failure
is fatal there. ContractViolation raised inside a callable bypasses the
policy and propagates unchanged.

Typical usage::

    registry = get_policy_registry()
    registry.append_handlers("reports", log_and_absorb(logger))

    safer = SafeOperator("reports")
    total = safer.get_int(lambda: int(row["total"]))   # 0 on failure
    names = safer.get_list(lambda: request.names)      # [] on None/failure
"""

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Callable, Iterable, Iterator, Optional, TypeVar

from codesafe.config import get_config
from codesafe.contracts import ContractViolation, UnhandledFailure, require
from codesafe.enums.kinds import ValueKind
from codesafe.policy.exception_policy import ExceptionPolicy
from codesafe.policy.registry import PolicyRegistry, get_policy_registry
from codesafe.policy.scope import Scope, ScopeLike
from codesafe.util.check import is_valid

__all__ = ['SafeOperator', 'safer_for']

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class SafeOperator:
    """Runs fallible callables under a scope's exception policy.

    The operator keeps only its scope and registry; the policy is looked up
    on every failure so handlers appended later are honored.

    Parameters
    ----------
    scope : Scope, str, type or module
        Scope whose policy governs failures.
    registry : PolicyRegistry, optional
        Registry to consult. Defaults to the process-wide registry.
    """

    __slots__ = ("scope", "_registry")

    def __init__(self, scope: ScopeLike, registry: Optional[PolicyRegistry] = None):
        self.scope = Scope.of(scope)
        self._registry = registry if registry is not None else get_policy_registry()

    @property
    def policy(self) -> ExceptionPolicy:
        return self._registry.for_scope(self.scope)

    def __repr__(self) -> str:
        return f"SafeOperator(scope={self.scope.name!r})"

    # ------------------------------------------------------------------
    # Failure handling
    # ------------------------------------------------------------------

    def handle(self, failure: Exception) -> None:
        """Resolve ``failure`` through the policy.

        Returns normally if the failure was absorbed.

        Raises
        ------
        UnhandledFailure
            If the policy resolved to a failure. Chained from it.
        """
        resolved = self.policy.resolve(failure)
        levels = get_config().logging
        if resolved is None:
            logger.log(levels.level("absorbed_level"),
                       f"Scope '{self.scope}' absorbed {type(failure).__name__}: {failure}")
            return
        logger.log(levels.level("unhandled_level"),
                   f"Scope '{self.scope}' re-raising {type(resolved).__name__}: {resolved}")
        raise UnhandledFailure(resolved, self.scope.name) from resolved

    def execute(self, effect: Callable[[], Any]) -> None:
        """Run a zero-argument effect; failures go through the policy."""
        require(callable(effect), "execute() needs a callable effect")
        try:
            effect()
        except ContractViolation:
            raise
        except Exception as exc:
            self.handle(exc)

    def get(self, producer: Callable[[], T]) -> Optional[T]:
        """Run a zero-argument producer.

        Returns
        -------
        The produced value, or None if it failed and the failure was absorbed.

        Raises
        ------
        UnhandledFailure
            If the policy did not absorb the failure.
        """
        require(callable(producer), "get() needs a callable producer")
        try:
            return producer()
        except ContractViolation:
            raise
        except Exception as exc:
            self.handle(exc)
        return None

    # ------------------------------------------------------------------
    # Adapters to plain callables
    # ------------------------------------------------------------------

    def into_effect(self, effect: Callable[[], Any]) -> Callable[[], None]:
        """Wrap ``effect`` so calling it behaves like ``execute(effect)``."""
        require(callable(effect), "into_effect() needs a callable effect")

        def run() -> None:
            self.execute(effect)

        return run

    def into_producer(self, producer: Callable[[], T]) -> Callable[[], Optional[T]]:
        """Wrap ``producer`` so calling it behaves like ``get(producer)``."""
        require(callable(producer), "into_producer() needs a callable producer")

        def produce() -> Optional[T]:
            return self.get(producer)

        return produce

    def into_function(self, fn: Callable[[T], R]) -> Callable[[T], Optional[R]]:
        """One-argument form of into_producer()."""
        require(callable(fn), "into_function() needs a callable")

        def apply(arg: T) -> Optional[R]:
            return self.get(lambda: fn(arg))

        return apply

    # ------------------------------------------------------------------
    # Null coalescing
    # ------------------------------------------------------------------

    def ensure(self, value, kind: ValueKind):
        """``value`` if not None, else the kind's zero value.

        Total and failure-free; never consults the policy.

        Examples
        --------
        >>> safer.ensure(None, ValueKind.STRING)
        ''
        >>> safer.ensure(None, ValueKind.LIST)
        []
        """
        return kind.coalesce(value)

    def get_bool(self, producer: Callable[[], Optional[bool]]) -> bool:
        return self.ensure(self.get(producer), ValueKind.BOOLEAN)

    def get_str(self, producer: Callable[[], Optional[str]]) -> str:
        return self.ensure(self.get(producer), ValueKind.STRING)

    def get_int(self, producer: Callable[[], Optional[int]]) -> int:
        return self.ensure(self.get(producer), ValueKind.INTEGER)

    def get_float(self, producer: Callable[[], Optional[float]]) -> float:
        return self.ensure(self.get(producer), ValueKind.FLOAT)

    def get_decimal(self, producer: Callable[[], Optional[Decimal]]) -> Decimal:
        return self.ensure(self.get(producer), ValueKind.DECIMAL)

    def get_list(self, producer: Callable[[], Optional[list]]) -> list:
        return self.ensure(self.get(producer), ValueKind.LIST)

    def get_set(self, producer: Callable[[], Optional[set]]) -> set:
        return self.ensure(self.get(producer), ValueKind.SET)

    def get_dict(self, producer: Callable[[], Optional[dict]]) -> dict:
        return self.ensure(self.get(producer), ValueKind.MAP)

    # ------------------------------------------------------------------
    # Safe iteration
    # ------------------------------------------------------------------

    def stream(self, items: Optional[Iterable]) -> Iterator:
        """Iterate the non-None items; a mapping yields its (key, value) pairs."""
        if items is None:
            return iter(())
        if isinstance(items, Mapping):
            return iter(list(items.items()))
        return (item for item in items if item is not None)

    def valid_stream(self, items: Optional[Iterable]) -> Iterator:
        """Iterate the items that pass is_valid()."""
        return (item for item in self.stream(items) if is_valid(item))


def safer_for(scope: ScopeLike) -> SafeOperator:
    """Operator for ``scope`` on the process-wide registry."""
    return SafeOperator(scope)
