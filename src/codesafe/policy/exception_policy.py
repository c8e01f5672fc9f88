"""Ordered exception-recovery handler chain for one scope.

A handler receives the current failure and returns either a failure
(the same one or a substitute) to pass along, or None to absorb it.
Handlers run in insertion order and the chain stops at the first
absorption. A chain that runs out without absorbing resolves to the
last failure returned; an empty chain resolves every failure to itself.
"""

import logging
import threading
from typing import Callable, Iterable, Optional

from codesafe.contracts import ContractViolation, Resolution, require

__all__ = ['Handler', 'ExceptionPolicy']

logger = logging.getLogger(__name__)

Handler = Callable[[Exception], Optional[Exception]]


class ExceptionPolicy:
    """Append-only handler chain.

    Handlers are stored as an immutable tuple that is replaced under a lock
    on every append. resolve() takes one snapshot of the tuple before
    running, so a concurrent append is either fully visible or not at all.

    Parameters
    ----------
    scope : str
        Name of the owning scope, used in log records.
    handlers : iterable of Handler, optional
        Initial handlers, in order.
    """

    def __init__(self, scope: str, handlers: Iterable[Handler] = ()):
        self.scope = scope
        self._lock = threading.Lock()
        self._handlers: tuple[Handler, ...] = ()
        self.append(*handlers)

    @property
    def handlers(self) -> tuple[Handler, ...]:
        """Current handler snapshot."""
        return self._handlers

    def append(self, *handlers: Handler) -> "ExceptionPolicy":
        """Append handlers after the ones already present.

        Raises
        ------
        ContractViolation
            If any handler is not callable. Nothing is appended in that case.
        """
        for handler in handlers:
            require(callable(handler), f"Handler for scope '{self.scope}' must be callable, got {handler!r}")
        if not handlers:
            return self
        with self._lock:
            self._handlers = self._handlers + tuple(handlers)
        logger.debug(f"Scope '{self.scope}': {len(handlers)} handler(s) appended, {len(self._handlers)} total")
        return self

    def resolve(self, failure: Exception) -> Optional[Exception]:
        """Feed ``failure`` through the handler chain.

        Parameters
        ----------
        failure : Exception
            The upstream failure.

        Returns
        -------
        Exception or None
            The resolved failure, or None if a handler absorbed it.

        Raises
        ------
        ContractViolation
            If a handler returns something that is neither an exception nor None.
        """
        current = failure
        for handler in self._handlers:
            result = handler(current)
            if result is None:
                return None
            if not isinstance(result, BaseException):
                raise ContractViolation(
                    f"Handler {handler!r} in scope '{self.scope}' returned {type(result).__name__}, "
                    f"expected an exception or None"
                ) from current
            current = result
        return current

    def outcome(self, failure: Exception) -> Resolution:
        """Classify what resolve() would do with ``failure``.

        Runs the handlers, so their side effects happen.
        """
        return Resolution.RECOVERED if self.resolve(failure) is None else Resolution.FATAL

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"ExceptionPolicy(scope={self.scope!r}, handlers={len(self._handlers)})"
