"""Base contract enforcement utilities.

require() is the single enforcement mechanism for caller contracts.
Violations raise immediately and are never handed to an exception policy.
"""

from typing import Optional, TypeVar

from codesafe.contracts.failure import ContractViolation

T = TypeVar("T")


def require(condition: bool, message: str) -> None:
    """Enforce a caller contract.

    Parameters
    ----------
    condition : bool
        The invariant that must be true. If False, ContractViolation is raised.

    message : str
        Error message explaining the contract violation (for debugging).

    Raises
    ------
    ContractViolation
        If condition is False. This indicates a bug in calling code.

    Examples
    --------
    >>> require(callable(handler), "Handler contract: handler must be callable")
    """
    if not condition:
        raise ContractViolation(message)


def require_not_none(value: Optional[T], message: str) -> T:
    """Return ``value`` or raise ContractViolation when it is None."""
    if value is None:
        raise ContractViolation(message)
    return value
