"""Scope tokens: the identity an exception policy is registered under.

A scope names one logical owner of a policy (a service class, a module,
a subsystem). Equal scopes always resolve to the same policy.
"""

import types
from typing import Union

from pydantic import field_validator

from codesafe.contracts import require
from codesafe.schemas.base import FrozenModel

ScopeLike = Union["Scope", str, type, types.ModuleType]


class Scope(FrozenModel):
    """Opaque, hashable scope identity.

    Examples
    --------
    >>> Scope.of("billing") == Scope(name="billing")
    True
    >>> Scope.of(dict).name
    'builtins.dict'
    """
    name: str

    @field_validator("name")
    @classmethod
    def non_empty(cls, v):
        if not v:
            raise ValueError("Scope name must not be empty")
        return v

    @classmethod
    def of(cls, owner: ScopeLike) -> "Scope":
        """Build a scope from a string, a class, a module, or another scope.

        Raises
        ------
        ContractViolation
            If ``owner`` is a blank string.
        TypeError
            If ``owner`` is none of the accepted kinds.
        """
        if isinstance(owner, Scope):
            return owner
        if isinstance(owner, str):
            require(bool(owner.strip()), "Scope name must not be blank")
            return cls(name=owner)
        if isinstance(owner, type):
            return cls(name=f"{owner.__module__}.{owner.__qualname__}")
        if isinstance(owner, types.ModuleType):
            return cls(name=owner.__name__)
        raise TypeError(f"Cannot derive a scope from {type(owner).__name__}")

    def __str__(self) -> str:
        return self.name
