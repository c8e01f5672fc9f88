"""Value kinds with a canonical zero value.

Each kind pairs a Python type with the value substituted for None by
SafeOperator.ensure(). OBJECT is the catch-all for every other type and
has no zero value.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional

from codesafe.contracts import ContractViolation
from codesafe.enums.index import build_index

__all__ = ['ValueKind']


class ValueKind(Enum):
    """Primitive-like and container kinds understood by SafeOperator."""

    BOOLEAN = (bool, lambda: False)
    STRING = (str, lambda: "")
    INTEGER = (int, lambda: 0)
    FLOAT = (float, lambda: 0.0)
    DECIMAL = (Decimal, lambda: Decimal(0))
    LIST = (list, list)
    SET = (set, set)
    MAP = (dict, dict)
    OBJECT = (object, None)

    def __init__(self, python_type: type, zero_factory: Optional[Callable[[], Any]]):
        self.python_type = python_type
        self._zero_factory = zero_factory

    def zero(self) -> Any:
        """Return a fresh zero value of this kind."""
        if self._zero_factory is None:
            raise ContractViolation(f"{self.name} has no zero value")
        return self._zero_factory()

    def coalesce(self, value):
        """``value`` if not None, else zero()."""
        return value if value is not None else self.zero()

    @classmethod
    def from_type(cls, python_type: Optional[type]) -> "ValueKind":
        """Kind for an exact Python type, OBJECT when unknown."""
        return _BY_TYPE.lookup(python_type, cls.OBJECT)


_BY_TYPE = build_index(ValueKind, lambda kind: kind.python_type)
