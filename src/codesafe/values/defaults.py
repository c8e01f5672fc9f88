"""Default value paired with an acceptance test.

    PORT = Def.of(8080, lambda p: 0 < p < 65536)
    port = PORT.get(lambda: int(env["PORT"]))   # 8080 when missing, bad or out of range

Failures from producers and testers run under the
``codesafe.values.defaults`` scope, which absorbs them at import time.
"""

import logging
from decimal import Decimal
from typing import Callable, ClassVar, Generic, Optional, TypeVar

from codesafe.contracts import require
from codesafe.policy.handlers import log_and_absorb
from codesafe.policy.registry import get_policy_registry
from codesafe.safe.operator import SafeOperator

__all__ = ['Def', 'DEF_SCOPE']

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEF_SCOPE = __name__

get_policy_registry().append_handlers(
    DEF_SCOPE, log_and_absorb(logger, logging.DEBUG, "Def producer failed")
)
_SAFER = SafeOperator(DEF_SCOPE)


def _not_none(value) -> bool:
    return value is not None


class Def(Generic[T]):
    """Immutable (default, tester) pair."""

    __slots__ = ("_default", "_tester")

    BOOLEAN: ClassVar["Def[bool]"]
    STRING: ClassVar["Def[str]"]
    INTEGER: ClassVar["Def[int]"]
    FLOAT: ClassVar["Def[float]"]
    DECIMAL: ClassVar["Def[Decimal]"]

    def __init__(self, default: T, tester: Callable[[Optional[T]], bool] = _not_none):
        require(callable(tester), "Def tester must be callable")
        self._default = default
        self._tester = tester

    @classmethod
    def of(cls, default: T, tester: Callable[[Optional[T]], bool] = _not_none) -> "Def[T]":
        return cls(default, tester)

    @property
    def default_value(self) -> T:
        return self._default

    def filter(self, tester: Callable[[Optional[T]], bool]) -> "Def[T]":
        """New Def with the same default and a different tester."""
        return Def(self._default, tester)

    def _accepted(self, producer: Callable[[], Optional[T]]) -> tuple[bool, Optional[T]]:
        outcome = _SAFER.get(lambda: _checked(producer(), self._tester))
        if outcome is None:
            return False, None
        return True, outcome[0]

    def get(self, producer: Callable[[], Optional[T]]) -> T:
        """The produced value if it passes the tester, else the default."""
        ok, value = self._accepted(producer)
        return value if ok else self._default

    def get_value(self, value: Optional[T]) -> T:
        """``value`` if it passes the tester, else the default."""
        return self.get(lambda: value)

    def check_or_none(self, producer: Callable[[], Optional[T]]) -> Optional[T]:
        """The produced value if it passes the tester, else None."""
        ok, value = self._accepted(producer)
        return value if ok else None

    def check_or_none_value(self, value: Optional[T]) -> Optional[T]:
        return self.check_or_none(lambda: value)

    def __repr__(self) -> str:
        return f"Def({self._default!r})"


def _checked(value, tester) -> Optional[tuple]:
    # One-tuple so an accepted None is distinguishable from a rejection
    return (value,) if tester(value) else None


Def.BOOLEAN = Def.of(False)
Def.STRING = Def.of("")
Def.INTEGER = Def.of(0)
Def.FLOAT = Def.of(0.0)
Def.DECIMAL = Def.of(Decimal(0))
