"""Default SafeOperator exposed as module-level functions.

Convenience for code that does not need a scope of its own:

    from codesafe.safe import safer

    safer.get_int(lambda: int(payload["count"]))
    safer.parse_int("233")       # 233
    safer.parse_int("100abc")    # 0

The functions run under the ``codesafe.safe.safer`` scope, which logs and
absorbs every failure at import time: ``execute`` swallows failures,
``get`` returns None, and the ``get_*``/``parse_*`` functions return the
kind's zero value.
"""

import logging
from decimal import Decimal
from typing import Any, Callable, Iterable, Iterator, Optional, TypeVar

from codesafe.enums.kinds import ValueKind
from codesafe.policy.handlers import log_and_absorb
from codesafe.policy.registry import get_policy_registry
from codesafe.safe.operator import SafeOperator
from codesafe.util import parse as _parse
from codesafe.util.parsers import ParserRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

SAFER_SCOPE = __name__

get_policy_registry().append_handlers(SAFER_SCOPE, log_and_absorb(logger))
SAFER = SafeOperator(SAFER_SCOPE)


def execute(effect: Callable[[], Any]) -> None:
    SAFER.execute(effect)


def get(producer: Callable[[], T]) -> Optional[T]:
    return SAFER.get(producer)


def ensure(value, kind: ValueKind):
    return SAFER.ensure(value, kind)


def get_bool(producer: Callable[[], Optional[bool]]) -> bool:
    return SAFER.get_bool(producer)


def get_str(producer: Callable[[], Optional[str]]) -> str:
    return SAFER.get_str(producer)


def get_int(producer: Callable[[], Optional[int]]) -> int:
    return SAFER.get_int(producer)


def get_float(producer: Callable[[], Optional[float]]) -> float:
    return SAFER.get_float(producer)


def get_decimal(producer: Callable[[], Optional[Decimal]]) -> Decimal:
    return SAFER.get_decimal(producer)


def get_list(producer: Callable[[], Optional[list]]) -> list:
    return SAFER.get_list(producer)


def get_set(producer: Callable[[], Optional[set]]) -> set:
    return SAFER.get_set(producer)


def get_dict(producer: Callable[[], Optional[dict]]) -> dict:
    return SAFER.get_dict(producer)


def stream(items: Optional[Iterable]) -> Iterator:
    return SAFER.stream(items)


def valid_stream(items: Optional[Iterable]) -> Iterator:
    return SAFER.valid_stream(items)


def parse_str(o: Any) -> str:
    return ensure(_parse.parse_str(o), ValueKind.STRING)


def parse_bool(s: Optional[str]) -> bool:
    return ensure(_parse.parse_bool(s), ValueKind.BOOLEAN)


def parse_int(s: Optional[str]) -> int:
    return ensure(_parse.parse_int(s), ValueKind.INTEGER)


def parse_float(s: Optional[str]) -> float:
    return ensure(_parse.parse_float(s), ValueKind.FLOAT)


def parse_decimal(s: Optional[str]) -> Decimal:
    return ensure(_parse.parse_decimal(s), ValueKind.DECIMAL)


def parse_list(text: Optional[str], cls: type[T], parsers: Optional[ParserRegistry] = None) -> list[T]:
    return ensure(_parse.parse_list(text, cls, parsers), ValueKind.LIST)


def parse_object(text: Optional[str], cls: type[T], parsers: Optional[ParserRegistry] = None) -> Optional[T]:
    """Parsed object, else a default ``cls()`` (None if that fails too)."""
    result = _parse.parse_object(text, cls, parsers)
    return result if result is not None else SAFER.get(cls)
