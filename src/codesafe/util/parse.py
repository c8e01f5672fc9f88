"""Lenient text-to-value parsing.

Every ``parse_*`` function returns None when the input is None or cannot
be parsed; the matching ``opt_*`` function wraps the result in an Opt.
Parse failures are routed through the ``codesafe.util.parse`` scope,
which absorbs them at import time.

Object and list parsing delegate to the injected parser capability
(codesafe.util.parsers). Calling them before the parsers were set is a
contract violation and raises ParserNotConfigured.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal
from numbers import Number
from typing import Any, Callable, Iterable, Optional, TypeVar

from codesafe.config import get_config
from codesafe.enums.kinds import ValueKind
from codesafe.policy.handlers import log_and_absorb
from codesafe.policy.registry import get_policy_registry
from codesafe.safe.operator import SafeOperator
from codesafe.util.parsers import ParserRegistry, get_parser_registry
from codesafe.values.opt import Opt

__all__ = [
    'PARSE_SCOPE',
    'parse_str',
    'parse_bool',
    'parse_int',
    'parse_float',
    'parse_decimal',
    'parse_object',
    'parse_list',
    'parse',
    'opt_str',
    'opt_bool',
    'opt_int',
    'opt_float',
    'opt_decimal',
    'is_true',
    'is_false',
    'to_dict',
    'map_list',
]

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")

PARSE_SCOPE = __name__

get_policy_registry().append_handlers(
    PARSE_SCOPE, log_and_absorb(logger, logging.DEBUG, "Parse failed")
)
_SAFER = SafeOperator(PARSE_SCOPE)


def parse_str(o: Any) -> Optional[str]:
    return None if o is None else str(o)


def parse_bool(o: Any) -> Optional[bool]:
    """Broad boolean parsing.

    - bools are returned as is
    - strings are matched case-insensitively against the configured
      truthy tokens (true, 1, t, yes, y, on) and falsy tokens
      (false, 0, f, no, n, off)
    - numbers equal to 1 or 0 map to True or False
    - anything else is None
    """
    if o is None:
        return None
    if isinstance(o, bool):
        return o
    if isinstance(o, str):
        token = o.strip().lower()
        tokens = get_config().parse
        if token in tokens.truthy_tokens:
            return True
        if token in tokens.falsy_tokens:
            return False
        return None
    if isinstance(o, Number):
        if o == 1:
            return True
        if o == 0:
            return False
    return None


def parse_int(s: Optional[str]) -> Optional[int]:
    if s is None:
        return None
    return _SAFER.get(lambda: int(s))


def parse_float(s: Optional[str]) -> Optional[float]:
    if s is None:
        return None
    return _SAFER.get(lambda: float(s))


def parse_decimal(s: Optional[str]) -> Optional[Decimal]:
    if s is None:
        return None
    return _SAFER.get(lambda: Decimal(s.strip() if isinstance(s, str) else s))


def parse_object(text: Optional[str], cls: type[T],
                 parsers: Optional[ParserRegistry] = None) -> Optional[T]:
    """Parse ``text`` into an instance of ``cls`` with the object parser.

    Raises
    ------
    ParserNotConfigured
        If no object parser was set.
    """
    parser = (parsers or get_parser_registry()).object_parser
    if text is None:
        return None
    return _SAFER.get(lambda: parser(text, cls))


def parse_list(text: Optional[str], cls: type[T],
               parsers: Optional[ParserRegistry] = None) -> list[T]:
    """Parse ``text`` into a list of ``cls``; empty list on None or failure.

    Raises
    ------
    ParserNotConfigured
        If no list parser was set.
    """
    parser = (parsers or get_parser_registry()).list_parser
    if text is None:
        return []
    return _SAFER.get_list(lambda: parser(text, cls))


def parse(text: Optional[str], cls: type[T],
          parsers: Optional[ParserRegistry] = None) -> Optional[T]:
    """Parse ``text`` as ``cls``, dispatching on its ValueKind.

    Primitive kinds use the lenient parsers above; containers and any
    other type go through the object parser.
    """
    kind = ValueKind.from_type(cls)
    if kind is ValueKind.BOOLEAN:
        return parse_bool(text)
    if kind is ValueKind.STRING:
        return text
    if kind is ValueKind.INTEGER:
        return parse_int(text)
    if kind is ValueKind.FLOAT:
        return parse_float(text)
    if kind is ValueKind.DECIMAL:
        return parse_decimal(text)
    return parse_object(text, cls, parsers)


def opt_str(o: Any) -> Opt[str]:
    return Opt.of(parse_str(o))


def opt_bool(o: Any) -> Opt[bool]:
    return Opt.of(parse_bool(o))


def opt_int(s: Optional[str]) -> Opt[int]:
    return Opt.of(parse_int(s))


def opt_float(s: Optional[str]) -> Opt[float]:
    return Opt.of(parse_float(s))


def opt_decimal(s: Optional[str]) -> Opt[Decimal]:
    return Opt.of(parse_decimal(s))


def is_true(o: Any) -> bool:
    """True for anything parse_bool() reads as True."""
    return opt_bool(o).or_else(False)


def is_false(o: Any) -> bool:
    return not is_true(o)


def to_dict(items: Optional[Iterable[T]], key_fn: Callable[[T], K],
            value_fn: Callable[[T], V]) -> dict[K, V]:
    """Index the non-None items; on duplicate keys the later item wins."""
    if items is None:
        return {}
    return {key_fn(item): value_fn(item) for item in items if item is not None}


def map_list(items: Optional[Iterable[T]], fn: Callable[..., V]) -> list[V]:
    """Map the non-None items; a mapping's pairs are passed as (key, value)."""
    if items is None:
        return []
    if isinstance(items, Mapping):
        return [fn(key, value) for key, value in items.items()]
    return [fn(item) for item in items if item is not None]
