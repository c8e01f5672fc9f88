"""Null, blank, emptiness and validity predicates.

is_valid() is the generic "is this worth using" check consulted by
SafeOperator.valid_stream() and Def testers:

- None is never valid
- strings must be non-blank (see is_blank)
- collections and mappings must be non-empty
- objects implementing Validatable answer for themselves
- types with a registered validator are checked by it
- anything else is valid
"""

import logging
import threading
from collections.abc import Collection, Mapping
from datetime import datetime
from decimal import Decimal
from numbers import Number
from typing import Any, Callable, Iterable, Optional, Protocol, TypeVar, runtime_checkable

from codesafe.config import get_config

__all__ = [
    'Validatable',
    'register_validator',
    'is_null',
    'is_any_null',
    'is_not_null',
    'is_blank',
    'is_not_blank',
    'is_any_blank',
    'is_all_blank',
    'is_all_not_blank',
    'is_empty',
    'is_not_empty',
    'equals_zero',
    'more_than_zero',
    'more_equals_zero',
    'less_than_zero',
    'less_equals_zero',
    'decimal_equals',
    'has_decimal',
    'before',
    'after',
    'before_now',
    'after_now',
    'is_valid',
    'not_valid',
    'all_valid',
    'all_elements_valid',
    'any_element_valid',
    'field_not_null',
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class Validatable(Protocol):
    """Objects able to judge their own validity.

    Example::

        class Account:
            def __init__(self, active, owner):
                self.active = active
                self.owner = owner

            def valid(self) -> bool:
                return self.active and self.owner is not None
    """

    def valid(self) -> bool: ...


_validators: dict[type, Callable[[Any], bool]] = {}
_validators_lock = threading.Lock()


def register_validator(cls: type, predicate: Callable[[Any], bool]) -> None:
    """Register the validity predicate for instances of ``cls``.

    Consulted by is_valid() for objects that are not strings, collections,
    mappings or Validatable. Subclasses inherit their closest base's
    validator. Re-registering a type replaces its predicate.
    """
    with _validators_lock:
        _validators[cls] = predicate
    logger.debug(f"Validator registered for {cls.__qualname__}")


def _validator_for(cls: type) -> Optional[Callable[[Any], bool]]:
    for base in cls.__mro__:
        predicate = _validators.get(base)
        if predicate is not None:
            return predicate
    return None


# ----------------------------------------------------------------- objects

def is_null(o) -> bool:
    return o is None


def is_any_null(*objects) -> bool:
    return any(o is None for o in objects)


def is_not_null(*objects) -> bool:
    return not is_any_null(*objects)


# ----------------------------------------------------------------- strings

def is_blank(s: Optional[str]) -> bool:
    """True for None, "" and the configured blank tokens ("null", "undefined")."""
    if s is None or len(s) == 0:
        return True
    return s.lower() in get_config().check.blank_tokens


def is_not_blank(s: Optional[str]) -> bool:
    return not is_blank(s)


def is_any_blank(*strs: Optional[str]) -> bool:
    return any(is_blank(s) for s in strs)


def is_all_blank(*strs: Optional[str]) -> bool:
    return all(is_blank(s) for s in strs)


def is_all_not_blank(*strs: Optional[str]) -> bool:
    return not is_any_blank(*strs)


# ------------------------------------------------------------- collections

def is_empty(collection) -> bool:
    return collection is None or len(collection) == 0


def is_not_empty(collection) -> bool:
    return not is_empty(collection)


# ----------------------------------------------------------------- numbers

def equals_zero(number: Optional[Number]) -> bool:
    return number is not None and number == 0


def more_than_zero(number: Optional[Number]) -> bool:
    return number is not None and number > 0


def more_equals_zero(number: Optional[Number]) -> bool:
    return number is not None and number >= 0


def less_than_zero(number: Optional[Number]) -> bool:
    return number is not None and number < 0


def less_equals_zero(number: Optional[Number]) -> bool:
    return number is not None and number <= 0


def decimal_equals(a: Optional[Decimal], b: Optional[Decimal]) -> bool:
    """Numeric equality ignoring scale; False if either side is None."""
    if a is None or b is None:
        return False
    return a.compare(b) == 0


def has_decimal(number: Optional[Number]) -> bool:
    """True when ``number`` has a fractional part."""
    if number is None or isinstance(number, int):
        return False
    return number % 1 != 0


# ------------------------------------------------------------------- times

def before(moment: Optional[datetime], reference: datetime) -> bool:
    return moment is not None and moment < reference


def after(moment: Optional[datetime], reference: datetime) -> bool:
    return moment is not None and moment > reference


def before_now(moment: Optional[datetime]) -> bool:
    return moment is not None and moment < datetime.now(moment.tzinfo)


def after_now(moment: Optional[datetime]) -> bool:
    return moment is not None and moment > datetime.now(moment.tzinfo)


# ---------------------------------------------------------------- validity

def is_valid(o) -> bool:
    if o is None:
        return False
    if isinstance(o, str):
        return is_not_blank(o)
    if isinstance(o, (Collection, Mapping)):
        return len(o) > 0
    if isinstance(o, Validatable):
        return bool(o.valid())
    predicate = _validator_for(type(o))
    if predicate is not None:
        return bool(predicate(o))
    return True


def not_valid(o) -> bool:
    return not is_valid(o)


def all_valid(*objects) -> bool:
    return all(is_valid(o) for o in objects)


def all_elements_valid(iterable: Iterable) -> bool:
    return all(is_valid(e) for e in iterable)


def any_element_valid(iterable: Iterable) -> bool:
    return any(is_valid(e) for e in iterable)


def field_not_null(*extractors: Callable[[T], Any]) -> Callable[[T], bool]:
    """Predicate: the object and every extracted field are not None.

    With no extractors the predicate is always False.
    """
    if not extractors:
        return lambda o: False

    def predicate(o: T) -> bool:
        return o is not None and all(extract(o) is not None for extract in extractors)

    return predicate
