"""Strict optional value container.

Opt holds exactly one non-None value or nothing. Unlike a bare
``Optional[T]`` it cannot be "present with None": ``Opt.check(None)``
fails fast, ``Opt.of(None)`` silently yields the empty Opt, and every
combinator that would produce None produces the empty Opt instead.

Predicates, field extractors and safe_map() mappers run under the
``codesafe.values.opt`` scope, which absorbs failures at import time, so a
predicate that raises counts as False and a failing safe_map() yields
empty. Plain map() lets mapper failures propagate.

Examples
--------
>>> Opt.of(5).filter(lambda v: v > 0).map(lambda v: v * 2)
Opt[10]
>>> Opt.of(None).or_else_get(lambda: None, lambda: "B", lambda: "C")
'B'
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

from codesafe.contracts import ContractViolation, require, require_not_none
from codesafe.policy.handlers import log_and_absorb
from codesafe.policy.registry import get_policy_registry
from codesafe.safe.operator import SafeOperator

__all__ = ['Opt', 'OPT_SCOPE']

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

OPT_SCOPE = __name__

get_policy_registry().append_handlers(
    OPT_SCOPE, log_and_absorb(logger, logging.DEBUG, "Opt callback failed")
)
_SAFER = SafeOperator(OPT_SCOPE)

_NOTHING = object()


class Opt(Generic[T]):
    """Immutable Empty-or-Present(value) container; value is never None."""

    __slots__ = ("_value",)

    _EMPTY: "Opt[Any]"

    def __init__(self, value: Optional[T] = None, *, _present: bool = False):
        if _present:
            require_not_none(value, "Opt.check() requires a non-None value")
        elif value is not None:
            raise ContractViolation("Use Opt.of() or Opt.check() to build a present Opt")
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name, value):
        raise AttributeError("Opt is immutable")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls) -> "Opt[T]":
        """The shared empty instance."""
        return cls._EMPTY

    @classmethod
    def check(cls, value: T) -> "Opt[T]":
        """Present Opt of ``value``.

        Raises
        ------
        ContractViolation
            If ``value`` is None.
        """
        return cls(value, _present=True)

    @classmethod
    def of(cls, value: Optional[T]) -> "Opt[T]":
        """Present Opt of ``value``, or empty when it is None."""
        return cls._EMPTY if value is None else cls(value, _present=True)

    @classmethod
    def of_optional(cls, optional) -> "Opt[T]":
        """Adapt an optional-shaped value.

        Accepts an Opt (returned as is) or any iterable yielding zero or
        one item, such as ``[]``, ``[x]`` or ``()``. Strings, bytes and
        mappings are not optional-shaped.

        Raises
        ------
        ContractViolation
            If ``optional`` is None, not iterable, a string, bytes or mapping,
            or yields more than one item.
        """
        require_not_none(optional, "Optional-shaped value must not be None")
        if isinstance(optional, Opt):
            return optional
        require(not isinstance(optional, (str, bytes, bytearray, Mapping)),
                f"{type(optional).__name__} is not an optional-shaped value")
        try:
            items = iter(optional)
        except TypeError:
            raise ContractViolation(
                f"{type(optional).__name__} is not an optional-shaped value"
            ) from None
        first = next(items, None)
        if next(items, _NOTHING) is not _NOTHING:
            raise ContractViolation("Optional-shaped value yielded more than one item")
        return cls.of(first)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def is_present(self) -> bool:
        return self._value is not None

    def is_empty(self) -> bool:
        return self._value is None

    def if_present(self, consumer: Callable[[T], Any]) -> "Opt[T]":
        """Call ``consumer(value)`` when present; returns self."""
        if self._value is not None:
            consumer(self._value)
        return self

    def if_absent(self, action: Callable[[], Any]) -> "Opt[T]":
        """Call ``action()`` when empty; returns self."""
        if self._value is None:
            action()
        return self

    def __iter__(self) -> Iterator[T]:
        if self._value is not None:
            yield self._value

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def filter(self, predicate: Callable[[T], bool]) -> "Opt[T]":
        """Keep the value only if ``predicate`` holds; a raising predicate counts as False."""
        require(callable(predicate), "filter() needs a callable predicate")
        if self._value is None:
            return self
        return self if _SAFER.get_bool(lambda: predicate(self._value)) else Opt.empty()

    def filter_field(self, extractor: Callable[[T], U], predicate: Callable[[U], bool]) -> "Opt[T]":
        """Keep the value only if ``predicate(extractor(value))`` holds.

        The Opt keeps the original value, not the field.
        """
        require(callable(extractor) and callable(predicate),
                "filter_field() needs a callable extractor and predicate")
        if self._value is None:
            return self
        return self if _SAFER.get_bool(lambda: predicate(extractor(self._value))) else Opt.empty()

    def drop(self, predicate: Callable[[T], bool]) -> "Opt[T]":
        """Inverse of filter(): keep the value only if ``predicate`` does not hold."""
        require(callable(predicate), "drop() needs a callable predicate")
        return self.filter(lambda v: not predicate(v))

    def drop_field(self, extractor: Callable[[T], U], predicate: Callable[[U], bool]) -> "Opt[T]":
        """Inverse of filter_field()."""
        require(callable(predicate), "drop_field() needs a callable predicate")
        return self.filter_field(extractor, lambda f: not predicate(f))

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def map(self, fn: Callable[[T], Optional[U]]) -> "Opt[U]":
        """Present(fn(value)), or empty when empty or when fn returns None."""
        require(callable(fn), "map() needs a callable")
        if self._value is None:
            return Opt.empty()
        return Opt.of(fn(self._value))

    def safe_map(self, fn: Callable[[T], Optional[U]]) -> "Opt[U]":
        """map() that turns a failing ``fn`` into the empty Opt."""
        require(callable(fn), "safe_map() needs a callable")
        if self._value is None:
            return Opt.empty()
        return Opt.of(_SAFER.get(lambda: fn(self._value)))

    def map_opt(self, fn: Callable[[T], "Opt[U]"]) -> "Opt[U]":
        """Flat map: ``fn`` returns an Opt which is used directly.

        Raises
        ------
        ContractViolation
            If ``fn`` returns None or something that is not an Opt.
        """
        require(callable(fn), "map_opt() needs a callable")
        if self._value is None:
            return Opt.empty()
        result = require_not_none(fn(self._value), "map_opt() mapper returned None instead of an Opt")
        require(isinstance(result, Opt), f"map_opt() mapper returned {type(result).__name__}, expected Opt")
        return result

    def map_optional(self, fn: Callable[[T], Iterable[U]]) -> "Opt[U]":
        """Flat map over an optional-shaped result (see of_optional()).

        Raises
        ------
        ContractViolation
            If ``fn`` returns None or a value that is not optional-shaped.
        """
        require(callable(fn), "map_optional() needs a callable")
        if self._value is None:
            return Opt.empty()
        result = require_not_none(fn(self._value), "map_optional() mapper returned None")
        return Opt.of_optional(result)

    # ------------------------------------------------------------------
    # Extraction and fallbacks
    # ------------------------------------------------------------------

    def or_null(self) -> Optional[T]:
        return self._value

    def or_else(self, *others: Optional[T]) -> Optional[T]:
        """The value, else the first non-None of ``others``, else None."""
        if self._value is not None:
            return self._value
        for other in others:
            if other is not None:
                return other
        return None

    def or_else_get(self, *producers: Callable[[], Optional[T]]) -> Optional[T]:
        """The value, else the first non-None producer result.

        Producers are called lazily, in order, each at most once, and
        stop at the first non-None result.
        """
        if self._value is not None:
            return self._value
        for producer in producers:
            result = producer()
            if result is not None:
                return result
        return None

    def or_wrap(self, other: Optional[T]) -> "Opt[T]":
        """self when present, else Opt.of(other)."""
        return self if self._value is not None else Opt.of(other)

    def or_wrap_get(self, producer: Callable[[], Optional[T]]) -> "Opt[T]":
        """self when present, else Opt.of(producer()); producer only called when empty."""
        require(callable(producer), "or_wrap_get() needs a callable producer")
        return self if self._value is not None else Opt.of(producer())

    def or_use(self, other: "Opt[T]") -> "Opt[T]":
        """self when present, else ``other``."""
        require(isinstance(other, Opt), "or_use() needs an Opt")
        return self if self._value is not None else other

    def or_use_get(self, producer: Callable[[], "Opt[T]"]) -> "Opt[T]":
        """self when present, else the Opt returned by ``producer()``."""
        require(callable(producer), "or_use_get() needs a callable producer")
        if self._value is not None:
            return self
        result = producer()
        require(isinstance(result, Opt), f"or_use_get() producer returned {type(result).__name__}, expected Opt")
        return result

    def or_else_throw(self, failure_producer: Callable[[], BaseException]) -> T:
        """The value, else raise ``failure_producer()`` (only called when empty)."""
        if self._value is not None:
            return self._value
        raise failure_producer()

    def or_throw(self, failure_producer: Callable[[], BaseException]) -> "Opt[T]":
        """self when present, else raise ``failure_producer()``."""
        if self._value is not None:
            return self
        raise failure_producer()

    # ------------------------------------------------------------------
    # Equality and representation
    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, Opt):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return 0 if self._value is None else hash(self._value)

    def __repr__(self) -> str:
        return f"Opt[{self._value!r}]" if self._value is not None else "Opt.empty"

    def __reduce__(self):
        return (Opt.of, (self._value,))


Opt._EMPTY = Opt()
