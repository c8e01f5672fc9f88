"""Precomputed reverse lookup from a derived key to an enum variant.

    class Status(Enum):
        ACTIVE = 1
        CLOSED = 2

    by_code = build_index(Status, lambda s: s.value)
    by_code.lookup(1)                       # Status.ACTIVE
    by_code.lookup(9, Status.CLOSED)        # Status.CLOSED
    by_code.lookup_or_raise(9, lambda: KeyError(9))
"""

from types import MappingProxyType
from typing import Callable, Generic, Hashable, Iterable, Iterator, Optional, TypeVar, overload

from codesafe.contracts import EnumIndexCollision, require

__all__ = ['EnumIndex', 'build_index']

K = TypeVar("K", bound=Hashable)
E = TypeVar("E")


class EnumIndex(Generic[K, E]):
    """Immutable key -> variant mapping.

    Built once by build_index(); queries never mutate it. A None key
    never matches.
    """

    __slots__ = ("_index",)

    def __init__(self, mapping: dict):
        self._index = MappingProxyType(dict(mapping))

    @overload
    def lookup(self, key: Optional[K]) -> Optional[E]: ...

    @overload
    def lookup(self, key: Optional[K], default: E) -> E: ...

    def lookup(self, key, default=None):
        """Return the variant for ``key``, or ``default`` (None if not given).

        None and unhashable keys never match.
        """
        if key is None:
            return default
        try:
            return self._index.get(key, default)
        except TypeError:
            return default

    def lookup_or_raise(self, key: Optional[K], failure_producer: Callable[[], BaseException]) -> E:
        """Return the variant for ``key`` or raise ``failure_producer()``.

        The producer is only called on a miss.
        """
        variant = self.lookup(key)
        if variant is None:
            raise failure_producer()
        return variant

    def keys(self) -> Iterator[K]:
        return iter(self._index)

    def __contains__(self, key) -> bool:
        return self.lookup(key) is not None

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"EnumIndex({dict(self._index)!r})"


def build_index(variants: Iterable[E], key_fn: Callable[[E], K]) -> EnumIndex[K, E]:
    """Build an EnumIndex from the complete variant set.

    Parameters
    ----------
    variants : iterable
        Every variant, typically the Enum class itself.
    key_fn : callable
        Extracts the index key from a variant. Keys must be pairwise
        distinct and hashable.

    Returns
    -------
    EnumIndex

    Raises
    ------
    EnumIndexCollision
        If two variants produce equal keys. Names both variants.
    """
    require(callable(key_fn), "build_index() key_fn must be callable")
    mapping = {}
    for variant in variants:
        key = key_fn(variant)
        if key in mapping:
            raise EnumIndexCollision(mapping[key], variant, key)
        mapping[key] = variant
    return EnumIndex(mapping)
