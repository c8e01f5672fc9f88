"""Injected text-to-object parser capability.

codesafe does not ship a serialization format of its own. Object and
list parsing (``parse_object`` / ``parse_list``) delegate to two
functions registered here once, at startup:

    from codesafe.util.parsers import get_parser_registry, pydantic_parsers

    get_parser_registry().install(*pydantic_parsers())

Each parser may be assigned exactly once per registry; a second
assignment raises ParserAlreadyConfigured. Using a parser that was never
assigned raises ParserNotConfigured. Both are contract violations and
are never routed through an exception policy.
"""

import logging
import threading
from typing import Any, Callable, Optional

from pydantic import TypeAdapter

from codesafe.contracts import ParserAlreadyConfigured, ParserNotConfigured, require

__all__ = [
    'ObjectParser',
    'ListParser',
    'ParserRegistry',
    'get_parser_registry',
    'pydantic_parsers',
]

logger = logging.getLogger(__name__)

ObjectParser = Callable[[str, type], Any]
ListParser = Callable[[str, type], list]


class ParserRegistry:
    """Set-once holder for the object and list parsers.

    clear() is the explicit teardown; after it both parsers may be
    assigned again.
    """

    def __init__(self, object_parser: Optional[ObjectParser] = None,
                 list_parser: Optional[ListParser] = None):
        self._lock = threading.Lock()
        self._object_parser: Optional[ObjectParser] = None
        self._list_parser: Optional[ListParser] = None
        if object_parser is not None:
            self.set_object_parser(object_parser)
        if list_parser is not None:
            self.set_list_parser(list_parser)

    def set_object_parser(self, parser: ObjectParser) -> None:
        require(callable(parser), "Object parser must be callable")
        with self._lock:
            if self._object_parser is not None:
                raise ParserAlreadyConfigured("Object parser can only be set once")
            self._object_parser = parser
        logger.debug(f"Object parser set: {parser!r}")

    def set_list_parser(self, parser: ListParser) -> None:
        require(callable(parser), "List parser must be callable")
        with self._lock:
            if self._list_parser is not None:
                raise ParserAlreadyConfigured("List parser can only be set once")
            self._list_parser = parser
        logger.debug(f"List parser set: {parser!r}")

    def install(self, object_parser: ObjectParser, list_parser: ListParser) -> None:
        """Set both parsers."""
        self.set_object_parser(object_parser)
        self.set_list_parser(list_parser)

    @property
    def object_parser(self) -> ObjectParser:
        parser = self._object_parser
        if parser is None:
            raise ParserNotConfigured("Object parser has not been set")
        return parser

    @property
    def list_parser(self) -> ListParser:
        parser = self._list_parser
        if parser is None:
            raise ParserNotConfigured("List parser has not been set")
        return parser

    @property
    def configured(self) -> bool:
        return self._object_parser is not None and self._list_parser is not None

    def clear(self) -> None:
        """Teardown: forget both parsers."""
        with self._lock:
            self._object_parser = None
            self._list_parser = None
        logger.debug("Parsers cleared")


def pydantic_parsers() -> tuple[ObjectParser, ListParser]:
    """JSON parsers backed by pydantic TypeAdapter.

    Works for pydantic models, dataclasses, TypedDicts and builtin types.
    """
    def parse_object(text: str, cls: type) -> Any:
        return TypeAdapter(cls).validate_json(text)

    def parse_list(text: str, cls: type) -> list:
        return TypeAdapter(list[cls]).validate_json(text)

    return parse_object, parse_list


_REGISTRY = ParserRegistry()


def get_parser_registry() -> ParserRegistry:
    """Process-wide parser registry."""
    return _REGISTRY
