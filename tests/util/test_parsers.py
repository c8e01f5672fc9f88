"""Tests for the set-once parser capability."""

import pytest

from codesafe.contracts import ContractViolation, ParserAlreadyConfigured, ParserNotConfigured
from codesafe.util.parsers import ParserRegistry, get_parser_registry, pydantic_parsers

pytestmark = pytest.mark.unit


def object_parser(text, cls):
    return cls(text)


def list_parser(text, cls):
    return [cls(part) for part in text.split(",")]


class TestParserRegistry:

    def test_unset_parsers_raise(self, parsers):
        assert not parsers.configured
        with pytest.raises(ParserNotConfigured):
            parsers.object_parser
        with pytest.raises(ParserNotConfigured):
            parsers.list_parser

    def test_install_sets_both(self, parsers):
        parsers.install(object_parser, list_parser)

        assert parsers.configured
        assert parsers.object_parser("3", int) == 3
        assert parsers.list_parser("1,2", int) == [1, 2]

    def test_second_assignment_is_rejected(self, parsers):
        parsers.set_object_parser(object_parser)

        with pytest.raises(ParserAlreadyConfigured):
            parsers.set_object_parser(object_parser)
        assert parsers.object_parser is object_parser

    def test_clear_allows_reassignment(self, parsers):
        parsers.install(object_parser, list_parser)
        parsers.clear()

        assert not parsers.configured
        parsers.set_list_parser(list_parser)
        assert parsers.list_parser is list_parser

    def test_parser_must_be_callable(self, parsers):
        with pytest.raises(ContractViolation):
            parsers.set_list_parser("json")

    def test_process_registry_is_shared(self):
        assert get_parser_registry() is get_parser_registry()
        assert isinstance(get_parser_registry(), ParserRegistry)


def test_pydantic_parsers_validate_json():
    parse_object, parse_list = pydantic_parsers()

    assert parse_object('{"a": [1]}', dict) == {"a": [1]}
    assert parse_list("[1, 2]", int) == [1, 2]
    with pytest.raises(ValueError):
        parse_list('["x"]', int)
