"""Tests for Def default/tester pairs."""

from decimal import Decimal

import pytest

from codesafe.contracts import ContractViolation
from codesafe.values.defaults import Def

pytestmark = pytest.mark.unit

PORT = Def.of(8080, lambda p: 0 < p < 65536)


class TestDef:

    def test_accepted_value_is_returned(self):
        assert PORT.get(lambda: 443) == 443
        assert PORT.get_value(443) == 443

    def test_rejected_value_gives_default(self):
        assert PORT.get_value(70000) == 8080

    def test_failing_producer_gives_default(self):
        assert PORT.get(lambda: int("not a port")) == 8080

    def test_failing_tester_gives_default(self):
        """None fails the comparison inside the tester."""
        assert PORT.get_value(None) == 8080

    def test_check_or_none(self):
        assert PORT.check_or_none(lambda: 80) == 80
        assert PORT.check_or_none_value(0) is None
        assert PORT.check_or_none(lambda: 1 / 0) is None

    def test_tester_accepting_none(self):
        """A tester that accepts None returns None, not the default."""
        lenient = Def.of("x", lambda v: True)
        assert lenient.get_value(None) is None

    def test_filter_swaps_tester(self):
        even = PORT.filter(lambda p: p % 2 == 0)
        assert even.default_value == 8080
        assert even.get_value(81) == 8080
        assert even.get_value(82) == 82

    def test_default_tester_is_not_none(self):
        assert Def.STRING.get_value(None) == ""
        assert Def.STRING.get_value("") == ""
        assert Def.INTEGER.get_value(5) == 5

    def test_builtin_defaults(self):
        assert Def.BOOLEAN.default_value is False
        assert Def.FLOAT.default_value == 0.0
        assert Def.DECIMAL.default_value == Decimal(0)

    def test_tester_must_be_callable(self):
        with pytest.raises(ContractViolation):
            Def.of(1, "nope")
