"""Tests for SafeOperator execution, coalescing and iteration."""

import logging
from decimal import Decimal

import pytest

from codesafe.contracts import ContractViolation, UnhandledFailure
from codesafe.enums import ValueKind
from codesafe.policy import absorb, absorb_all, translate
from codesafe.safe import SafeOperator

pytestmark = pytest.mark.unit


def fail(exc):
    def producer(*args):
        raise exc
    return producer


class TestExecuteAndGet:
    """The recovered / fatal outcomes."""

    def test_success_returns_value(self, make_operator):
        op = make_operator()
        assert op.get(lambda: 42) == 42

    def test_success_never_consults_handlers(self, make_operator, counter):
        handler = counter(echo=True)
        op = make_operator(handler)

        op.execute(lambda: None)
        op.get(lambda: 1)

        assert handler.calls == 0

    def test_unconfigured_scope_reraises(self, make_operator):
        """An empty policy makes every failure fatal, chained from the original."""
        op = make_operator()
        original = ValueError("boom")

        with pytest.raises(UnhandledFailure) as excinfo:
            op.get(fail(original))

        assert excinfo.value.failure is original
        assert excinfo.value.__cause__ is original
        assert excinfo.value.scope == op.scope.name
        assert str(excinfo.value) == "boom"

    def test_absorbed_failure_returns_none(self, make_operator):
        op = make_operator(absorb_all)

        assert op.get(fail(ValueError())) is None
        assert op.execute(fail(ValueError())) is None

    def test_translated_failure_is_reraised(self, make_operator):
        """The re-raised failure is the resolved one, not the original."""
        op = make_operator(translate(KeyError, lambda e: LookupError("mapped")))

        with pytest.raises(UnhandledFailure) as excinfo:
            op.execute(fail(KeyError("k")))

        assert isinstance(excinfo.value.failure, LookupError)
        assert isinstance(excinfo.value.failure.__cause__, KeyError)

    def test_selective_absorption(self, make_operator):
        op = make_operator(absorb(KeyError))

        assert op.get(fail(KeyError())) is None
        with pytest.raises(UnhandledFailure):
            op.get(fail(ValueError()))

    def test_contract_violation_bypasses_policy(self, make_operator, counter):
        """Contract violations inside a callable are never handled."""
        handler = counter()
        op = make_operator(handler)

        with pytest.raises(ContractViolation, match="misuse"):
            op.get(fail(ContractViolation("misuse")))

        assert handler.calls == 0

    def test_base_exceptions_are_not_caught(self, make_operator):
        op = make_operator(absorb_all)
        with pytest.raises(KeyboardInterrupt):
            op.execute(fail(KeyboardInterrupt()))

    def test_handlers_appended_later_are_honored(self, registry, make_scope):
        """The policy is looked up on each failure, not at construction."""
        scope = make_scope()
        op = SafeOperator(scope, registry)

        with pytest.raises(UnhandledFailure):
            op.get(fail(ValueError()))

        registry.append_handlers(scope, absorb_all)
        assert op.get(fail(ValueError())) is None

    def test_non_callable_is_contract_violation(self, make_operator):
        op = make_operator()
        with pytest.raises(ContractViolation):
            op.get(42)

    def test_handle_logs_outcome(self, make_operator, caplog):
        op = make_operator(absorb(KeyError))

        with caplog.at_level(logging.DEBUG, logger="codesafe.safe.operator"):
            op.handle(KeyError("k"))
            with pytest.raises(UnhandledFailure):
                op.handle(ValueError("v"))

        levels = [r.levelno for r in caplog.records if r.name == "codesafe.safe.operator"]
        assert levels == [logging.DEBUG, logging.WARNING]


class TestAdapters:

    def test_into_producer(self, make_operator):
        op = make_operator(absorb_all)
        produce = op.into_producer(fail(ValueError()))

        assert produce() is None
        assert op.into_producer(lambda: "ok")() == "ok"

    def test_into_effect_defers_execution(self, make_operator, counter):
        effect = counter()
        run = make_operator().into_effect(effect)

        assert effect.calls == 0
        run()
        assert effect.calls == 1

    def test_into_function(self, make_operator):
        op = make_operator(absorb(ZeroDivisionError))
        invert = op.into_function(lambda x: 1 / x)

        assert invert(4) == 0.25
        assert invert(0) is None

    def test_into_function_reraises_unabsorbed(self, make_operator):
        apply = make_operator().into_function(fail(OSError("io")))
        with pytest.raises(UnhandledFailure):
            apply(1)


class TestCoalescing:

    @pytest.mark.parametrize("method, zero", [
        ("get_bool", False),
        ("get_str", ""),
        ("get_int", 0),
        ("get_float", 0.0),
        ("get_decimal", Decimal(0)),
        ("get_list", []),
        ("get_set", set()),
        ("get_dict", {}),
    ])
    def test_absorbed_failure_gives_zero(self, make_operator, method, zero):
        op = make_operator(absorb_all)

        assert getattr(op, method)(fail(ValueError())) == zero
        assert getattr(op, method)(lambda: None) == zero

    def test_present_value_is_kept(self, make_operator):
        op = make_operator()
        assert op.get_int(lambda: 7) == 7
        assert op.get_list(lambda: [1]) == [1]

    def test_get_typed_reraises_when_unabsorbed(self, make_operator):
        with pytest.raises(UnhandledFailure):
            make_operator().get_int(fail(ValueError()))

    def test_ensure(self, make_operator):
        op = make_operator()
        assert op.ensure(None, ValueKind.STRING) == ""
        assert op.ensure("x", ValueKind.STRING) == "x"
        with pytest.raises(ContractViolation):
            op.ensure(None, ValueKind.OBJECT)


class Record:
    def __init__(self, ok):
        self.ok = ok

    def valid(self):
        return self.ok


class TestStreams:

    def test_stream_of_none_is_empty(self, make_operator):
        assert list(make_operator().stream(None)) == []

    def test_stream_drops_none_items(self, make_operator):
        assert list(make_operator().stream([1, None, 2])) == [1, 2]

    def test_stream_of_mapping_yields_items(self, make_operator):
        assert list(make_operator().stream({"a": 1})) == [("a", 1)]

    def test_valid_stream_filters_invalid(self, make_operator):
        good = Record(True)
        items = [good, Record(False), None]

        assert list(make_operator().valid_stream(items)) == [good]


def test_repr_and_policy(make_operator):
    op = make_operator(absorb_all, label="repr")
    assert "repr" in repr(op)
    assert len(op.policy) == 1
