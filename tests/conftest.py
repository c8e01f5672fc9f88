"""Root-level pytest fixtures for the codesafe test suite.

The process-wide policy registry is never reset, so tests that configure
policies work on a fresh PolicyRegistry or on a scope name no other test
uses. Both are provided here.
"""

import itertools

import pytest

from codesafe.config import configure
from codesafe.policy import PolicyRegistry
from codesafe.safe import SafeOperator
from codesafe.util.parsers import ParserRegistry, pydantic_parsers

_scope_ids = itertools.count()


# =============================================================================
# Policy Fixtures
# =============================================================================

@pytest.fixture
def registry():
    """Fresh, empty policy registry."""
    return PolicyRegistry()


@pytest.fixture
def make_scope(request):
    """Factory for scope names unique across the whole test session.

    Examples
    --------
    >>> def test_something(make_scope):
    ...     scope = make_scope("billing")
    """
    def _make(label: str = "scope") -> str:
        return f"tests.{request.node.name}.{label}.{next(_scope_ids)}"
    return _make


@pytest.fixture
def make_operator(registry, make_scope):
    """Factory for a SafeOperator on the fresh registry with the given handlers."""
    def _make(*handlers, label: str = "scope") -> SafeOperator:
        scope = make_scope(label)
        registry.append_handlers(scope, *handlers)
        return SafeOperator(scope, registry)
    return _make


class Counter:
    """Callable that counts calls.

    Returns ``result``, or its first argument when ``echo`` is set (a
    pass-through handler).
    """

    def __init__(self, result=None, echo: bool = False):
        self.calls = 0
        self.result = result
        self.echo = echo

    def __call__(self, *args):
        self.calls += 1
        if self.echo:
            return args[0]
        return self.result


@pytest.fixture
def counter():
    return Counter


# =============================================================================
# Parser and Config Fixtures
# =============================================================================

@pytest.fixture
def parsers():
    """Parser registry with no parsers set."""
    return ParserRegistry()


@pytest.fixture
def json_parsers():
    """Parser registry with the pydantic JSON parsers installed."""
    return ParserRegistry(*pydantic_parsers())


@pytest.fixture
def restore_config():
    """Reset the active configuration to the expert defaults after the test."""
    yield
    configure()
