"""Tests for scope tokens and the policy registry."""

import threading

import pytest
from pydantic import ValidationError

import codesafe.policy.registry as registry_module
from codesafe.contracts import ContractViolation
from codesafe.policy import PolicyRegistry, Scope, get_policy_registry

pytestmark = pytest.mark.unit


class Owner:
    pass


class TestScope:
    """Scope.of() and scope identity."""

    def test_string_scope(self):
        assert Scope.of("billing") == Scope(name="billing")

    def test_class_scope_uses_qualified_name(self):
        assert Scope.of(Owner).name == f"{__name__}.Owner"

    def test_module_scope_uses_module_name(self):
        assert Scope.of(registry_module).name == "codesafe.policy.registry"

    def test_scope_passes_through(self):
        scope = Scope(name="x")
        assert Scope.of(scope) is scope

    def test_scopes_are_hashable_and_frozen(self):
        """Equal scopes hash equally and cannot be mutated."""
        assert len({Scope.of("a"), Scope(name="a")}) == 1
        with pytest.raises(ValidationError):
            Scope(name="a").name = "b"

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Scope(name="")

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_string_owner_is_contract_violation(self, name):
        with pytest.raises(ContractViolation, match="must not be blank"):
            Scope.of(name)

    def test_unsupported_owner_rejected(self):
        with pytest.raises(TypeError, match="Cannot derive a scope"):
            Scope.of(42)


class TestPolicyRegistry:
    """for_scope() get-or-create and appends."""

    def test_for_scope_returns_same_instance(self, registry):
        """Repeated lookups return the identical policy."""
        assert registry.for_scope("a") is registry.for_scope("a")

    def test_equal_scope_forms_share_policy(self, registry):
        """A string and the equivalent Scope resolve to one policy."""
        assert registry.for_scope("a") is registry.for_scope(Scope(name="a"))
        assert registry.for_scope(Owner) is registry.for_scope(f"{__name__}.Owner")

    def test_distinct_scopes_get_distinct_policies(self, registry):
        assert registry.for_scope("a") is not registry.for_scope("b")

    def test_new_policy_is_empty(self, registry):
        """A freshly created policy passes failures through."""
        failure = ValueError("x")
        assert registry.for_scope("fresh").resolve(failure) is failure

    def test_append_handlers_in_call_order(self, registry):
        """Handlers from successive calls run after earlier ones."""
        order = []
        registry.append_handlers("s", lambda f: order.append("a") or f)
        registry.append_handlers("s", lambda f: order.append("b") or f, lambda f: order.append("c") or f)

        registry.for_scope("s").resolve(ValueError())

        assert order == ["a", "b", "c"]

    def test_new_with_handlers_returns_policy(self, registry):
        policy = registry.new_with_handlers("s", [lambda f: None])

        assert policy is registry.for_scope("s")
        assert len(policy) == 1

    def test_scopes_contains_and_len(self, registry):
        registry.for_scope("b")
        registry.for_scope("a")

        assert [s.name for s in registry.scopes()] == ["a", "b"]
        assert "a" in registry
        assert "zzz" not in registry
        assert len(registry) == 2

    def test_process_registry_is_a_singleton(self):
        assert get_policy_registry() is get_policy_registry()
        assert isinstance(get_policy_registry(), PolicyRegistry)


@pytest.mark.concurrency
class TestRegistryConcurrency:
    """Concurrent first access and concurrent appends."""

    N_THREADS = 32

    def test_concurrent_for_scope_creates_one_policy(self, registry):
        """N racing first lookups all observe the same policy."""
        barrier = threading.Barrier(self.N_THREADS)
        results = []
        lock = threading.Lock()

        def worker():
            barrier.wait()
            policy = registry.for_scope("raced")
            with lock:
                results.append(policy)

        threads = [threading.Thread(target=worker) for _ in range(self.N_THREADS)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == self.N_THREADS
        assert len({id(p) for p in results}) == 1
        assert len(registry) == 1

    def test_concurrent_appends_are_not_lost(self, registry):
        """Every handler appended from every thread ends up in the chain."""
        barrier = threading.Barrier(self.N_THREADS)

        def worker():
            barrier.wait()
            registry.append_handlers("appended", lambda f: f)

        threads = [threading.Thread(target=worker) for _ in range(self.N_THREADS)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry.for_scope("appended")) == self.N_THREADS
