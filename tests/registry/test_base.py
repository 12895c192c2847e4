"""Tests for BuildRegistry lookup rules and InMemoryRegistry."""

from __future__ import annotations

import pytest

from depclosure.core.dependency import BuildRecord, DependencyRequirement
from depclosure.exceptions import UnknownDependencyError
from depclosure.registry import BuildRegistry, InMemoryRegistry, select_record


@pytest.fixture
def dual_registry(make_build) -> InMemoryRegistry:
    """A@1.0.0 published both for ``all`` and for ``linux-x64``."""
    return InMemoryRegistry([
        make_build("A", "1.0.0", ["generic@1.0.0"]),
        make_build("A", "1.0.0", ["native@1.0.0"], architecture="linux-x64"),
    ])


class TestSelectRecord:
    """Architecture matching."""

    def test_no_records(self) -> None:
        assert select_record([], "linux-x64") is None

    def test_exact_beats_wildcard_regardless_of_order(self) -> None:
        wildcard = BuildRecord("A", "1")
        exact = BuildRecord("A", "1", "linux-x64")
        assert select_record([wildcard, exact], "linux-x64") is exact
        assert select_record([exact, wildcard], "linux-x64") is exact

    def test_wildcard_fallback(self) -> None:
        wildcard = BuildRecord("A", "1")
        other = BuildRecord("A", "1", "arm64")
        assert select_record([other, wildcard], "linux-x64") is wildcard

    def test_other_architecture_does_not_match(self) -> None:
        assert select_record([BuildRecord("A", "1", "arm64")], "linux-x64") is None

    def test_wildcard_request_only_matches_wildcard(self) -> None:
        assert select_record([BuildRecord("A", "1", "arm64")], "all") is None


class TestLookup:
    """``BuildRegistry.lookup`` over an in-memory registry."""

    def test_architecture_precedence(self, dual_registry: InMemoryRegistry) -> None:
        deps = dual_registry.lookup("A", "1.0.0", "linux-x64")
        assert deps == (DependencyRequirement("native", "1.0.0"),)

    def test_records_never_merged(self, dual_registry: InMemoryRegistry) -> None:
        deps = dual_registry.lookup("A", "1.0.0", "linux-x64")
        assert DependencyRequirement("generic", "1.0.0") not in deps

    def test_wildcard_request(self, dual_registry: InMemoryRegistry) -> None:
        deps = dual_registry.lookup("A", "1.0.0", "all")
        assert deps == (DependencyRequirement("generic", "1.0.0"),)

    def test_fallback_for_unlisted_architecture(
        self, dual_registry: InMemoryRegistry
    ) -> None:
        deps = dual_registry.lookup("A", "1.0.0", "arm64")
        assert deps == (DependencyRequirement("generic", "1.0.0"),)

    def test_unknown_version(self, dual_registry: InMemoryRegistry) -> None:
        with pytest.raises(UnknownDependencyError) as excinfo:
            dual_registry.lookup("A", "2.0.0", "linux-x64")
        assert excinfo.value.version == "2.0.0"
        assert excinfo.value.architecture == "linux-x64"

    def test_abstract_registry_cannot_be_instantiated(self) -> None:
        with pytest.raises(TypeError):
            BuildRegistry()  # type: ignore[abstract]


class TestInMemoryRegistry:
    """Record management."""

    def test_empty(self) -> None:
        registry = InMemoryRegistry()
        assert registry.record_count == 0
        assert registry.find_records("A", "1") == []
        assert registry.registry_name == "in-memory"

    def test_add_record_replaces_same_triple(self, make_build) -> None:
        registry = InMemoryRegistry([make_build("A", "1", ["B@1"])])
        registry.add_record(make_build("A", "1", ["C@1"]))
        assert registry.record_count == 1
        assert registry.lookup("A", "1", "all") == (DependencyRequirement("C", "1"),)

    def test_records_sorted(self, make_build) -> None:
        registry = InMemoryRegistry([
            make_build("b", "1"),
            make_build("a", "2"),
            make_build("a", "1", architecture="linux-x64"),
            make_build("a", "1"),
        ])
        assert [r.key for r in registry.records()] == [
            ("a", "1", "all"),
            ("a", "1", "linux-x64"),
            ("a", "2", "all"),
            ("b", "1", "all"),
        ]

    def test_find_records_returns_copy(self, make_build) -> None:
        registry = InMemoryRegistry([make_build("A", "1")])
        registry.find_records("A", "1").clear()
        assert registry.record_count == 1

    def test_context_manager_returns_registry(self, make_build) -> None:
        registry = InMemoryRegistry([make_build("A", "1")])
        with registry as opened:
            assert opened is registry
        assert registry.lookup("A", "1", "all") == ()
