"""Tests for version compatibility policies."""

from __future__ import annotations

import pytest

from depclosure.core.dependency import (
    DEFAULT_POLICY,
    CallablePolicy,
    CompatibilityPolicy,
    StrictSingleVersionPolicy,
)
from depclosure.core.dependency.policy import as_policy


class TestStrictSingleVersionPolicy:
    """The default policy allows at most one version per package."""

    def test_empty_set_is_compatible(self) -> None:
        assert StrictSingleVersionPolicy().is_compatible(frozenset())

    def test_single_version_is_compatible(self) -> None:
        assert StrictSingleVersionPolicy().is_compatible(frozenset({"1.0.0"}))

    def test_two_versions_are_incompatible(self) -> None:
        assert not StrictSingleVersionPolicy().is_compatible(
            frozenset({"1.0.0", "2.0.0"})
        )

    def test_default_policy_is_strict(self) -> None:
        assert isinstance(DEFAULT_POLICY, StrictSingleVersionPolicy)


class TestAsPolicy:
    """Normalisation of policy arguments."""

    def test_none_selects_default(self) -> None:
        assert as_policy(None) is DEFAULT_POLICY

    def test_policy_instance_passes_through(self) -> None:
        policy = StrictSingleVersionPolicy()
        assert as_policy(policy) is policy

    def test_callable_is_wrapped(self) -> None:
        policy = as_policy(lambda versions: len(versions) <= 2)
        assert isinstance(policy, CallablePolicy)
        assert policy.is_compatible(frozenset({"1", "2"}))
        assert not policy.is_compatible(frozenset({"1", "2", "3"}))

    def test_non_callable_rejected(self) -> None:
        with pytest.raises(TypeError):
            as_policy(42)  # type: ignore[arg-type]

    def test_abstract_policy_cannot_be_instantiated(self) -> None:
        with pytest.raises(TypeError):
            CompatibilityPolicy()  # type: ignore[abstract]
