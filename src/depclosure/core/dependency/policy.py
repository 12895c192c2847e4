"""Version compatibility policies.

A policy decides whether the set of versions requested for a single package
name across a closure is jointly acceptable. The dependency dictionary asks
the policy once per insertion, before committing it.

Only the strict single-version policy ships here. Range-aware policies can
be layered on by implementing ``CompatibilityPolicy`` (or by passing a plain
predicate) without touching the closure walker.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Union


class CompatibilityPolicy(ABC):
    """Predicate over the versions requested for one package name."""

    @abstractmethod
    def is_compatible(self, requested_versions: frozenset[str]) -> bool:
        """Return True if *requested_versions* may coexist in one closure.

        Must be pure: no side effects, same answer for the same set.
        """


class StrictSingleVersionPolicy(CompatibilityPolicy):
    """Accept at most one distinct version per package name."""

    def is_compatible(self, requested_versions: frozenset[str]) -> bool:
        return len(requested_versions) <= 1

    def __repr__(self) -> str:
        return "StrictSingleVersionPolicy()"


class CallablePolicy(CompatibilityPolicy):
    """Adapt a plain ``frozenset -> bool`` predicate to the policy interface."""

    def __init__(self, predicate: Callable[[frozenset[str]], bool]) -> None:
        self._predicate = predicate

    def is_compatible(self, requested_versions: frozenset[str]) -> bool:
        return bool(self._predicate(requested_versions))

    def __repr__(self) -> str:
        return f"CallablePolicy({self._predicate!r})"


DEFAULT_POLICY: CompatibilityPolicy = StrictSingleVersionPolicy()

PolicyLike = Union[CompatibilityPolicy, Callable[[frozenset[str]], bool]]


def as_policy(policy: PolicyLike | None) -> CompatibilityPolicy:
    """Normalise *policy* to a ``CompatibilityPolicy``.

    ``None`` selects ``DEFAULT_POLICY``; a bare callable is wrapped.

    Raises:
        TypeError: If *policy* is neither a policy nor callable.
    """
    if policy is None:
        return DEFAULT_POLICY
    if isinstance(policy, CompatibilityPolicy):
        return policy
    if callable(policy):
        return CallablePolicy(policy)
    raise TypeError(f"Not a compatibility policy: {policy!r}")
