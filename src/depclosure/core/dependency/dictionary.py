"""Dependency dictionary: package name -> versions requested so far.

Every insertion is checked against a compatibility policy *before* it is
committed, so a rejected insertion never leaves a partially updated
dictionary behind.
"""

from __future__ import annotations

from collections.abc import Iterator

from depclosure.core.dependency.policy import PolicyLike, as_policy
from depclosure.exceptions import ConflictError


class DependencyDictionary:
    """Accumulator of requested versions keyed by package name.

    Under the default strict policy each package maps to at most one
    version at all times.

    Thread safety: instances belong to a single resolution run and are not
    shared, so no locking is done.
    """

    def __init__(self, policy: PolicyLike | None = None) -> None:
        self._policy = as_policy(policy)
        self._versions: dict[str, frozenset[str]] = {}

    def insert(self, package_name: str, version: str) -> DependencyDictionary:
        """Record that *package_name* is requested at *version*.

        The policy is consulted on every call, including a repeat of a
        version already recorded.

        Args:
            package_name: Package being required.
            version: Version being required.

        Returns:
            This dictionary, to allow chaining.

        Raises:
            ConflictError: If the policy rejects the resulting version set.
                The dictionary is left exactly as it was.
        """
        prospective = self._versions.get(package_name, frozenset()) | {version}
        if not self._policy.is_compatible(prospective):
            raise ConflictError(package_name, prospective)
        self._versions[package_name] = prospective
        return self

    def versions_of(self, package_name: str) -> frozenset[str]:
        """Return the versions requested for *package_name* (empty if none)."""
        return self._versions.get(package_name, frozenset())

    def snapshot(self) -> dict[str, frozenset[str]]:
        """Return a copy of the mapping, safe to hand to callers."""
        return dict(self._versions)

    def pinned(self) -> dict[str, str]:
        """Return the package -> version mapping of a single-version closure.

        Raises:
            ValueError: If some package holds more than one version, which
                only a permissive custom policy allows.
        """
        pinned: dict[str, str] = {}
        for name, versions in self._versions.items():
            if len(versions) != 1:
                raise ValueError(
                    f"{name} has {len(versions)} versions; cannot pin"
                )
            (pinned[name],) = versions
        return pinned

    def __contains__(self, package_name: object) -> bool:
        return package_name in self._versions

    def __len__(self) -> int:
        return len(self._versions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._versions)

    def __repr__(self) -> str:
        return f"DependencyDictionary({self._versions!r})"
