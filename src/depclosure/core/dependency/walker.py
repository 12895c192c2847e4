"""Breadth-first closure walker.

Expands a root requirement set through registry lookups, feeding every
requirement it meets into a ``DependencyDictionary``. The walk stops at the
first conflict or missing record.

Traversal order is FIFO over the roots followed by each record's declared
dependency order, so the first failure reported is predictable from the
inputs. A visited set of (package, version, architecture) triples bounds
the walk by the number of distinct reachable builds, which makes cyclic
graphs terminate.
"""

from __future__ import annotations

import enum
import logging
from collections import deque
from collections.abc import Iterable
from typing import TYPE_CHECKING

from depclosure.core.dependency.dictionary import DependencyDictionary
from depclosure.core.dependency.models import DependencyRequirement
from depclosure.core.dependency.policy import PolicyLike, as_policy
from depclosure.exceptions import ConflictError, UnknownDependencyError

if TYPE_CHECKING:
    from depclosure.registry.base import BuildRegistry

logger = logging.getLogger(__name__)


class WalkState(enum.Enum):
    """Lifecycle of one walk."""

    PENDING = "pending"
    EXPANDING = "expanding"
    CONFLICT = "conflict"
    UNRESOLVABLE = "unresolvable"
    DONE = "done"


class ClosureWalker:
    """Walks the dependency closure of a root requirement set.

    Args:
        registry: Source of build records.
        policy: Compatibility policy for the dependency dictionary. Defaults
            to the strict single-version policy.
    """

    def __init__(
        self, registry: BuildRegistry, policy: PolicyLike | None = None
    ) -> None:
        self._registry = registry
        self._policy = as_policy(policy)
        self._state = WalkState.PENDING
        self._visited: set[tuple[str, str, str]] = set()

    @property
    def state(self) -> WalkState:
        """State reached by the most recent walk."""
        return self._state

    @property
    def expanded(self) -> frozenset[tuple[str, str, str]]:
        """Triples expanded through the registry by the most recent walk."""
        return frozenset(self._visited)

    def walk(
        self, roots: Iterable[DependencyRequirement]
    ) -> dict[str, frozenset[str]]:
        """Validate the closure of *roots*.

        Args:
            roots: Root requirements, processed in the given order.

        Returns:
            Snapshot of the dependency dictionary: package name to the set
            of versions required for it.

        Raises:
            ConflictError: On the first requirement the policy rejects.
            UnknownDependencyError: On the first requirement with no
                matching build record.
        """
        dictionary = DependencyDictionary(self._policy)
        visited: set[tuple[str, str, str]] = set()
        worklist: deque[DependencyRequirement] = deque(roots)
        self._visited = visited
        self._state = WalkState.PENDING

        while worklist:
            self._state = WalkState.EXPANDING
            req = worklist.popleft()

            try:
                dictionary.insert(req.package_name, req.version)
            except ConflictError as exc:
                self._state = WalkState.CONFLICT
                logger.debug(
                    "Conflict on %s: %s", exc.package_name, sorted(exc.versions)
                )
                raise

            if req.key in visited:
                self._state = WalkState.PENDING
                continue
            visited.add(req.key)

            try:
                deps = self._registry.lookup(
                    req.package_name, req.version, req.architecture
                )
            except UnknownDependencyError:
                self._state = WalkState.UNRESOLVABLE
                logger.debug("No build record for %s", req)
                raise

            logger.debug("Expanded %s -> %d dependencies", req, len(deps))
            worklist.extend(deps)
            self._state = WalkState.PENDING

        self._state = WalkState.DONE
        logger.debug(
            "Closure complete: %d packages, %d builds expanded",
            len(dictionary), len(visited),
        )
        return dictionary.snapshot()
