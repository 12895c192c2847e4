"""Resolution entry points for dependency-closure validation.

``resolve`` validates a candidate assignment: it never chooses versions, it
only checks that the exact versions requested across the whole closure are
mutually compatible and that every requested build is published.

Failures are reported as exceptions (``resolve``) or folded into a
``Resolution`` report (``DependencyResolver.validate``). Each call owns all
of its working state, so concurrent calls against a registry that is safe
for concurrent reads need no coordination.
"""

from __future__ import annotations

import concurrent.futures
import logging
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from depclosure.core.dependency.models import DependencyRequirement
from depclosure.core.dependency.policy import PolicyLike, as_policy
from depclosure.core.dependency.walker import ClosureWalker
from depclosure.exceptions import ResolutionError, ResolutionTimeoutError

if TYPE_CHECKING:
    from depclosure.registry.base import BuildRegistry

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Resolution: report form of a validation run
# ---------------------------------------------------------------------------


@dataclass
class Resolution:
    """Outcome of validating a root requirement set.

    Attributes:
        success: True if the closure is compatible and fully published.
        closure: Package name -> versions required. Empty on failure.
        installed: Package name -> version for every package pinned to a
            single version. Empty on failure.
        conflicts: Human-readable failure descriptions. Empty on success.
        error: The exception that stopped the run, if any.
    """

    success: bool
    closure: dict[str, frozenset[str]] = field(default_factory=dict)
    installed: dict[str, str] = field(default_factory=dict)
    conflicts: list[str] = field(default_factory=list)
    error: ResolutionError | None = None

    @classmethod
    def from_closure(cls, closure: dict[str, frozenset[str]]) -> Resolution:
        """Successful report for a validated closure."""
        installed = {
            name: next(iter(versions))
            for name, versions in closure.items()
            if len(versions) == 1
        }
        return cls(success=True, closure=dict(closure), installed=installed)

    @classmethod
    def from_error(cls, error: ResolutionError) -> Resolution:
        """Failed report carrying *error*."""
        return cls(success=False, conflicts=[str(error)], error=error)


# ---------------------------------------------------------------------------
# DependencyResolver
# ---------------------------------------------------------------------------


class DependencyResolver:
    """Validates dependency closures against a build registry.

    Args:
        registry: Registry that expands each build into its dependencies.
        policy: Compatibility policy, or a ``frozenset -> bool`` predicate.
            Defaults to one version per package name.
    """

    def __init__(
        self, registry: BuildRegistry, policy: PolicyLike | None = None
    ) -> None:
        self._registry = registry
        self._policy = as_policy(policy)

    def resolve(
        self, roots: Iterable[DependencyRequirement]
    ) -> dict[str, frozenset[str]]:
        """Walk the closure of *roots* and return the validated mapping.

        Raises:
            ConflictError: The policy rejected a package's version set.
            UnknownDependencyError: A requested build has no record.
        """
        return ClosureWalker(self._registry, self._policy).walk(roots)

    def validate(self, roots: Iterable[DependencyRequirement]) -> Resolution:
        """Like ``resolve`` but report failures instead of raising them.

        Only the two core failure kinds are captured; anything else
        (e.g. an unreachable registry) still propagates.
        """
        try:
            closure = self.resolve(roots)
        except ResolutionError as exc:
            logger.info("Closure rejected: %s", exc)
            return Resolution.from_error(exc)
        return Resolution.from_closure(closure)


# ---------------------------------------------------------------------------
# Functional API
# ---------------------------------------------------------------------------


def resolve(
    roots: Iterable[DependencyRequirement],
    registry: BuildRegistry,
    policy: PolicyLike | None = None,
) -> dict[str, frozenset[str]]:
    """Validate the dependency closure of *roots*.

    Args:
        roots: Root requirements in caller order.
        registry: Registry used to expand each build.
        policy: Optional compatibility policy.

    Returns:
        Package name -> set of required versions (one each under the
        default policy).

    Raises:
        ConflictError: The first incompatible version set met in BFS order.
        UnknownDependencyError: The first requirement with no build record.
    """
    return DependencyResolver(registry, policy).resolve(roots)


def is_dep_set_valid(
    roots: Iterable[DependencyRequirement],
    registry: BuildRegistry,
    policy: PolicyLike | None = None,
) -> bool:
    """Return True if the closure of *roots* validates."""
    return DependencyResolver(registry, policy).validate(roots).success


def resolve_within(
    timeout: float,
    roots: Sequence[DependencyRequirement],
    registry: BuildRegistry,
    policy: PolicyLike | None = None,
) -> dict[str, frozenset[str]]:
    """Run ``resolve`` under a deadline.

    The walk runs on a daemon thread. If it has not finished after
    *timeout* seconds the caller gets ``ResolutionTimeoutError``; the thread
    is abandoned, its result discarded, and it does not hold up interpreter
    exit.

    Raises:
        ResolutionTimeoutError: The deadline passed.
        ConflictError, UnknownDependencyError: As for ``resolve``.
    """
    roots = list(roots)
    future: concurrent.futures.Future[dict[str, frozenset[str]]] = (
        concurrent.futures.Future()
    )

    def run() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(resolve(roots, registry, policy))
        except BaseException as exc:
            future.set_exception(exc)

    worker = threading.Thread(target=run, name="depclosure-resolve", daemon=True)
    worker.start()
    try:
        return future.result(timeout=timeout)
    except concurrent.futures.TimeoutError:
        future.cancel()
        logger.warning("Resolution exceeded deadline of %ss", timeout)
        raise ResolutionTimeoutError(timeout) from None
