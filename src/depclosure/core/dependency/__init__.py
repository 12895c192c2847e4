"""Dependency-closure validation.

Given root requirements (package, exact version, architecture), walk the
transitive closure through a build registry and check that the versions
requested for every package are mutually compatible.

Components, leaves first:

- ``policy``: compatibility predicates over one package's version set.
- ``dictionary``: package -> versions accumulator with checked insertion.
- ``walker``: breadth-first traversal with a visited-set guard.
- ``resolver``: the ``resolve`` entry point and ``DependencyResolver``.

All public names are re-exported here, so
``from depclosure.core.dependency import resolve`` works.
"""

from depclosure.core.dependency.models import (
    WILDCARD_ARCHITECTURE,
    BuildRecord,
    DependencyRequirement,
)
from depclosure.core.dependency.policy import (
    DEFAULT_POLICY,
    CallablePolicy,
    CompatibilityPolicy,
    StrictSingleVersionPolicy,
)
from depclosure.core.dependency.dictionary import DependencyDictionary
from depclosure.core.dependency.walker import ClosureWalker, WalkState
from depclosure.core.dependency.resolver import (
    DependencyResolver,
    Resolution,
    is_dep_set_valid,
    resolve,
    resolve_within,
)

__all__ = [
    "WILDCARD_ARCHITECTURE",
    "BuildRecord",
    "DependencyRequirement",
    "DEFAULT_POLICY",
    "CallablePolicy",
    "CompatibilityPolicy",
    "StrictSingleVersionPolicy",
    "DependencyDictionary",
    "ClosureWalker",
    "WalkState",
    "DependencyResolver",
    "Resolution",
    "is_dep_set_valid",
    "resolve",
    "resolve_within",
]
