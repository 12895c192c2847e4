"""Shared fixtures for depclosure tests."""

from __future__ import annotations

import pytest

from depclosure.core.dependency import BuildRecord, DependencyRequirement
from depclosure.registry import InMemoryRegistry


def build(
    name: str,
    version: str,
    deps: list[str] | None = None,
    architecture: str = "all",
) -> BuildRecord:
    """Convenience factory: ``build("A", "1.0.0", ["B@1.0.0"])``."""
    return BuildRecord(
        package_name=name,
        version=version,
        architecture=architecture,
        dependencies=tuple(DependencyRequirement.parse(d) for d in (deps or [])),
    )


@pytest.fixture
def make_build():
    """Expose the ``build`` factory to tests."""
    return build


@pytest.fixture
def conflict_registry() -> InMemoryRegistry:
    """A@1.0.0 -> B@1.0.0 while C@1.0.0 -> B@2.0.0."""
    return InMemoryRegistry([
        build("A", "1.0.0", ["B@1.0.0"]),
        build("C", "1.0.0", ["B@2.0.0"]),
        build("B", "1.0.0"),
        build("B", "2.0.0"),
    ])


@pytest.fixture
def cyclic_registry() -> InMemoryRegistry:
    """A@1.0.0 -> B@1.0.0 -> A@1.0.0."""
    return InMemoryRegistry([
        build("A", "1.0.0", ["B@1.0.0"]),
        build("B", "1.0.0", ["A@1.0.0"]),
    ])
