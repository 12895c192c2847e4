"""Build plan --- the serialized result of a validated closure.

A build plan pins every package of a validated closure to its version, in a
form a build orchestrator can consume. Serialization is deterministic:
packages and keys are sorted, so the same closure always produces
byte-identical JSON.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from depclosure import __version__
from depclosure.core.dependency.models import DependencyRequirement


@dataclass
class BuildPlan:
    """Pinned package versions of a validated closure.

    Attributes:
        roots: The root requirements that were validated, in caller order.
        packages: Package name -> pinned version.
    """

    PLAN_VERSION = "1.0"

    roots: list[DependencyRequirement] = field(default_factory=list)
    packages: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_closure(
        cls,
        roots: list[DependencyRequirement],
        closure: dict[str, frozenset[str]],
    ) -> BuildPlan:
        """Build a plan from a ``resolve`` result.

        Raises:
            ValueError: If a package is not pinned to exactly one version.
        """
        packages: dict[str, str] = {}
        for name, versions in closure.items():
            if len(versions) != 1:
                raise ValueError(
                    f"Cannot plan {name}: {len(versions)} versions in closure"
                )
            (packages[name],) = versions
        return cls(roots=list(roots), packages=packages)

    def to_dict(self) -> dict[str, Any]:
        return {
            "plan_version": self.PLAN_VERSION,
            "generated_by": f"depclosure {__version__}",
            "roots": [str(r) for r in self.roots],
            "packages": dict(sorted(self.packages.items())),
        }

    def to_json(self, indent: int = 2) -> str:
        """Deterministic JSON rendering of the plan."""
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    def write(self, path: Path) -> None:
        """Write the plan as JSON, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json() + "\n", encoding="utf-8")
