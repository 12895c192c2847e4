"""Requirement and build-record types for dependency closures.

A *requirement* says "the closure needs package P at exactly version V for
architecture A". A *build record* is the registry's description of one
published (P, V, A) build together with its direct requirements.

Versions are opaque strings compared for equality only. Architectures are
strings drawn from the registry's tag space plus the wildcard ``"all"``,
which marks a build usable on every architecture.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

WILDCARD_ARCHITECTURE: str = "all"

# "name@version" or "name@version:arch"
_REQUIREMENT_RE = re.compile(
    r"^\s*(?P<name>[^@\s:]+)@(?P<version>[^@\s:]+)(?::(?P<arch>[^@\s:]+))?\s*$"
)


# ---------------------------------------------------------------------------
# DependencyRequirement: an edge target in the closure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DependencyRequirement:
    """An exact package/version/architecture requirement.

    Attributes:
        package_name: Name of the required package.
        version: Exact version identifier of the required build.
        architecture: Architecture tag, or ``"all"`` for any architecture.
    """

    package_name: str
    version: str
    architecture: str = WILDCARD_ARCHITECTURE

    @property
    def key(self) -> tuple[str, str, str]:
        """The (package, version, architecture) triple identifying the node."""
        return (self.package_name, self.version, self.architecture)

    @classmethod
    def parse(
        cls, text: str, default_architecture: str = WILDCARD_ARCHITECTURE
    ) -> DependencyRequirement:
        """Parse ``name@version`` or ``name@version:arch``.

        Args:
            text: The requirement string.
            default_architecture: Architecture used when *text* names none.

        Returns:
            The parsed requirement.

        Raises:
            ValueError: If *text* is not in one of the accepted forms.
        """
        m = _REQUIREMENT_RE.match(text)
        if not m:
            raise ValueError(
                f"Invalid requirement {text!r}; expected name@version[:arch]"
            )
        return cls(
            package_name=m.group("name"),
            version=m.group("version"),
            architecture=m.group("arch") or default_architecture,
        )

    def __str__(self) -> str:
        if self.architecture == WILDCARD_ARCHITECTURE:
            return f"{self.package_name}@{self.version}"
        return f"{self.package_name}@{self.version}:{self.architecture}"


# ---------------------------------------------------------------------------
# BuildRecord: a registry entry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BuildRecord:
    """One published build and its declared direct dependencies.

    Owned by the registry. The resolution core only reads records; the
    dependency order is preserved because it drives traversal order.
    """

    package_name: str
    version: str
    architecture: str = WILDCARD_ARCHITECTURE
    dependencies: tuple[DependencyRequirement, ...] = field(default_factory=tuple)

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.package_name, self.version, self.architecture)

    @property
    def is_wildcard(self) -> bool:
        """True if this build applies to every architecture."""
        return self.architecture == WILDCARD_ARCHITECTURE
