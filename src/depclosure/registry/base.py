"""Base class for build registries.

A registry answers one question for the resolution core: which direct
dependencies does the published build (package, version, architecture)
declare? Concrete registries only need to list the records published for a
package/version; the architecture matching rules live here so every
backend applies them identically.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from depclosure.core.dependency.models import (
    WILDCARD_ARCHITECTURE,
    BuildRecord,
    DependencyRequirement,
)
from depclosure.exceptions import UnknownDependencyError

logger = logging.getLogger(__name__)


def select_record(
    records: list[BuildRecord], architecture: str
) -> BuildRecord | None:
    """Pick the record serving *architecture*.

    An exact architecture match wins over the wildcard record; the two are
    never merged. A request for the wildcard itself only matches the
    wildcard record.

    Args:
        records: Records published for one package/version.
        architecture: Requested architecture tag.

    Returns:
        The matching record, or None.
    """
    wildcard: BuildRecord | None = None
    for record in records:
        if record.architecture == architecture:
            return record
        if record.is_wildcard and wildcard is None:
            wildcard = record
    return wildcard


class BuildRegistry(ABC):
    """Abstract read-only source of build records.

    Subclasses implement ``find_records``. Implementations used from
    several resolution runs at once must be safe for concurrent reads.
    Registries are context managers; leaving the block calls ``close``.
    """

    @property
    @abstractmethod
    def registry_name(self) -> str:
        """Human-readable name of this registry."""

    @abstractmethod
    def find_records(self, package_name: str, version: str) -> list[BuildRecord]:
        """Return every record published for *package_name* at *version*.

        Returns:
            Records for any architecture, possibly empty.
        """

    def lookup(
        self, package_name: str, version: str, architecture: str
    ) -> tuple[DependencyRequirement, ...]:
        """Return the declared dependencies of one build, in declared order.

        Raises:
            UnknownDependencyError: No record matches the architecture or
                the wildcard.
        """
        record = select_record(self.find_records(package_name, version), architecture)
        if record is None:
            raise UnknownDependencyError(package_name, version, architecture)
        if record.architecture != architecture and architecture != WILDCARD_ARCHITECTURE:
            logger.debug(
                "Using wildcard build of %s@%s for %s",
                package_name, version, architecture,
            )
        return record.dependencies

    def close(self) -> None:
        """Release any resources held by the registry. No-op by default."""

    def __enter__(self) -> BuildRegistry:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
