"""In-memory build registry, for fixtures and embedding."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from depclosure.core.dependency.models import BuildRecord
from depclosure.registry.base import BuildRegistry


class InMemoryRegistry(BuildRegistry):
    """Registry backed by a dict of records.

    Reads are safe from concurrent resolution runs once the registry is
    populated; ``add_record`` is not synchronised.

    Args:
        records: Initial records. Later records replace earlier ones with
            the same (package, version, architecture).
        name: Name reported by ``registry_name``.
    """

    def __init__(
        self, records: Iterable[BuildRecord] = (), name: str = "in-memory"
    ) -> None:
        self._name = name
        self._records: dict[tuple[str, str], dict[str, BuildRecord]] = defaultdict(dict)
        for record in records:
            self.add_record(record)

    @property
    def registry_name(self) -> str:
        return self._name

    @property
    def record_count(self) -> int:
        """Total number of records across all packages."""
        return sum(len(by_arch) for by_arch in self._records.values())

    def add_record(self, record: BuildRecord) -> None:
        """Publish *record*, replacing any record with the same triple."""
        self._records[(record.package_name, record.version)][record.architecture] = record

    def find_records(self, package_name: str, version: str) -> list[BuildRecord]:
        by_arch = self._records.get((package_name, version))
        return list(by_arch.values()) if by_arch else []

    def records(self) -> list[BuildRecord]:
        """All records, sorted by (package, version, architecture)."""
        return sorted(
            (r for by_arch in self._records.values() for r in by_arch.values()),
            key=lambda r: r.key,
        )
