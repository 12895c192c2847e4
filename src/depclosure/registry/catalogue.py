"""Conversion of catalogue entries (parsed JSON/YAML) into build records.

Shared by the file and HTTP registries. A build entry looks like::

    {"package": "A", "version": "1.0.0", "architecture": "all",
     "dependencies": ["B@2.0.0", {"package": "C", "version": "1.0.0",
                                   "architecture": "linux-x64"}]}

``architecture`` defaults to ``"all"``; ``dependencies`` defaults to empty.
"""

from __future__ import annotations

from typing import Any

from depclosure.core.dependency.models import (
    WILDCARD_ARCHITECTURE,
    BuildRecord,
    DependencyRequirement,
)
from depclosure.exceptions import RegistryFormatError


def _require_str(entry: dict[str, Any], key: str, context: str) -> str:
    value = entry.get(key)
    if value is None or isinstance(value, (dict, list, bool)):
        raise RegistryFormatError(f"{context}: missing or invalid {key!r}")
    # YAML reads 1.0 as a float; versions are compared as text.
    return str(value)


def requirement_from_entry(entry: Any, context: str = "dependency") -> DependencyRequirement:
    """Build a requirement from ``"name@ver[:arch]"`` or a mapping.

    Raises:
        RegistryFormatError: If the entry is malformed.
    """
    if isinstance(entry, str):
        try:
            return DependencyRequirement.parse(entry)
        except ValueError as exc:
            raise RegistryFormatError(f"{context}: {exc}") from exc
    if not isinstance(entry, dict):
        raise RegistryFormatError(f"{context}: expected string or mapping, got {entry!r}")
    return DependencyRequirement(
        package_name=_require_str(entry, "package", context),
        version=_require_str(entry, "version", context),
        architecture=str(entry.get("architecture") or WILDCARD_ARCHITECTURE),
    )


def record_from_entry(entry: Any, context: str = "build") -> BuildRecord:
    """Build a ``BuildRecord`` from one catalogue entry.

    Raises:
        RegistryFormatError: If the entry or any dependency is malformed.
    """
    if not isinstance(entry, dict):
        raise RegistryFormatError(f"{context}: expected a mapping, got {entry!r}")
    name = _require_str(entry, "package", context)
    version = _require_str(entry, "version", context)
    raw_deps = entry.get("dependencies") or []
    if not isinstance(raw_deps, list):
        raise RegistryFormatError(f"{context} {name}@{version}: 'dependencies' must be a list")
    deps = tuple(
        requirement_from_entry(dep, f"{context} {name}@{version}")
        for dep in raw_deps
    )
    return BuildRecord(
        package_name=name,
        version=version,
        architecture=str(entry.get("architecture") or WILDCARD_ARCHITECTURE),
        dependencies=deps,
    )


def records_from_document(document: Any, source: str) -> list[BuildRecord]:
    """Extract the records of a catalogue document (``{"builds": [...]}``).

    Raises:
        RegistryFormatError: If the document is not a catalogue.
    """
    if not isinstance(document, dict) or not isinstance(document.get("builds"), list):
        raise RegistryFormatError(f"{source}: expected a mapping with a 'builds' list")
    return [
        record_from_entry(entry, f"{source} build #{i}")
        for i, entry in enumerate(document["builds"])
    ]
