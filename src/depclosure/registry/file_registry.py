"""Build registry loaded from a YAML or JSON catalogue file.

Usage::

    registry = FileRegistry(Path("builds.yaml"))
    deps = registry.lookup("A", "1.0.0", "linux-x64")
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from depclosure.exceptions import RegistryFormatError
from depclosure.registry.catalogue import records_from_document
from depclosure.registry.memory import InMemoryRegistry

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)


def load_document(path: Path) -> Any:
    """Read and parse a catalogue file, choosing the parser by suffix.

    Raises:
        RegistryFormatError: Unreadable file, unsupported suffix, or a
            syntax error in the document.
    """
    suffix = path.suffix.lower()
    if suffix not in YAML_SUFFIXES + JSON_SUFFIXES:
        raise RegistryFormatError(
            f"{path}: unsupported catalogue format {suffix!r} "
            "(expected .yaml, .yml or .json)"
        )
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RegistryFormatError(f"{path}: cannot read catalogue: {exc}") from exc

    try:
        if suffix in YAML_SUFFIXES:
            return yaml.safe_load(raw)
        return json.loads(raw)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise RegistryFormatError(f"{path}: invalid catalogue syntax: {exc}") from exc


class FileRegistry(InMemoryRegistry):
    """In-memory registry populated from a catalogue file at construction.

    Args:
        path: Path to a ``.yaml``, ``.yml`` or ``.json`` catalogue.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        records = records_from_document(load_document(self.path), str(self.path))
        super().__init__(records, name=str(self.path))
        logger.debug("Loaded %d build records from %s", self.record_count, self.path)
