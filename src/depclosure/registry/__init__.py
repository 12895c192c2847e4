"""Build registries consumed by the resolution core.

Public API::

    from depclosure.registry import BuildRegistry, InMemoryRegistry
    from depclosure.registry.file_registry import FileRegistry
    from depclosure.registry.http_registry import HttpRegistry
"""

from __future__ import annotations

from depclosure.registry.base import BuildRegistry, select_record
from depclosure.registry.memory import InMemoryRegistry

__all__ = [
    "BuildRegistry",
    "InMemoryRegistry",
    "select_record",
]
