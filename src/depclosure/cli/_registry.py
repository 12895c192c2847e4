"""Shared ``--registry`` option and registry construction for CLI commands."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from depclosure.cli.output import print_error
from depclosure.exceptions import RegistryFormatError
from depclosure.registry.base import BuildRegistry
from depclosure.registry.file_registry import FileRegistry

# Exit code for an unusable registry (bad catalogue, unreachable service).
EXIT_REGISTRY_UNAVAILABLE = 3

registry_option = click.option(
    "--registry", "-r",
    "registry_spec",
    envvar="DEPCLOSURE_REGISTRY",
    required=True,
    help="Catalogue file (.yaml/.yml/.json) or http(s) URL of a registry "
         "service. Defaults to $DEPCLOSURE_REGISTRY.",
)


def is_url(spec: str) -> bool:
    return spec.startswith(("http://", "https://"))


def open_registry(spec: str, timeout: float | None = None) -> BuildRegistry:
    """Build the registry named by *spec*, exiting on failure.

    URLs select ``HttpRegistry``; anything else is a catalogue path for
    ``FileRegistry``.
    """
    if is_url(spec):
        from depclosure.registry.http_registry import DEFAULT_TIMEOUT, HttpRegistry
        return HttpRegistry(spec, timeout=timeout or DEFAULT_TIMEOUT)
    return open_catalogue(spec)


def open_catalogue(spec: str) -> FileRegistry:
    """Load the catalogue file at *spec*, exiting on failure."""
    path = Path(spec)
    if not path.is_file():
        print_error(f"registry catalogue not found: {spec}")
        sys.exit(EXIT_REGISTRY_UNAVAILABLE)
    try:
        return FileRegistry(path)
    except RegistryFormatError as exc:
        print_error(str(exc))
        sys.exit(EXIT_REGISTRY_UNAVAILABLE)
