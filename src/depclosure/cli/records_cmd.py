"""``depclosure records`` — List every build record in a catalogue file."""

from __future__ import annotations

import sys

import click

from depclosure.cli._registry import (
    EXIT_REGISTRY_UNAVAILABLE,
    is_url,
    open_catalogue,
    registry_option,
)
from depclosure.cli.output import print_error, print_records


@click.command("records")
@registry_option
def records_command(registry_spec: str) -> None:
    """List the build records of a catalogue file.

    Remote registries cannot be enumerated; use ``lookup`` for them.
    """
    if is_url(registry_spec):
        print_error("records can only list catalogue files, not remote registries")
        sys.exit(EXIT_REGISTRY_UNAVAILABLE)
    with open_catalogue(registry_spec) as registry:
        print_records(registry.records(), registry.registry_name)
