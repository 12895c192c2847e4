"""depclosure CLI — Dependency-closure validation for package builds.

Entry point for the ``depclosure`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    resolve  — Validate the closure of root requirements.
    lookup   — Show the direct dependencies of one build.
    records  — List the build records of a catalogue file.

Usage::

    depclosure resolve app@1.2.0 -r builds.yaml
    depclosure resolve app@1.2.0 --arch linux-x64 -o plan.json -r builds.yaml
    depclosure lookup app 1.2.0 -r https://builds.example.com
    depclosure records -r builds.yaml
"""

from __future__ import annotations

import logging

import click
from rich.logging import RichHandler

from depclosure import __version__
from depclosure.cli.lookup_cmd import lookup_command
from depclosure.cli.output import console
from depclosure.cli.records_cmd import records_command
from depclosure.cli.resolve_cmd import resolve_command


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", count=True, help="Log traversal (-v info, -vv debug).")
def cli(verbose: int) -> None:
    """depclosure: Validate dependency closures of published builds.

    Walks the transitive dependencies of a candidate set of exact
    package versions and reports the first version conflict or
    unpublished build.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG if verbose > 1 else logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# Register all subcommands
cli.add_command(resolve_command)
cli.add_command(lookup_command)
cli.add_command(records_command)
