"""``depclosure lookup NAME VERSION`` — Show the direct dependencies of one build.

Exit Codes:
    0 — Build found; its dependencies are listed.
    2 — No build of NAME at VERSION for the architecture (or ``all``).
    3 — Registry unusable or unreachable.
"""

from __future__ import annotations

import json
import sys

import click

from depclosure.cli._registry import (
    EXIT_REGISTRY_UNAVAILABLE,
    open_registry,
    registry_option,
)
from depclosure.cli.output import print_dependencies, print_error
from depclosure.core.dependency import WILDCARD_ARCHITECTURE, DependencyRequirement
from depclosure.exceptions import LookupUnavailableError, UnknownDependencyError


@click.command("lookup")
@click.argument("name")
@click.argument("version")
@registry_option
@click.option(
    "--arch", "-a",
    default=WILDCARD_ARCHITECTURE,
    show_default=True,
    help="Architecture of the build to look up.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def lookup_command(
    name: str,
    version: str,
    registry_spec: str,
    arch: str,
    output_format: str,
) -> None:
    """Show the declared dependencies of NAME at VERSION.

    An architecture-specific build takes precedence over the ``all`` build.
    """
    requirement = DependencyRequirement(name, version, arch)
    with open_registry(registry_spec) as registry:
        try:
            deps = registry.lookup(name, version, arch)
        except UnknownDependencyError as exc:
            print_error(str(exc))
            sys.exit(2)
        except LookupUnavailableError as exc:
            print_error(str(exc))
            sys.exit(EXIT_REGISTRY_UNAVAILABLE)

    if output_format == "json":
        click.echo(json.dumps([str(d) for d in deps], indent=2))
    else:
        print_dependencies(requirement, deps)
