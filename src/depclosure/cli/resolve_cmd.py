"""``depclosure resolve`` — Validate the dependency closure of root requirements.

Walks the transitive dependencies of every REQUIREMENT (``name@version`` or
``name@version:arch``) through the registry and checks that each package is
requested at one version only.

Exit Codes:
    0 — Closure is consistent.
    1 — Two requirements ask for incompatible versions of one package.
    2 — A required build is not published in the registry.
    3 — Registry unusable or unreachable, or the deadline passed.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from depclosure.cli._registry import (
    EXIT_REGISTRY_UNAVAILABLE,
    open_registry,
    registry_option,
)
from depclosure.cli.output import print_error, print_resolution_summary, resolution_to_dict
from depclosure.core.dependency import (
    WILDCARD_ARCHITECTURE,
    DependencyRequirement,
    Resolution,
    resolve,
    resolve_within,
)
from depclosure.core.plan import BuildPlan
from depclosure.exceptions import (
    ConflictError,
    LookupUnavailableError,
    ResolutionError,
    ResolutionTimeoutError,
    UnknownDependencyError,
)

EXIT_OK = 0
EXIT_CONFLICT = 1
EXIT_UNKNOWN_DEPENDENCY = 2


def _parse_requirements(
    values: tuple[str, ...], architecture: str
) -> list[DependencyRequirement]:
    roots: list[DependencyRequirement] = []
    for value in values:
        try:
            roots.append(DependencyRequirement.parse(value, architecture))
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="REQUIREMENT") from exc
    return roots


def _exit_code(resolution: Resolution) -> int:
    if resolution.success:
        return EXIT_OK
    if isinstance(resolution.error, ConflictError):
        return EXIT_CONFLICT
    if isinstance(resolution.error, UnknownDependencyError):
        return EXIT_UNKNOWN_DEPENDENCY
    return EXIT_REGISTRY_UNAVAILABLE  # pragma: no cover


@click.command("resolve")
@click.argument("requirements", nargs=-1, required=True)
@registry_option
@click.option(
    "--arch", "-a",
    default=WILDCARD_ARCHITECTURE,
    show_default=True,
    help="Architecture for requirements that do not name one.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write a JSON build plan here when the closure is consistent.",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Give up after this many seconds.",
)
def resolve_command(
    requirements: tuple[str, ...],
    registry_spec: str,
    arch: str,
    output_format: str,
    output: str | None,
    timeout: float | None,
) -> None:
    """Validate the dependency closure of REQUIREMENTS.

    Examples:

        depclosure resolve app@1.2.0 -r builds.yaml

        depclosure resolve app@1.2.0 tool@3.0.0:linux-x64 -r https://builds.example.com
    """
    roots = _parse_requirements(requirements, arch)
    with open_registry(registry_spec, timeout) as registry:
        try:
            if timeout is not None:
                closure = resolve_within(timeout, roots, registry)
            else:
                closure = resolve(roots, registry)
            resolution = Resolution.from_closure(closure)
        except ResolutionError as exc:
            resolution = Resolution.from_error(exc)
        except (LookupUnavailableError, ResolutionTimeoutError) as exc:
            print_error(str(exc))
            sys.exit(EXIT_REGISTRY_UNAVAILABLE)

    if output_format == "json":
        click.echo(json.dumps(resolution_to_dict(resolution), indent=2, sort_keys=True))
    else:
        print_resolution_summary(resolution)

    if resolution.success and output:
        plan = BuildPlan.from_closure(roots, resolution.closure)
        plan.write(Path(output))
        if output_format == "text":
            click.echo(f"\nBuild plan written to: {output}")

    sys.exit(_exit_code(resolution))
