"""Rich output formatting helpers for the depclosure CLI."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from depclosure.core.dependency import (
    BuildRecord,
    DependencyRequirement,
    Resolution,
)
from depclosure.exceptions import ConflictError, UnknownDependencyError

console = Console()


def print_resolution_summary(resolution: Resolution) -> None:
    """Print the outcome of a closure validation.

    Args:
        resolution: Report returned by ``DependencyResolver.validate``.
    """
    if resolution.success:
        console.print(
            Panel("[bold green]Closure is consistent[/bold green]",
                  title="Dependency Resolution")
        )
        if resolution.closure:
            table = Table(show_header=True)
            table.add_column("Package", style="bold")
            table.add_column("Version")
            for name in sorted(resolution.closure):
                table.add_row(name, ", ".join(sorted(resolution.closure[name])))
            console.print(table)
        else:
            console.print("[dim]No packages to resolve.[/dim]")
        return

    console.print(
        Panel("[bold red]Closure rejected[/bold red]",
              title="Dependency Resolution")
    )
    error = resolution.error
    if isinstance(error, ConflictError):
        console.print(f"  Conflicting versions of [bold]{error.package_name}[/bold]:")
        for version in sorted(error.versions):
            console.print(f"    [red]- {version}[/red]")
    elif isinstance(error, UnknownDependencyError):
        console.print(
            f"  [red]No build of [bold]{error.package_name}@{error.version}[/bold] "
            f"for architecture {error.architecture!r}[/red]"
        )
    else:
        for conflict in resolution.conflicts:
            console.print(f"  [red]- {escape(conflict)}[/red]")


def resolution_to_dict(resolution: Resolution) -> dict[str, Any]:
    """Convert a ``Resolution`` into a JSON-serializable dict."""
    data: dict[str, Any] = {
        "success": resolution.success,
        "packages": {
            name: sorted(versions)
            for name, versions in sorted(resolution.closure.items())
        },
    }
    error = resolution.error
    if isinstance(error, ConflictError):
        data["error"] = {
            "kind": "conflict",
            "package": error.package_name,
            "versions": sorted(error.versions),
        }
    elif isinstance(error, UnknownDependencyError):
        data["error"] = {
            "kind": "unknown_dependency",
            "package": error.package_name,
            "version": error.version,
            "architecture": error.architecture,
        }
    if resolution.conflicts:
        data["message"] = resolution.conflicts[0]
    return data


def print_dependencies(
    requirement: DependencyRequirement,
    dependencies: tuple[DependencyRequirement, ...],
) -> None:
    """Print the direct dependencies of one build, in declared order."""
    if not dependencies:
        console.print(f"[bold]{requirement}[/bold] has no dependencies.")
        return
    table = Table(title=f"Dependencies of {requirement}", show_header=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Package", style="bold")
    table.add_column("Version")
    table.add_column("Architecture", style="dim")
    for i, dep in enumerate(dependencies, start=1):
        table.add_row(str(i), dep.package_name, dep.version, dep.architecture)
    console.print(table)


def print_records(records: list[BuildRecord], registry_name: str) -> None:
    """Print a table of catalogue records."""
    if not records:
        console.print("[dim]Registry has no build records.[/dim]")
        return
    table = Table(title=f"Build records in {registry_name}", show_header=True)
    table.add_column("Package", style="bold")
    table.add_column("Version")
    table.add_column("Architecture", style="dim")
    table.add_column("Dependencies")
    for record in records:
        deps = ", ".join(str(d) for d in record.dependencies) or "-"
        table.add_row(record.package_name, record.version, record.architecture, deps)
    console.print(table)
    console.print(f"[bold]{len(records)}[/bold] records")


def print_error(message: str) -> None:
    """Print an error line to the console."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
