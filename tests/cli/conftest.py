"""Shared fixtures for CLI tests: catalogue files on disk."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def catalogue(tmp_path: Path) -> Path:
    """A catalogue with a consistent app, a conflicting pair, and a gap.

    - app@1.0.0 -> lib@2.0.0, codec@1.1.0 (codec has a linux-x64 build)
    - left@1.0.0 -> lib@1.0.0, right@1.0.0 -> lib@2.0.0
    - broken@1.0.0 -> ghost@0.1.0 (unpublished)
    """
    path = tmp_path / "builds.yaml"
    path.write_text(
        "builds:\n"
        "  - package: app\n"
        "    version: '1.0.0'\n"
        "    dependencies: [lib@2.0.0, codec@1.1.0]\n"
        "  - package: lib\n"
        "    version: '1.0.0'\n"
        "  - package: lib\n"
        "    version: '2.0.0'\n"
        "  - package: codec\n"
        "    version: '1.1.0'\n"
        "  - package: codec\n"
        "    version: '1.1.0'\n"
        "    architecture: linux-x64\n"
        "    dependencies: [simd@0.9.0:linux-x64]\n"
        "  - package: simd\n"
        "    version: '0.9.0'\n"
        "    architecture: linux-x64\n"
        "  - package: left\n"
        "    version: '1.0.0'\n"
        "    dependencies: [lib@1.0.0]\n"
        "  - package: right\n"
        "    version: '1.0.0'\n"
        "    dependencies: [lib@2.0.0]\n"
        "  - package: broken\n"
        "    version: '1.0.0'\n"
        "    dependencies: [ghost@0.1.0]\n"
    )
    return path
