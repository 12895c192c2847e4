"""Tests for FileRegistry catalogue loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from depclosure.core.dependency import DependencyRequirement, resolve
from depclosure.exceptions import RegistryFormatError
from depclosure.registry.file_registry import FileRegistry

_YAML_CATALOGUE = """\
builds:
  - package: app
    version: "1.2.0"
    dependencies:
      - lib@2.0.0
      - codec@1.1.0:linux-x64
  - package: lib
    version: "2.0.0"
  - package: codec
    version: "1.1.0"
    architecture: linux-x64
"""


@pytest.fixture
def yaml_catalogue(tmp_path: Path) -> Path:
    path = tmp_path / "builds.yaml"
    path.write_text(_YAML_CATALOGUE)
    return path


class TestLoading:
    """Parsing catalogue files by suffix."""

    def test_yaml(self, yaml_catalogue: Path) -> None:
        registry = FileRegistry(yaml_catalogue)
        assert registry.record_count == 3
        assert registry.registry_name == str(yaml_catalogue)
        assert registry.lookup("app", "1.2.0", "all") == (
            DependencyRequirement("lib", "2.0.0"),
            DependencyRequirement("codec", "1.1.0", "linux-x64"),
        )

    def test_yml_suffix(self, tmp_path: Path) -> None:
        path = tmp_path / "builds.yml"
        path.write_text(_YAML_CATALOGUE)
        assert FileRegistry(path).record_count == 3

    def test_json(self, tmp_path: Path) -> None:
        path = tmp_path / "builds.json"
        path.write_text(json.dumps({
            "builds": [
                {"package": "A", "version": "1.0.0", "dependencies": ["B@1.0.0"]},
                {"package": "B", "version": "1.0.0"},
            ]
        }))
        registry = FileRegistry(str(path))
        assert resolve([DependencyRequirement("A", "1.0.0")], registry) == {
            "A": frozenset({"1.0.0"}),
            "B": frozenset({"1.0.0"}),
        }

    def test_resolves_catalogue(self, yaml_catalogue: Path) -> None:
        registry = FileRegistry(yaml_catalogue)
        result = resolve([DependencyRequirement("app", "1.2.0")], registry)
        assert set(result) == {"app", "lib", "codec"}


class TestErrors:
    """Malformed catalogues raise RegistryFormatError."""

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        path = tmp_path / "builds.toml"
        path.write_text("")
        with pytest.raises(RegistryFormatError, match="unsupported"):
            FileRegistry(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(RegistryFormatError, match="cannot read"):
            FileRegistry(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "builds.yaml"
        path.write_text("builds: [unclosed\n")
        with pytest.raises(RegistryFormatError, match="invalid catalogue syntax"):
            FileRegistry(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "builds.json"
        path.write_text("{not json")
        with pytest.raises(RegistryFormatError, match="invalid catalogue syntax"):
            FileRegistry(path)

    def test_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "builds.yaml"
        path.write_text("")
        with pytest.raises(RegistryFormatError, match="builds"):
            FileRegistry(path)

    def test_entry_without_package(self, tmp_path: Path) -> None:
        path = tmp_path / "builds.yaml"
        path.write_text("builds:\n  - version: '1.0'\n")
        with pytest.raises(RegistryFormatError, match="'package'"):
            FileRegistry(path)
