"""Tests for the configuration module."""

from pathlib import Path

import pytest

from dagindex import ConfigError, GraphFormat
from dagindex._cli.config import DagIndexConfig, find_pyproject_toml, get_config, load_config


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        assert find_pyproject_toml(tmp_path) == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")
        subdir = tmp_path / "src" / "pkg"
        subdir.mkdir(parents=True)

        assert find_pyproject_toml(subdir) == pyproject

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        assert find_pyproject_toml(tmp_path) is None


class TestLoadConfig:
    """Tests for loading [tool.dagindex]."""

    def test_no_section(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        config = load_config(pyproject)

        assert config == DagIndexConfig(project_root=tmp_path)
        assert config.format is GraphFormat.TOML

    def test_relative_input_resolved_from_project_root(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.dagindex]\ninput = "data/graph.toml"\n')

        config = load_config(pyproject)

        assert config.input == tmp_path / "data" / "graph.toml"

    def test_absolute_input_kept(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere.json"
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(f"[tool.dagindex]\ninput = {str(target)!r}\n")

        assert load_config(pyproject).input == target

    def test_format(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.dagindex]\nformat = "JSON"\n')

        assert load_config(pyproject).format is GraphFormat.JSON

    def test_invalid_format(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.dagindex]\nformat = "yaml"\n')

        with pytest.raises(ConfigError, match="format"):
            load_config(pyproject)

    def test_invalid_input_type(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.dagindex]\ninput = 3\n")

        with pytest.raises(ConfigError, match="input"):
            load_config(pyproject)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.dagindex\n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)

    def test_get_config_from_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text('[tool.dagindex]\ninput = "graph.toml"\n')
        monkeypatch.chdir(tmp_path)

        assert get_config().input == tmp_path.resolve() / "graph.toml"
