"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from dagindex._errors import ConfigError
from dagindex._io import GraphFormat


@dataclass(slots=True, frozen=True)
class DagIndexConfig:
    """Configuration loaded from the ``[tool.dagindex]`` table of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    input: Path | None = None
    format: GraphFormat = GraphFormat.TOML
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_format(value: object) -> GraphFormat:
    if not isinstance(value, str):
        msg = "Invalid [tool.dagindex].format: expected string"
        raise ConfigError(msg)
    try:
        return GraphFormat(value.lower())
    except ValueError:
        choices = ", ".join(f"'{f}'" for f in GraphFormat)
        msg = f"Invalid [tool.dagindex].format '{value}'. Expected one of: {choices}"
        raise ConfigError(msg) from None


def load_config(pyproject_path: Path) -> DagIndexConfig:
    """Load and validate [tool.dagindex] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed DagIndexConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("dagindex", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.dagindex] configuration: expected a table"
        raise ConfigError(msg)

    input_path: Path | None = None
    if "input" in section:
        input_value = section["input"]
        if not isinstance(input_value, str):
            msg = "Invalid [tool.dagindex].input: expected string path"
            raise ConfigError(msg)
        input_path = Path(input_value)
        if not input_path.is_absolute():
            input_path = project_root / input_path

    fmt = GraphFormat.TOML
    if "format" in section:
        fmt = _parse_format(section["format"])

    return DagIndexConfig(input=input_path, format=fmt, project_root=project_root)


def get_config() -> DagIndexConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        DagIndexConfig (may be empty if no pyproject.toml or no [tool.dagindex] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return DagIndexConfig()
    return load_config(pyproject_path)
