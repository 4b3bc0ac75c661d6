"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path


class ConfigError(Exception):
    """Error in estiq configuration."""


@dataclass(slots=True, frozen=True)
class EstiqConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    document: Path | None = None
    output: Path | None = None
    max_scenarios: int | None = None
    precision: int | None = None
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
            # Reached filesystem root
            return None
        current = parent


def _parse_path(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.estiq].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


def _parse_int(section: dict[str, object], key: str, minimum: int) -> int | None:
    if key not in section:
        return None
    value = section[key]
    # bool is a subclass of int, but `max_scenarios = true` is not a count
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        msg = f"Invalid [tool.estiq].{key}: expected integer >= {minimum}"
        raise ConfigError(msg)
    return value


def load_config(pyproject_path: Path) -> EstiqConfig:
    """Load and validate [tool.estiq] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed EstiqConfig

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

    # Extract [tool.estiq] section
    tool_section = data.get("tool", {})
    estiq_section = tool_section.get("estiq", {})

    if not estiq_section:
        # No [tool.estiq] section - return empty config
        return EstiqConfig(project_root=project_root)

    if not isinstance(estiq_section, dict):
        msg = "Invalid [tool.estiq] configuration. Expected a table."
        raise ConfigError(msg)

    return EstiqConfig(
        document=_parse_path(estiq_section, "document", project_root),
        output=_parse_path(estiq_section, "output", project_root),
        max_scenarios=_parse_int(estiq_section, "max_scenarios", minimum=1),
        precision=_parse_int(estiq_section, "precision", minimum=0),
        project_root=project_root,
    )


def get_config() -> EstiqConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        EstiqConfig (may be empty if no pyproject.toml or no [tool.estiq] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return EstiqConfig()
    return load_config(pyproject_path)
