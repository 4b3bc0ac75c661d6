"""Tests for the configuration module."""

from pathlib import Path

import pytest

from estiq._cli.config import (
    ConfigError,
    EstiqConfig,
    find_pyproject_toml,
    get_config,
    load_config,
)


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in current directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        result = find_pyproject_toml(tmp_path)

        assert result == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in parent directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        subdir = tmp_path / "estimates" / "q3"
        subdir.mkdir(parents=True)

        result = find_pyproject_toml(subdir)

        assert result == pyproject

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        """Should return None when no pyproject.toml is found."""
        result = find_pyproject_toml(tmp_path)

        assert result is None


class TestLoadConfig:
    """Tests for loading the [tool.estiq] section."""

    def test_full_config(self, tmp_path: Path) -> None:
        """Should parse every supported key."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.estiq]
document = "estimates/website.yaml"
output = "build/website.json"
max_scenarios = 500
precision = 1
""",
        )

        config = load_config(pyproject)

        assert config == EstiqConfig(
            document=tmp_path / "estimates/website.yaml",
            output=tmp_path / "build/website.json",
            max_scenarios=500,
            precision=1,
            project_root=tmp_path,
        )

    def test_absolute_paths_are_kept(self, tmp_path: Path) -> None:
        """Should not resolve absolute paths against the project root."""
        document = tmp_path / "elsewhere" / "doc.yaml"
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(f'[tool.estiq]\ndocument = "{document.as_posix()}"\n')

        config = load_config(pyproject)

        assert config.document == document

    def test_no_estiq_section(self, tmp_path: Path) -> None:
        """Should return empty config when [tool.estiq] is missing."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        config = load_config(pyproject)

        assert config.document is None
        assert config.max_scenarios is None
        assert config.project_root == tmp_path

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Should raise ConfigError for invalid TOML."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.estiq\n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)

    def test_document_must_be_string(self, tmp_path: Path) -> None:
        """Should raise ConfigError when document is not a string."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.estiq]\ndocument = 3\n")

        with pytest.raises(ConfigError, match="document"):
            load_config(pyproject)

    @pytest.mark.parametrize("value", ["0", "-1", "true", '"many"'])
    def test_invalid_max_scenarios(self, tmp_path: Path, value: str) -> None:
        """Should raise ConfigError when max_scenarios is not a positive integer."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(f"[tool.estiq]\nmax_scenarios = {value}\n")

        with pytest.raises(ConfigError, match="max_scenarios"):
            load_config(pyproject)

    def test_zero_precision_is_allowed(self, tmp_path: Path) -> None:
        """Should accept zero decimals."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.estiq]\nprecision = 0\n")

        assert load_config(pyproject).precision == 0


class TestGetConfig:
    """Tests for get_config function."""

    def test_reads_from_working_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should find the configuration from the current directory."""
        (tmp_path / "pyproject.toml").write_text("[tool.estiq]\nprecision = 3\n")
        monkeypatch.chdir(tmp_path)

        assert get_config().precision == 3
