"""Tests for configuration loading and the typer CLI."""

import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from resweep.config import Config, ConfigurationError, get_config, split_extensions, split_list
from resweep.main import app


runner = CliRunner()

ENV_VARS = [
    "RESWEEP_RESOURCE_EXTENSIONS",
    "RESWEEP_FILE_EXTENSIONS",
    "RESWEEP_EXCLUDE",
    "RESWEEP_TRASH_PATH",
    "RESWEEP_FINDER",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without resweep variables in the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _write(path: Path, content: str | bytes = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content)
    return path


def _project(root: Path) -> Path:
    _write(root / "App" / "App.swift", 'UIImage(named: "logo")')
    _write(root / "App" / "logo.png", b"0123456789")
    _write(root / "App" / "unused.png", b"01234")
    _write(
        root / "App.xcodeproj" / "project.pbxproj",
        "A1 /* logo.png in Resources */\nA2 /* unused.png in Resources */\n",
    )
    return root


class TestConfig:
    """Test environment-driven configuration."""

    def test_defaults(self, tmp_path):
        """Test the built-in defaults with no environment or .env file."""
        config = Config(tmp_path)

        assert config.resource_extensions == ["imageset", "jpg", "png", "gif", "pdf"]
        assert config.file_extensions == ["h", "m", "mm", "swift", "xib", "storyboard", "plist"]
        assert config.excluded_paths == []
        assert config.trash_path == tmp_path.resolve() / ".resweep_trash"
        assert config.finder == "native"

    def test_environment_overrides(self, tmp_path, monkeypatch):
        """Test environment variables replace the defaults."""
        monkeypatch.setenv("RESWEEP_RESOURCE_EXTENSIONS", ".png, .pdf")
        monkeypatch.setenv("RESWEEP_EXCLUDE", "Pods Carthage")
        monkeypatch.setenv("RESWEEP_FINDER", "FIND")

        config = Config(tmp_path)

        assert config.resource_extensions == ["png", "pdf"]
        assert config.excluded_paths == ["Pods", "Carthage"]
        assert config.finder == "find"

    def test_dotenv_file_is_loaded(self, tmp_path):
        """Test values are read from the project .env file."""
        _write(tmp_path / ".env", "RESWEEP_FILE_EXTENSIONS=swift json\n")

        assert Config(tmp_path).file_extensions == ["swift", "json"]

    def test_dotenv_values_stay_with_their_project(self, tmp_path):
        """Test one project's .env never leaks into another project's config."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        _write(first / ".env", "RESWEEP_EXCLUDE=Pods\nRESWEEP_FINDER=find\n")
        second.mkdir()

        assert get_config(first).excluded_paths == ["Pods"]
        assert get_config(second).excluded_paths == []
        assert get_config(second).finder == "native"
        assert "RESWEEP_EXCLUDE" not in os.environ

    def test_environment_wins_over_dotenv(self, tmp_path, monkeypatch):
        """Test a variable set in the environment overrides the .env file."""
        _write(tmp_path / ".env", "RESWEEP_EXCLUDE=Pods\n")
        monkeypatch.setenv("RESWEEP_EXCLUDE", "Carthage")

        assert Config(tmp_path).excluded_paths == ["Carthage"]

    def test_empty_resource_extensions_rejected(self, tmp_path, monkeypatch):
        """Test an empty resource extension list is refused."""
        monkeypatch.setenv("RESWEEP_RESOURCE_EXTENSIONS", " , ")

        with pytest.raises(ConfigurationError):
            Config(tmp_path)

    def test_empty_file_extensions_rejected(self, tmp_path, monkeypatch):
        """Test an empty search-in extension list is refused."""
        monkeypatch.setenv("RESWEEP_FILE_EXTENSIONS", "")

        with pytest.raises(ConfigurationError):
            Config(tmp_path)

    def test_unknown_finder_rejected(self, tmp_path, monkeypatch):
        """Test an unknown finder backend is refused."""
        monkeypatch.setenv("RESWEEP_FINDER", "locate")

        with pytest.raises(ConfigurationError):
            Config(tmp_path)

    def test_get_config_is_cached_per_root(self, tmp_path):
        """Test one config instance is shared per project root."""
        assert get_config(tmp_path) is get_config(tmp_path)

    def test_split_helpers(self):
        """Test option values split on whitespace and commas."""
        assert split_list("a, b  c,,") == ["a", "b", "c"]
        assert split_list(None) == []
        assert split_extensions(".png jpg .") == ["png", "jpg"]


class TestAuditCommand:
    """Test the read-only report."""

    def test_lists_unused_resources(self, tmp_path):
        """Test audit lists unused files and leaves them in place."""
        _project(tmp_path)

        result = runner.invoke(app, ["audit", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "unused.png" in result.stdout
        assert "logo.png" not in result.stdout
        assert "1 unused files are found" in result.stdout
        assert (tmp_path / "App" / "unused.png").exists()

    def test_clean_project(self, tmp_path):
        """Test audit on a project where everything is referenced."""
        _write(tmp_path / "App.swift", '"logo"')
        _write(tmp_path / "logo.png", b"x")

        result = runner.invoke(app, ["audit", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "No unused resources found" in result.stdout

    def test_command_line_extensions_override_defaults(self, tmp_path):
        """Test command-line extensions replace the configured ones."""
        _project(tmp_path)

        result = runner.invoke(app, ["audit", str(tmp_path), "--resource-extensions", "gif"])

        assert result.exit_code == 0, result.output
        assert "No unused resources found" in result.stdout

    def test_empty_extensions_exit_with_error(self, tmp_path):
        """Test an empty extension option exits with code 1."""
        _project(tmp_path)

        result = runner.invoke(app, ["audit", str(tmp_path), "--file-extensions", ""])

        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_missing_project_exits_with_error(self, tmp_path):
        """Test a missing project directory exits with code 1."""
        result = runner.invoke(app, ["audit", str(tmp_path / "missing")])

        assert result.exit_code == 1

    def test_version(self):
        """Test --version prints the program name."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "resweep" in result.stdout


class TestCleanCommand:
    """Test deletion, prompting and reference stripping."""

    def test_yes_moves_unused_to_trash_and_strips_references(self, tmp_path):
        """Test clean --yes trashes unused files and updates the project file."""
        _project(tmp_path)

        result = runner.invoke(app, ["clean", str(tmp_path), "--yes"])

        assert result.exit_code == 0, result.output
        assert not (tmp_path / "App" / "unused.png").exists()
        assert (tmp_path / "App" / "logo.png").exists()
        assert (tmp_path / ".resweep_trash" / "manifest.json").exists()
        assert (tmp_path / "App.xcodeproj" / "project.pbxproj").read_text() == \
            "A1 /* logo.png in Resources */"

    def test_trashed_resources_are_not_reported_again(self, tmp_path):
        """Test the trash directory is left out of later runs."""
        _project(tmp_path)
        runner.invoke(app, ["clean", str(tmp_path), "--yes"])

        result = runner.invoke(app, ["audit", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "No unused resources found" in result.stdout

    def test_skip_proj_reference(self, tmp_path):
        """Test --skip-proj-reference leaves the project file untouched."""
        _project(tmp_path)
        manifest = (tmp_path / "App.xcodeproj" / "project.pbxproj").read_text()

        result = runner.invoke(app, ["clean", str(tmp_path), "--yes", "--skip-proj-reference"])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "App.xcodeproj" / "project.pbxproj").read_text() == manifest

    def test_dry_run_changes_nothing(self, tmp_path):
        """Test --dry-run only reports."""
        _project(tmp_path)

        result = runner.invoke(app, ["clean", str(tmp_path), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "DRY RUN" in result.stdout
        assert (tmp_path / "App" / "unused.png").exists()
        assert not (tmp_path / ".resweep_trash").exists()

    def test_prompt_list_then_ignore(self, tmp_path):
        """Test listing at the prompt asks again, then ignoring keeps the files."""
        _project(tmp_path)

        result = runner.invoke(app, ["clean", str(tmp_path)], input="l\ni\n")

        assert result.exit_code == 0, result.output
        assert "Ignored" in result.stdout
        assert (tmp_path / "App" / "unused.png").exists()

    def test_prompt_delete(self, tmp_path):
        """Test answering delete at the prompt trashes the files."""
        _project(tmp_path)

        result = runner.invoke(app, ["clean", str(tmp_path)], input="d\n")

        assert result.exit_code == 0, result.output
        assert not (tmp_path / "App" / "unused.png").exists()


class TestRestoreCommand:
    """Test restoring trashed resources."""

    def test_restore_after_clean(self, tmp_path):
        """Test restore brings trashed files back."""
        _project(tmp_path)
        runner.invoke(app, ["clean", str(tmp_path), "--yes", "--skip-proj-reference"])

        result = runner.invoke(app, ["restore", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Restored 1 resource(s)" in result.stdout
        assert (tmp_path / "App" / "unused.png").read_bytes() == b"01234"

    def test_restore_with_empty_trash(self, tmp_path):
        """Test restore with no trash directory."""
        result = runner.invoke(app, ["restore", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "nothing to restore" in result.stdout
