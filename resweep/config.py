"""Configuration management for resweep.

Reads RESWEEP_* settings from the environment, falling back to a
project-level .env file, and provides centralized config access.
"""
import os
import re
from pathlib import Path
from typing import Dict, List, Optional
from dotenv import dotenv_values

__version__ = "1.0.0"

DEFAULT_RESOURCE_EXTENSIONS = "imageset jpg png gif pdf"
DEFAULT_FILE_EXTENSIONS = "h m mm swift xib storyboard plist"
FINDERS = ("native", "find")


class ConfigurationError(ValueError):
    """Raised when the run cannot start because of missing configuration."""


def split_list(raw: str | None) -> List[str]:
    """Split a whitespace- or comma-separated option value into items."""
    if not raw:
        return []
    return [item for item in re.split(r"[\s,]+", raw.strip()) if item]


def split_extensions(raw: str | None) -> List[str]:
    """Split an extension list, dropping any leading dot ('.png' -> 'png')."""
    return [ext.lstrip(".") for ext in split_list(raw) if ext.lstrip(".")]


class Config:
    """Configuration loader with environment variable support."""

    def __init__(self, project_root: str | Path = "."):
        """Initialize config by reading the project's .env file.

        Values from the .env file are kept on the instance, so configs for
        different roots never see each other's settings. Variables already
        set in the environment take precedence.

        Args:
            project_root: Directory whose .env file is read (if present)
        """
        self.project_root = Path(project_root).resolve()
        self._dotenv = dotenv_values(self.project_root / ".env")

        self._validate_required()

    def _get(self, key: str, default: str) -> str:
        value: Optional[str] = os.environ.get(key)
        if value is None:
            value = self._dotenv.get(key)
        return default if value is None else value

    def _validate_required(self):
        """Validate that the extension lists are usable.

        Raises:
            ConfigurationError: If an extension list is empty or the
                finder name is unknown
        """
        if not self.resource_extensions:
            raise ConfigurationError(
                "No resource extensions configured. "
                "Set RESWEEP_RESOURCE_EXTENSIONS or pass --resource-extensions."
            )
        if not self.file_extensions:
            raise ConfigurationError(
                "No file extensions to search in. "
                "Set RESWEEP_FILE_EXTENSIONS or pass --file-extensions."
            )
        if self.finder not in FINDERS:
            raise ConfigurationError(
                f"Unknown finder '{self.finder}'. Use one of: {', '.join(FINDERS)}"
            )

    @property
    def resource_extensions(self) -> List[str]:
        """Resource file extensions to look for.

        Returns:
            List of extensions without leading dots
        """
        return split_extensions(
            self._get("RESWEEP_RESOURCE_EXTENSIONS", DEFAULT_RESOURCE_EXTENSIONS)
        )

    @property
    def file_extensions(self) -> List[str]:
        """Source file extensions scanned for references."""
        return split_extensions(
            self._get("RESWEEP_FILE_EXTENSIONS", DEFAULT_FILE_EXTENSIONS)
        )

    @property
    def excluded_paths(self) -> List[str]:
        """Paths (relative to the project root) left out of the analysis."""
        return split_list(self._get("RESWEEP_EXCLUDE", ""))

    @property
    def trash_path(self) -> Path:
        """Get trash directory path.

        Relative values are resolved against the project root.

        Returns:
            Path to the trash directory
        """
        trash = Path(self._get("RESWEEP_TRASH_PATH", ".resweep_trash"))
        if not trash.is_absolute():
            trash = self.project_root / trash
        return trash

    @property
    def finder(self) -> str:
        """Name of the traversal backend used for resource discovery."""
        return self._get("RESWEEP_FINDER", "native").strip().lower()


_configs: Dict[Path, Config] = {}


def get_config(project_root: str | Path = ".") -> Config:
    """Get or create the Config instance for a project root.

    Returns:
        Config instance
    """
    key = Path(project_root).resolve()
    if key not in _configs:
        _configs[key] = Config(key)
    return _configs[key]
