"""Source scanning - collect every resource name referenced from text files."""
import os
from pathlib import Path
from typing import List, Sequence, Set

from .naming import path_extension, plain_name
from .search_rules import rule_for_extension
from resweep.utils.safe_console import warn


class SourceScanner:
    """Walk a project and extract referenced resource names from source files."""

    def __init__(
        self,
        project_root: str | Path,
        excluded_paths: Sequence[str | Path],
        resource_extensions: Sequence[str],
        search_in_extensions: Sequence[str],
    ):
        """Initialize source scanner.

        Args:
            project_root: Root directory to scan
            excluded_paths: Absolute paths skipped together with their contents
            resource_extensions: Extensions stripped from extracted names
            search_in_extensions: Extensions of files that get scanned
        """
        self.project_root = Path(project_root)
        self.excluded_paths = {os.path.normpath(str(p)) for p in excluded_paths}
        self.resource_extensions = tuple(resource_extensions)
        self.search_in_extensions = set(search_in_extensions)
        self.failures: List[str] = []

    def used_names(self) -> Set[str]:
        """Extract the names referenced anywhere under the project root."""
        return self._used_names_at(self.project_root)

    def _used_names_at(self, path: Path) -> Set[str]:
        try:
            children = sorted(path.iterdir())
        except OSError as e:
            message = f"Failed to get contents in path: {path} ({e.strerror or e})"
            warn(message)
            self.failures.append(message)
            return set()

        result: Set[str] = set()
        for child in children:
            if child.name.startswith("."):
                continue
            if os.path.normpath(str(child)) in self.excluded_paths:
                continue

            if child.is_dir():
                result |= self._used_names_at(child)
            else:
                result |= self.names_in_file(child)

        return result

    def names_in_file(self, file_path: Path) -> Set[str]:
        """Extract the referenced names from a single source file.

        Files outside the search-in extensions contribute nothing, and so do
        files that can't be read as UTF-8 text.
        """
        ext = path_extension(file_path.name)
        if ext not in self.search_in_extensions:
            return set()

        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.failures.append(f"Failed to read {file_path}: {e}")
            return set()

        rule = rule_for_extension(ext)
        return {
            plain_name(name, self.resource_extensions)
            for name in rule.search(content, self.resource_extensions)
        }
