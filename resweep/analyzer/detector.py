"""Unused resource detection pipeline.

Discovery and source scanning are independent read-only passes over the same
root; the resolver is the only place their outputs meet.
"""
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set

from resweep.config import ConfigurationError
from .finder import FileFinder
from .resource_discoverer import ResourceDiscoverer
from .source_scanner import SourceScanner
from .unused_resolver import FileInfo, unused_file_infos


class UnusedResourceDetector:
    """Find resources in a project that no source file refers to."""

    def __init__(
        self,
        project_path: str | Path,
        excluded_paths: Sequence[str],
        resource_extensions: Sequence[str],
        search_in_extensions: Sequence[str],
        finder: Optional[FileFinder] = None,
    ):
        """Initialize detector.

        Args:
            project_path: Project root (made absolute)
            excluded_paths: Paths relative to the project root to leave out
            resource_extensions: Resource extensions, e.g. ['imageset', 'png']
            search_in_extensions: Source extensions to scan, e.g. ['swift', 'm']
            finder: Traversal backend for discovery (native walk by default)
        """
        self.project_path = Path(project_path).absolute()
        self.excluded_paths = [self.project_path / p for p in excluded_paths]
        self.resource_extensions = list(resource_extensions)
        self.search_in_extensions = list(search_in_extensions)
        self.finder = finder
        self.failures: List[str] = []

    def unused_files(self) -> List[FileInfo]:
        """Run discovery, scanning and resolution.

        Returns:
            Unused resources sorted by path

        Raises:
            ConfigurationError: If either extension list is empty
        """
        if not self.resource_extensions:
            raise ConfigurationError("No resource extensions given")
        if not self.search_in_extensions:
            raise ConfigurationError("No file extensions to search in given")

        self.failures = []
        resources = self.all_resource_files()
        used_names = self.all_used_names()

        return unused_file_infos(resources, used_names)

    def all_resource_files(self) -> Dict[str, Set[str]]:
        discoverer = ResourceDiscoverer(
            self.project_path,
            self.resource_extensions,
            self.excluded_paths,
            finder=self.finder,
        )
        resources = discoverer.resources()
        self.failures.extend(discoverer.failures)
        return resources

    def all_used_names(self) -> Set[str]:
        scanner = SourceScanner(
            self.project_path,
            self.excluded_paths,
            self.resource_extensions,
            self.search_in_extensions,
        )
        used = scanner.used_names()
        self.failures.extend(scanner.failures)
        return used
