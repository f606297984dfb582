"""Resource discovery - every candidate resource grouped by logical name."""
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set

from .finder import FileFinder, NativeFinder, TraversalError
from .naming import BUNDLE_EXTENSIONS, non_bundle_extensions, path_extension, plain_name
from resweep.utils.safe_console import warn


class ResourceDiscoverer:
    """Collect resource files under a project root, keyed by logical name."""

    def __init__(
        self,
        project_root: str | Path,
        resource_extensions: Sequence[str],
        excluded_paths: Sequence[str | Path] = (),
        finder: Optional[FileFinder] = None,
    ):
        """Initialize resource discoverer.

        Args:
            project_root: Root directory of the project
            resource_extensions: Extensions that mark a resource ('png', 'imageset', ...)
            excluded_paths: Absolute paths left out of discovery
            finder: Traversal backend (defaults to a native directory walk)
        """
        self.project_root = Path(project_root)
        self.resource_extensions = list(resource_extensions)
        self.excluded_paths = [Path(p) for p in excluded_paths]
        self.finder = finder if finder is not None else NativeFinder()
        self.failures: List[str] = []

    def resources(self) -> Dict[str, Set[str]]:
        """Build the resource map.

        Paths inside a bundle-like container are owned by the container and
        skipped. A directory is only a resource when its extension is
        bundle-like; 'foo.png/' directories are ignored.

        Returns:
            Mapping of logical name -> set of absolute paths. Empty when the
            project can't be enumerated.
        """
        try:
            found = self.finder.find(self.project_root, self.resource_extensions, self.excluded_paths)
        except TraversalError as e:
            message = f"Resource finding failed: {e}"
            warn(message)
            self.failures.append(message)
            return {}
        finally:
            self._collect_finder_warnings()

        bundle_markers = [f".{ext}/" for ext in BUNDLE_EXTENSIONS]
        file_only_extensions = non_bundle_extensions(self.resource_extensions)

        files: Dict[str, Set[str]] = {}
        for file in found:
            if any(marker in file for marker in bundle_markers):
                continue

            ext = path_extension(file)
            if ext in file_only_extensions and self.finder.is_dir(file):
                continue

            key = plain_name(file, self.resource_extensions)
            files.setdefault(key, set()).add(file)

        return files

    def _collect_finder_warnings(self):
        warnings = getattr(self.finder, "warnings", None) or []
        for message in warnings:
            warn(message)
            self.failures.append(message)
        if warnings:
            warnings.clear()
