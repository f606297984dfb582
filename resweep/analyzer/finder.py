"""Filesystem enumeration backends for resource discovery.

Two interchangeable finders locate every entry (file or directory) whose name
ends in one of the resource extensions:

- NativeFinder walks the tree with os.walk (default, portable)
- FindProcessFinder shells out to find(1) and waits for its full output
"""
import fnmatch
import os
import subprocess
from pathlib import Path
from typing import List, Protocol, Sequence, Set

from resweep.config import ConfigurationError


class TraversalError(RuntimeError):
    """Raised when a finder cannot enumerate the project at all."""


class FileFinder(Protocol):
    """Interface the resource discoverer relies on."""

    warnings: List[str]

    def find(self, root: Path, extensions: Sequence[str], excluded: Sequence[Path]) -> Set[str]:
        ...

    def is_dir(self, path: str) -> bool:
        ...


class NativeFinder:
    """Find resource entries with a native recursive directory walk."""

    def __init__(self):
        self.warnings: List[str] = []

    def find(self, root: Path, extensions: Sequence[str], excluded: Sequence[Path]) -> Set[str]:
        """Enumerate entries named '*.<ext>' anywhere under root.

        An excluded directory is skipped together with its contents, an
        excluded file is skipped, and excluded paths that don't exist are
        ignored.

        Args:
            root: Project root
            extensions: Resource extensions without leading dots
            excluded: Absolute paths to leave out

        Returns:
            Set of absolute path strings

        Raises:
            TraversalError: If root is not a readable directory
        """
        root = Path(root)
        if not root.is_dir():
            raise TraversalError(f"Not a directory: {root}")

        patterns = [f"*.{ext}" for ext in extensions]
        excluded_dirs = set()
        excluded_all = set()
        for path in excluded:
            if not path.exists():
                continue
            normalized = os.path.normpath(str(path))
            excluded_all.add(normalized)
            if path.is_dir():
                excluded_dirs.add(normalized)

        results = set()
        root_str = str(root)
        if _matches(root.name, patterns) and os.path.normpath(root_str) not in excluded_all:
            results.add(root_str)

        for dirpath, dirnames, filenames in os.walk(root_str, onerror=self._on_error):
            if os.path.normpath(dirpath) in excluded_dirs:
                dirnames[:] = []
                continue
            for name in dirnames + filenames:
                if not _matches(name, patterns):
                    continue
                full_path = os.path.join(dirpath, name)
                if os.path.normpath(full_path) in excluded_all:
                    continue
                results.add(full_path)

        return results

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def _on_error(self, error: OSError):
        self.warnings.append(f"Failed to get contents in path: {error.filename} ({error.strerror})")


class FindProcessFinder:
    """Find resource entries by running the system find(1) command."""

    def __init__(self, executable: str = "find"):
        self.executable = executable
        self.warnings: List[str] = []

    def build_command(self, root: Path, extensions: Sequence[str], excluded: Sequence[Path]) -> List[str]:
        """Build the find(1) argument list.

        Example for ['png', 'jpg'] and an excluded 'Pods' directory:
            find /proj ( -name *.png -or -name *.jpg ) -not -path /proj/Pods -not -path /proj/Pods/*
        """
        args = [self.executable, str(root)]
        for i, ext in enumerate(extensions):
            args.append("(" if i == 0 else "-or")
            args.extend(["-name", f"*.{ext}"])
        if extensions:
            args.append(")")

        for path in excluded:
            if not path.exists():
                continue
            args.extend(["-not", "-path", str(path)])
            if path.is_dir():
                args.extend(["-not", "-path", f"{path}/*"])

        return args

    def find(self, root: Path, extensions: Sequence[str], excluded: Sequence[Path]) -> Set[str]:
        """Run find(1) and collect its complete output.

        Raises:
            TraversalError: If the command can't be launched or prints nothing
                usable after failing
        """
        if not extensions:
            raise TraversalError("No resource extensions to search for")

        command = self.build_command(Path(root), extensions, excluded)
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise TraversalError(f"Resource finding failed: {e}") from e

        if result.returncode != 0:
            if not result.stdout:
                raise TraversalError(
                    f"Resource finding failed (exit code {result.returncode}): "
                    f"{result.stderr.strip()}"
                )
            # find(1) keeps going past unreadable directories
            for line in result.stderr.splitlines():
                self.warnings.append(line)

        return {line for line in result.stdout.split("\n") if line}

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)


def _matches(name: str, patterns: Sequence[str]) -> bool:
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in patterns)


def create_finder(name: str = "native") -> FileFinder:
    """Create a finder by its configuration name ('native' or 'find')."""
    if name == "find":
        return FindProcessFinder()
    if name == "native":
        return NativeFinder()
    raise ConfigurationError(f"Unknown finder: {name}")
