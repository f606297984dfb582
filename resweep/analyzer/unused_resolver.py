"""Reconcile discovered resources with referenced names.

A resource key counts as used when it appears verbatim among the referenced
names, or when a referenced name looks like the key with its trailing number
built at runtime ("icon" + index for a resource named icon2).
"""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Set


DIGIT_RUN = re.compile(r"(\d+)")


def similar_pattern_with_number_index(used: str, key: str) -> bool:
    """Check whether `used` matches `key` around the key's last digit run.

    The key is split at its last run of digits into prefix and suffix:

        'icon2'     -> prefix 'icon', no suffix   -> used.startswith('icon')
        '3dots'     -> no prefix, suffix 'dots'   -> used.endswith('dots')
        'tab1_on'   -> prefix 'tab', suffix '_on' -> both must hold
        '42'        -> neither                    -> no match

    This is a heuristic: it only errs towards keeping a resource (false
    negatives), never towards reporting a used one.

    Args:
        used: A referenced name extracted from source
        key: Logical name of a resource

    Returns:
        True if `used` matches the key's prefix/suffix pattern
    """
    matches = list(DIGIT_RUN.finditer(key))
    if not matches:
        return False

    start, end = matches[-1].span(1)
    prefix = key[:start] if start != 0 else None
    suffix = key[end:] if end < len(key) else None

    if prefix is not None and suffix is not None:
        return used.startswith(prefix) and used.endswith(suffix)
    if prefix is not None:
        return used.startswith(prefix)
    if suffix is not None:
        return used.endswith(suffix)
    return False


def is_used(key: str, used: Set[str]) -> bool:
    """A key is used if referenced verbatim or matched by the numeric pattern."""
    if key in used:
        return True
    return any(similar_pattern_with_number_index(name, key) for name in used)


def filter_unused(resources: Dict[str, Set[str]], used: Set[str]) -> Set[str]:
    """Collect the paths of every resource key that is not used.

    Args:
        resources: Logical name -> paths sharing that name
        used: Referenced names extracted from source

    Returns:
        Set of paths whose logical name has no match
    """
    unused = set()
    for key, paths in resources.items():
        if not is_used(key, used):
            unused.update(paths)
    return unused


def path_size(path: str | Path) -> int:
    """Size of a file, or the recursive size of a directory.

    Entries whose name starts with '.' count as zero and hidden
    directories are not descended into.
    """
    path = Path(path)
    if path.name.startswith("."):
        return 0

    if path.is_dir():
        try:
            children = list(path.iterdir())
        except OSError:
            return 0
        return sum(path_size(child) for child in children)

    try:
        return path.stat().st_size
    except OSError:
        return 0


def readable_size(size: int) -> str:
    """Format a byte count for display ('512 B', '1.5 KB', '2.0 MB')."""
    if size < 1024:
        return f"{size} B"
    value = float(size)
    for unit in ("KB", "MB", "GB"):
        value /= 1024
        if value < 1024 or unit == "GB":
            return f"{value:.1f} {unit}"


@dataclass(frozen=True)
class FileInfo:
    """An unused resource on disk."""

    path: Path
    size: int
    file_name: str

    @classmethod
    def from_path(cls, path: str | Path) -> "FileInfo":
        path = Path(path)
        return cls(path=path, size=path_size(path), file_name=path.name)

    @property
    def readable_size(self) -> str:
        return readable_size(self.size)


def total_size(files: Iterable[FileInfo]) -> int:
    return sum(f.size for f in files)


def unused_file_infos(resources: Dict[str, Set[str]], used: Set[str]) -> List[FileInfo]:
    """Resolve unused resources into FileInfo entries sorted by path."""
    return [FileInfo.from_path(p) for p in sorted(filter_unused(resources, used))]
