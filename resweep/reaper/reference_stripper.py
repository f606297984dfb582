"""Remove dangling references to deleted resources from Xcode project files."""
from pathlib import Path
from typing import Iterable, List

from resweep.analyzer.unused_resolver import FileInfo
from resweep.utils.safe_console import warn


def find_project_files(project_root: str | Path) -> List[Path]:
    """Locate project.pbxproj inside every *.xcodeproj directly under the root."""
    project_root = Path(project_root)
    try:
        children = sorted(project_root.iterdir())
    except OSError as e:
        warn(f"Failed to get contents in path: {project_root} ({e.strerror or e})")
        return []

    return [
        child / "project.pbxproj"
        for child in children
        if child.name.endswith("xcodeproj") and (child / "project.pbxproj").is_file()
    ]


def strip_references(project_file: str | Path, deleted: Iterable[FileInfo]) -> bool:
    """Drop every line of a project file that mentions a deleted resource.

    A line is dropped when it contains the final name component of any
    deleted resource. A read or write failure is reported with a warning,
    and a failed rewrite is not rolled back.

    Args:
        project_file: Path to a project.pbxproj file
        deleted: Resources that were deleted

    Returns:
        True if the file was rewritten
    """
    project_file = Path(project_file)
    names = [info.file_name for info in deleted]

    try:
        content = project_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        warn(f"Failed to read {project_file}: {e}")
        return False

    kept = [line for line in content.splitlines() if not any(name in line for name in names)]

    try:
        project_file.write_text("\n".join(kept), encoding="utf-8")
    except OSError as e:
        warn(f"Failed to update {project_file}: {e}")
        return False

    return True
