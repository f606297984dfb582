"""Safe resource deletion with trash and restoration capabilities."""
import shutil
import secrets
from dataclasses import dataclass, field
from pathlib import Path
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from resweep.analyzer.unused_resolver import FileInfo
from .trash_log import TrashLog


@dataclass
class DeletionReport:
    """Outcome of deleting a batch of unused resources."""

    deleted: List[FileInfo] = field(default_factory=list)
    failed: List[Tuple[FileInfo, Exception]] = field(default_factory=list)
    deletion_ids: List[str] = field(default_factory=list)


class SafeDeleter:
    """Move unused resources into a trash directory instead of removing them."""

    def __init__(self, trash_dir: str | Path = ".resweep_trash"):
        """Initialize safe deleter.

        Args:
            trash_dir: Path to trash directory (default: .resweep_trash)
        """
        self.trash_dir = Path(trash_dir)
        self.trash_dir.mkdir(parents=True, exist_ok=True)
        self.log = TrashLog(self.trash_dir)

    def delete(self, path: str | Path, reason: str = "unused", size: int = 0) -> str:
        """Move a file or directory to trash and record it in the ledger.

        Args:
            path: Resource to delete
            reason: Reason for deletion
            size: Size to record for the resource

        Returns:
            Deletion ID for restoration

        Raises:
            FileNotFoundError: If the path doesn't exist
            OSError: If the move fails
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        deletion_id = self._generate_deletion_id()
        deletion_dir = self.trash_dir / deletion_id
        deletion_dir.mkdir(parents=True, exist_ok=True)

        content_hash = self.log.calculate_hash(path)
        trash_path = deletion_dir / path.name

        shutil.move(str(path), str(trash_path))

        self.log.add_deletion(
            deletion_id=deletion_id,
            original_path=str(path.absolute()),
            trash_path=str(trash_path),
            reason=reason,
            content_hash=content_hash,
            size=size,
        )

        return deletion_id

    def delete_unused(self, files: Iterable[FileInfo], reason: str = "unused") -> DeletionReport:
        """Delete every unused resource, carrying on past failures.

        Args:
            files: Unused resources to delete

        Returns:
            DeletionReport partitioning deleted and failed resources
        """
        report = DeletionReport()

        for info in files:
            try:
                deletion_id = self.delete(info.path, reason, size=info.size)
            except OSError as e:
                report.failed.append((info, e))
                continue
            report.deleted.append(info)
            report.deletion_ids.append(deletion_id)

        return report

    def restore(self, deletion_id: str):
        """Restore a resource from trash to its original location.

        Args:
            deletion_id: Deletion identifier

        Raises:
            ValueError: If deletion ID not found
            OSError: If restoration fails
        """
        record = self.log.get_deletion(deletion_id)

        if not record:
            raise ValueError(f"Deletion ID not found: {deletion_id}")

        if record.get("restored", False):
            return

        trash_path = Path(record["trash_path"])
        original_path = Path(record["original_path"])

        if not trash_path.exists():
            raise OSError(f"File not found in trash: {trash_path}")
        if original_path.exists():
            raise OSError(f"Refusing to overwrite existing path: {original_path}")

        original_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(trash_path), str(original_path))

        self.log.mark_restored(deletion_id)

    def restore_all(self, deletion_ids: Iterable[Optional[str]]) -> int:
        """Restore multiple resources from trash.

        Every ID is attempted before any error is raised.

        Returns:
            Number of restored resources

        Raises:
            OSError: If any restoration fails
        """
        errors = []
        restored = 0

        for deletion_id in deletion_ids:
            if deletion_id is None:
                continue

            try:
                self.restore(deletion_id)
                restored += 1
            except (ValueError, OSError) as e:
                errors.append(f"{deletion_id}: {e}")

        if errors:
            raise OSError("Failed to restore some files:\n" + "\n".join(errors))

        return restored

    def get_trash_info(self) -> dict:
        all_deletions = self.log.get_all_deletions()
        unrestored = self.log.get_unrestored_deletions()

        return {
            "total_deletions": len(all_deletions),
            "unrestored_count": len(unrestored),
            "restored_count": len(all_deletions) - len(unrestored),
            "trash_dir": str(self.trash_dir),
            "unrestored_files": [d["original_path"] for d in unrestored],
            "unrestored_ids": [d["id"] for d in unrestored],
        }

    def _generate_deletion_id(self) -> str:
        """Generate unique deletion ID with timestamp.

        Returns:
            Deletion ID in format: YYYYMMDD_HHMMSS_randomhex
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"{timestamp}_{secrets.token_hex(3)}"
