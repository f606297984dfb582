"""Trash ledger for restoring resources moved out of a project."""
import json
import hashlib
import os
from pathlib import Path
from datetime import datetime
from typing import List, Dict, Optional


class TrashLog:
    """Manage the JSON ledger of resources moved into the trash."""

    def __init__(self, trash_dir: str | Path):
        """Initialize ledger.

        Args:
            trash_dir: Path to trash directory
        """
        self.trash_dir = Path(trash_dir)
        self.log_path = self.trash_dir / "manifest.json"
        self._ensure_log_exists()

    def _ensure_log_exists(self):
        """Create ledger file if it doesn't exist."""
        self.trash_dir.mkdir(parents=True, exist_ok=True)

        if not self.log_path.exists():
            self._write_log({"version": "1.0", "deletions": []})

    def _read_log(self) -> Dict:
        try:
            with open(self.log_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError):
            return {"version": "1.0", "deletions": []}

    def _write_log(self, data: Dict):
        """Write ledger to disk atomically.

        Args:
            data: Ledger dictionary to write
        """
        temp_path = self.log_path.with_suffix('.tmp')
        with open(temp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        temp_path.replace(self.log_path)

    def add_deletion(self, deletion_id: str, original_path: str, trash_path: str,
                     reason: str, content_hash: str, size: int):
        """Add deletion record to ledger.

        Args:
            deletion_id: Unique deletion identifier
            original_path: Original resource path
            trash_path: Path in trash directory
            reason: Reason for deletion (e.g., 'unused')
            content_hash: SHA256 of the file or directory tree
            size: Reported size of the resource in bytes
        """
        log = self._read_log()

        log["deletions"].append({
            "id": deletion_id,
            "original_path": str(original_path),
            "trash_path": str(trash_path),
            "deleted_at": datetime.now().isoformat(),
            "reason": reason,
            "content_hash": content_hash,
            "size": size,
            "restored": False
        })
        self._write_log(log)

    def get_deletion(self, deletion_id: str) -> Optional[Dict]:
        for deletion in self._read_log()["deletions"]:
            if deletion["id"] == deletion_id:
                return deletion
        return None

    def mark_restored(self, deletion_id: str):
        log = self._read_log()

        for deletion in log["deletions"]:
            if deletion["id"] == deletion_id:
                deletion["restored"] = True
                break

        self._write_log(log)

    def get_all_deletions(self) -> List[Dict]:
        return self._read_log().get("deletions", [])

    def get_unrestored_deletions(self) -> List[Dict]:
        return [d for d in self.get_all_deletions() if not d.get("restored", False)]

    @staticmethod
    def calculate_hash(path: str | Path) -> str:
        """Calculate SHA256 of a file, or of every file in a directory tree.

        Directory hashes cover relative file names and contents in sorted
        order, so the same tree always hashes the same.

        Args:
            path: File or directory

        Returns:
            SHA256 hash as hex string
        """
        path = Path(path)
        sha256_hash = hashlib.sha256()

        if path.is_dir():
            files = []
            for dirpath, _, filenames in os.walk(path):
                files.extend(Path(dirpath) / name for name in filenames)
            for file_path in sorted(files):
                sha256_hash.update(file_path.relative_to(path).as_posix().encode('utf-8'))
                _update_from_file(sha256_hash, file_path)
        else:
            _update_from_file(sha256_hash, path)

        return sha256_hash.hexdigest()


def _update_from_file(digest, file_path: Path):
    with open(file_path, "rb") as f:
        for byte_block in iter(lambda: f.read(4096), b""):
            digest.update(byte_block)
