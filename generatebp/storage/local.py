"""
Local filesystem staging backend.

Provides the filesystem implementation of the staging interface, rooted at the
module directory that holds Android.bp and libs/.
"""

from __future__ import annotations

import shutil
import zipfile
from pathlib import Path

from ..core.exceptions import ArchiveEntryError, ValidationError
from .interface import StagingBackend


class LocalStagingBackend(StagingBackend):
    """Local filesystem staging backend."""

    def __init__(self, base_path: Path) -> None:
        """Initialize local staging.

        Args:
            base_path: Base directory for all staging operations
        """
        self.base_path = base_path.resolve()

    def _ensure_parent(self, path: Path) -> None:
        """Ensure parent directory exists.

        Args:
            path: The file path whose parent directory should be created.
        """
        path.parent.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Get full filesystem path for a key.

        Args:
            key: The storage key to convert to a filesystem path.

        Returns:
            The resolved absolute path within the base directory.

        Raises:
            ValidationError: If the key escapes the base directory.
        """
        clean_key = key.lstrip("/\\")
        full_path = (self.base_path / clean_key).resolve()

        # Keys must stay inside base_path
        try:
            full_path.relative_to(self.base_path)
        except ValueError:
            raise ValidationError(
                message=f"Key escapes staging root: {key}",
                field_name="key",
            )

        return full_path

    def reset(self, key: str) -> None:
        full_path = self._get_full_path(key)
        if full_path == self.base_path:
            raise ValidationError(message="Refusing to reset the staging root", field_name="key")
        if full_path.exists():
            shutil.rmtree(full_path)
        full_path.mkdir(parents=True)

    def copy_file(self, source: Path, key: str) -> str:
        full_path = self._get_full_path(key)
        self._ensure_parent(full_path)
        shutil.copyfile(source, full_path)
        return key

    def extract_entry(self, archive: Path, entry: str, key: str) -> str:
        full_path = self._get_full_path(key)
        self._ensure_parent(full_path)

        with zipfile.ZipFile(archive, "r") as zf:
            try:
                data = zf.read(entry)
            except KeyError as e:
                raise ArchiveEntryError(
                    message="entry not found in archive",
                    archive_path=str(archive),
                    entry=entry,
                    cause=e,
                )

        full_path.write_bytes(data)
        return key

    def append_text(self, key: str, content: str) -> str:
        full_path = self._get_full_path(key)
        self._ensure_parent(full_path)

        with open(full_path, "a", encoding="utf-8") as f:
            f.write(content)

        return key

    def write_text(self, key: str, content: str) -> str:
        full_path = self._get_full_path(key)
        self._ensure_parent(full_path)
        full_path.write_text(content, encoding="utf-8")
        return key

    def read_text(self, key: str) -> str:
        full_path = self._get_full_path(key)

        if not full_path.exists():
            raise FileNotFoundError(f"Key not found: {key}")

        return full_path.read_text(encoding="utf-8")

    def is_empty(self, key: str) -> bool:
        full_path = self._get_full_path(key)
        return not full_path.exists() or full_path.stat().st_size == 0

    def read_bytes(self, key: str) -> bytes:
        full_path = self._get_full_path(key)

        if not full_path.exists():
            raise FileNotFoundError(f"Key not found: {key}")

        return full_path.read_bytes()
