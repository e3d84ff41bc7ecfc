"""
Staging backend interface.

Defines the filesystem operations the generator needs (reset a tree, copy a
payload, extract an archive entry, append and rewrite text) so the engine never
touches the filesystem directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class StagingBackend(ABC):
    """Abstract staging backend interface.

    Keys are ``/``-separated paths relative to the backend root.
    """

    @abstractmethod
    def reset(self, key: str) -> None:
        """Delete the directory at ``key`` with all its contents and recreate it empty.

        Args:
            key: Directory key to regenerate
        """
        ...

    @abstractmethod
    def copy_file(self, source: Path, key: str) -> str:
        """Copy a file into the backend.

        Args:
            source: File to copy
            key: Destination key

        Returns:
            The final storage key
        """
        ...

    @abstractmethod
    def extract_entry(self, archive: Path, entry: str, key: str) -> str:
        """Extract a single named entry of a zip archive.

        Args:
            archive: Zip archive to read
            entry: Entry name inside the archive
            key: Destination key

        Returns:
            The final storage key

        Raises:
            ArchiveEntryError: If the archive has no such entry.
        """
        ...

    @abstractmethod
    def append_text(self, key: str, content: str) -> str:
        """Append text, creating the file if needed.

        Returns:
            The final storage key
        """
        ...

    @abstractmethod
    def write_text(self, key: str, content: str) -> str:
        """Overwrite a file with text content.

        Returns:
            The final storage key
        """
        ...

    @abstractmethod
    def read_text(self, key: str) -> str:
        """Load text content.

        Raises:
            FileNotFoundError: If the key does not exist.
        """
        ...

    @abstractmethod
    def is_empty(self, key: str) -> bool:
        """Check whether a file is absent or has no content."""
        ...

    @abstractmethod
    def read_bytes(self, key: str) -> bytes:
        """Load raw content.

        Raises:
            FileNotFoundError: If the key does not exist.
        """
        ...
