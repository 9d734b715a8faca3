"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for context file
operations. This allows us to:
1. Keep the session flow free of path handling
2. Use an in-memory storage for testing if needed
3. Redirect the target (project or --global) without touching the flow

The interface is intentionally small: two files, a backup, nothing else.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from add_context.errors import ContextWizardError


class ContextStorageInterface(ABC):
    """
    Abstract interface for project intelligence storage.

    Any implementation must store exactly two artifacts: the
    technical-domain document and its navigation index.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location of the stored files."""
        pass

    @abstractmethod
    def document_exists(self) -> bool:
        """True if a technical-domain document is stored."""
        pass

    @abstractmethod
    def navigation_exists(self) -> bool:
        """True if a navigation index is stored."""
        pass

    @abstractmethod
    def read_document(self) -> str:
        """
        Read the stored document.

        Raises:
            NotFoundError: If no document is stored
            StorageError: If the read fails
        """
        pass

    @abstractmethod
    def write(self, document: str, navigation: str) -> list[Path]:
        """
        Write both artifacts.

        Args:
            document: Rendered technical-domain markdown
            navigation: Rendered navigation index

        Returns:
            Paths of the written files, document first

        Raises:
            StorageError: If a write fails
        """
        pass

    @abstractmethod
    def backup(self, backup_dir: Path) -> list[Path]:
        """
        Copy the stored artifacts byte for byte into `backup_dir`.

        Returns:
            Paths of the backup copies

        Raises:
            NotFoundError: If there is no document to back up
            StorageError: If the copy fails
        """
        pass


class StorageError(ContextWizardError):
    """Base exception for storage operations."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class NotFoundError(StorageError):
    """Expected file is not in storage."""
    pass
