"""
Storage Services Package

Provides the abstract storage interface and the filesystem implementation.
"""

from add_context.services.storage.interface import (
    ContextStorageInterface,
    NotFoundError,
    StorageError,
)
from add_context.services.storage.filesystem import FileSystemContextStorage

__all__ = [
    # Interfaces
    "ContextStorageInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # Filesystem implementation
    "FileSystemContextStorage",
]
