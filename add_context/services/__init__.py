"""Services package."""

from add_context.services.external_context import (
    find_external_context_files,
    is_external_context_name,
)
from add_context.services.storage import (
    ContextStorageInterface,
    FileSystemContextStorage,
    NotFoundError,
    StorageError,
)

__all__ = [
    # External context
    "find_external_context_files",
    "is_external_context_name",
    # Storage services
    "ContextStorageInterface",
    "FileSystemContextStorage",
    "NotFoundError",
    "StorageError",
]
