"""
Filesystem Storage Implementation

Stores technical-domain.md and navigation.md in a context directory,
project-local or global.

TRADEOFFS:
- Writes are plain UTF-8 writes, not atomic renames. Validation runs in
  memory before anything is written, so a refused document never
  reaches disk.
- The context directory is created on first write only. Cancelled
  sessions leave the filesystem untouched.
"""

import shutil
from pathlib import Path

import structlog

from add_context.config.paths import ContextPaths
from add_context.services.storage.interface import (
    ContextStorageInterface,
    NotFoundError,
    StorageError,
)


logger = structlog.get_logger(__name__)


class FileSystemContextStorage(ContextStorageInterface):
    """Context storage backed by a directory on disk."""

    def __init__(self, paths: ContextPaths):
        self._paths = paths

    @property
    def paths(self) -> ContextPaths:
        return self._paths

    @property
    def location(self) -> str:
        return str(self._paths.context_dir)

    def document_exists(self) -> bool:
        return self._paths.document_path.is_file()

    def navigation_exists(self) -> bool:
        return self._paths.navigation_path.is_file()

    def read_document(self) -> str:
        path = self._paths.document_path
        if not path.is_file():
            raise NotFoundError(f"No document at {path}", path=path)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not read {path}: {e}", path=path) from e

    def write(self, document: str, navigation: str) -> list[Path]:
        context_dir = self._paths.context_dir
        written = []
        try:
            context_dir.mkdir(parents=True, exist_ok=True)
            for path, content in (
                (self._paths.document_path, document),
                (self._paths.navigation_path, navigation),
            ):
                path.write_text(content, encoding="utf-8")
                written.append(path)
        except OSError as e:
            raise StorageError(
                f"Could not write to {context_dir}: {e}",
                path=context_dir,
            ) from e

        logger.info("context_files_written", paths=[str(p) for p in written])
        return written

    def backup(self, backup_dir: Path) -> list[Path]:
        if not self.document_exists():
            raise NotFoundError(
                f"No document at {self._paths.document_path} to back up",
                path=self._paths.document_path,
            )

        sources = [self._paths.document_path]
        if self.navigation_exists():
            sources.append(self._paths.navigation_path)

        copies = []
        try:
            backup_dir.mkdir(parents=True, exist_ok=True)
            for source in sources:
                target = backup_dir / source.name
                shutil.copyfile(source, target)
                copies.append(target)
        except OSError as e:
            raise StorageError(
                f"Could not back up to {backup_dir}: {e}",
                path=backup_dir,
            ) from e

        logger.info("context_backup_created", backup_dir=str(backup_dir))
        return copies
