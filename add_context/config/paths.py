"""
Context location resolution.

Works out the project root and every file location the wizard touches,
for both the project-local and the global (--global) target.
"""

import os
import time
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict

from add_context.config.settings import PathSettings, get_settings


class ContextPaths(BaseModel):
    """Resolved locations for one wizard session."""

    model_config = ConfigDict(frozen=True)

    project_root: Path
    context_dir: Path
    document_path: Path
    navigation_path: Path
    tmp_dir: Path
    backup_root: Path
    backup_prefix: str = "project-intelligence"
    is_global: bool = False

    def new_backup_dir(self, timestamp_ms: Optional[int] = None) -> Path:
        """Timestamped backup directory for one Replace all."""
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        return self.backup_root / f"{self.backup_prefix}-{timestamp_ms}"


def find_project_root(
    start: Optional[Path] = None,
    markers: Optional[list[str]] = None,
) -> Path:
    """
    Walk up from `start` to the first directory holding a root marker.

    Falls back to `start` itself when no marker is found.
    """
    start = Path(start or Path.cwd()).resolve()
    markers = markers or [".git", "package.json"]

    directory = start
    while directory != directory.parent:
        if any((directory / marker).exists() for marker in markers):
            return directory
        directory = directory.parent
    return start


def resolve_context_paths(
    use_global: bool = False,
    cwd: Optional[Path] = None,
    settings: Optional[PathSettings] = None,
) -> ContextPaths:
    """
    Resolve all session paths.

    The backup root and the external-context holding directory always
    live under the project root, even for --global sessions.
    """
    settings = settings or get_settings().paths

    if settings.project_root:
        project_root = Path(settings.project_root).expanduser().resolve()
    else:
        project_root = find_project_root(cwd, settings.root_markers)

    if use_global:
        context_dir = Path(os.path.expanduser(settings.global_context_dir))
    else:
        context_dir = project_root / settings.context_subdir

    tmp_dir = project_root / settings.tmp_dirname

    return ContextPaths(
        project_root=project_root,
        context_dir=context_dir,
        document_path=context_dir / settings.document_filename,
        navigation_path=context_dir / settings.navigation_filename,
        tmp_dir=tmp_dir,
        backup_root=tmp_dir / settings.backup_dirname,
        backup_prefix=settings.backup_prefix,
        is_global=use_global,
    )
