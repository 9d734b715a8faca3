"""Configuration package."""

from add_context.config.paths import (
    ContextPaths,
    find_project_root,
    resolve_context_paths,
)
from add_context.config.settings import (
    AppSettings,
    DocumentSettings,
    PathSettings,
    Settings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "ContextPaths",
    "DocumentSettings",
    "PathSettings",
    "Settings",
    "find_project_root",
    "get_settings",
    "resolve_context_paths",
]
