"""
Configuration Management for add-context

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
File names, locations and document rules live in one place so the
parser, renderer, validator and storage agree on them.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PathSettings(BaseSettings):
    """Where documents are read from and written to."""

    model_config = SettingsConfigDict(
        env_prefix="ADD_CONTEXT_",
        extra="ignore"
    )

    project_root: Optional[str] = Field(
        default=None,
        description="Explicit project root (skips .git/package.json discovery)"
    )
    root_markers: list[str] = Field(
        default_factory=lambda: [".git", "package.json"],
        description="Entries that mark a directory as the project root"
    )

    # Target locations
    context_subdir: str = Field(
        default=".opencode/context/project-intelligence",
        description="Project-local context directory, relative to the root"
    )
    global_context_dir: str = Field(
        default="~/.config/opencode/context/project-intelligence",
        description="Per-user context directory used with --global"
    )

    # Produced files
    document_filename: str = Field(
        default="technical-domain.md",
        description="Primary project intelligence document"
    )
    navigation_filename: str = Field(
        default="navigation.md",
        description="Navigation index written next to the document"
    )

    # Scratch area
    tmp_dirname: str = Field(
        default=".tmp",
        description="Holding directory scanned for external context files"
    )
    backup_dirname: str = Field(
        default="backup",
        description="Backup directory inside the holding directory"
    )
    backup_prefix: str = Field(
        default="project-intelligence",
        description="Prefix of each timestamped backup directory"
    )


class DocumentSettings(BaseSettings):
    """Rules for the generated technical-domain document."""

    model_config = SettingsConfigDict(
        env_prefix="ADD_CONTEXT_DOC_",
        extra="ignore"
    )

    # MVI compliance
    max_lines: int = Field(
        default=200,
        ge=1,
        description="Maximum number of lines in a rendered document"
    )
    context_tag: str = Field(
        default="project-intelligence/technical",
        description="Context tag written to the frontmatter"
    )
    code_language: str = Field(
        default="typescript",
        description="Language tag on fenced pattern blocks"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="ADD_CONTEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    log_level: str = Field(
        default="WARNING",
        description="Level for structured logs written to stderr"
    )
    debug_mode: bool = Field(
        default=False,
        description="Print tracebacks for unexpected errors"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def paths(self) -> PathSettings:
        return PathSettings()

    @property
    def document(self) -> DocumentSettings:
        return DocumentSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
