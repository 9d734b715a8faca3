"""
Core Data Models for add-context

These models define the schemas for the project intelligence record
and everything that flows around it:
1. The record itself (tech stack, patterns, naming, standards, security)
2. Menu choices offered by the interactive session
3. Validation results for rendered documents
4. External context files found in the holding directory

DESIGN DECISION: The parser is tolerant and the wizard is strict.
Models accept partially filled sub-records so hand-edited documents
can always be read back; completeness is enforced where answers are
collected, not here.
"""

from datetime import date
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


DEFAULT_VERSION = "1.0"


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Priority(str, Enum):
    """Context priority written to the frontmatter."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ExistingDocumentChoice(str, Enum):
    """
    Menu shown when a document already exists.

    Values are the answers typed at the prompt.
    """
    REVIEW = "1"    # Review and update each field group
    ADD = "2"       # Re-run the wizard, keeping existing values
    REPLACE = "3"   # Back up, then start fresh at 1.0
    CANCEL = "4"


class ExternalContextChoice(str, Enum):
    """Menu shown when stray context files sit in the holding directory."""
    CONTINUE = "1"
    HARVEST = "2"


class ReviewChoice(str, Enum):
    """Review options for a single-valued field group."""
    KEEP = "1"
    UPDATE = "2"
    REMOVE = "3"


class ListReviewChoice(str, Enum):
    """Review options for a list-valued field group."""
    KEEP = "1"
    ADD_NEW = "2"
    REMOVE_ALL = "3"


# =============================================================================
# PROJECT INTELLIGENCE RECORD
# =============================================================================

class TechStack(BaseModel):
    """The four layers of the primary stack table."""
    model_config = ConfigDict(str_strip_whitespace=True)

    framework: str = ""
    language: str = ""
    database: str = ""
    styling: str = ""

    def summary(self) -> str:
        return " + ".join([self.framework, self.language, self.database, self.styling])


class NamingConventions(BaseModel):
    """The four rows of the naming conventions table."""
    model_config = ConfigDict(str_strip_whitespace=True)

    files: str = ""
    components: str = ""
    functions: str = ""
    database: str = ""


def _trim_blank_lines(text: str) -> str:
    """Drop leading and trailing blank lines, keep indentation inside."""
    lines = text.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(line.rstrip() for line in lines)


class ProjectIntelligence(BaseModel):
    """
    The project intelligence record behind technical-domain.md.

    This is the single persisted entity. It is parsed from an existing
    document, edited by the session and rendered back to markdown.
    """
    model_config = ConfigDict(validate_assignment=True)

    version: str = Field(
        default=DEFAULT_VERSION,
        description="Dotted major.minor version"
    )
    updated: date = Field(
        default_factory=date.today,
        description="Date of the last successful write"
    )

    tech_stack: Optional[TechStack] = None
    api_pattern: Optional[str] = Field(
        default=None,
        description="Example API endpoint from the project"
    )
    component_pattern: Optional[str] = Field(
        default=None,
        description="Example component from the project"
    )
    naming: Optional[NamingConventions] = None

    # Ordered, never deduplicated
    standards: list[str] = Field(default_factory=list)
    security: list[str] = Field(default_factory=list)

    @field_validator('api_pattern', 'component_pattern')
    @classmethod
    def normalize_pattern(cls, v: Optional[str]) -> Optional[str]:
        """Empty blobs mean "no pattern"."""
        if v is None:
            return None
        v = _trim_blank_lines(v)
        return v or None

    @field_validator('standards', 'security')
    @classmethod
    def strip_items(cls, v: list[str]) -> list[str]:
        return [item.strip() for item in v if item.strip()]

    def bump_version(self, today: Optional[date] = None) -> None:
        """Apply one content update: next minor version, stamp today."""
        self.version = increment_version(self.version)
        self.updated = today or date.today()


def increment_version(version: str) -> str:
    """
    Return the next minor version.

    Unparseable components count as 0 and there is no carry:
    "1.4" -> "1.5", "bad" -> "0.1", "2.9" -> "2.10".
    """
    parts = version.split(".")

    def _to_int(value: str) -> int:
        try:
            return int(value.strip())
        except ValueError:
            return 0

    major = _to_int(parts[0]) if parts else 0
    minor = _to_int(parts[1]) if len(parts) > 1 else 0
    return f"{major}.{minor + 1}"


class Frontmatter(BaseModel):
    """Metadata carried by the leading HTML comment of a document."""

    context: str
    priority: Priority = Priority.CRITICAL
    version: str = DEFAULT_VERSION
    updated: date

    def to_comment(self) -> str:
        return (
            f"<!-- Context: {self.context} | Priority: {self.priority.value} "
            f"| Version: {self.version} | Updated: {self.updated.isoformat()} -->"
        )


class NavigationEntry(BaseModel):
    """One row of navigation.md."""

    name: str
    description: str
    priority: Priority


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single rule violated by a rendered document."""

    rule: str = Field(
        ...,
        description="Rule identifier (e.g. 'mvi_compliance', 'frontmatter_required')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a rendered document.

    Any error-level issue blocks the write.
    """

    is_valid: bool
    line_count: int = Field(ge=0)
    max_lines: int = Field(ge=1)
    version: Optional[str] = None
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")


# =============================================================================
# EXTERNAL CONTEXT
# =============================================================================

class ExternalContextFile(BaseModel):
    """A loosely named context file waiting in the holding directory."""

    name: str
    path: Path
    size_bytes: int = Field(ge=0)

    @property
    def human_size(self) -> str:
        kb = self.size_bytes / 1024
        if kb < 1:
            return f"{self.size_bytes} bytes"
        if kb < 1024:
            return f"{kb:.1f} KB"
        return f"{kb / 1024:.1f} MB"
