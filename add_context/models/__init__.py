"""
Data Models Package

This package contains all Pydantic models used by add-context.
"""

from add_context.models.intelligence import (
    DEFAULT_VERSION,
    ExistingDocumentChoice,
    ExternalContextChoice,
    ExternalContextFile,
    Frontmatter,
    ListReviewChoice,
    NamingConventions,
    NavigationEntry,
    Priority,
    ProjectIntelligence,
    ReviewChoice,
    TechStack,
    ValidationIssue,
    ValidationResult,
    increment_version,
)
from add_context.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Record models
    "DEFAULT_VERSION",
    "ExistingDocumentChoice",
    "ExternalContextChoice",
    "ExternalContextFile",
    "Frontmatter",
    "ListReviewChoice",
    "NamingConventions",
    "NavigationEntry",
    "Priority",
    "ProjectIntelligence",
    "ReviewChoice",
    "TechStack",
    "ValidationIssue",
    "ValidationResult",
    "increment_version",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
