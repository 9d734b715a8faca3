"""
Audit Models for add-context

Every significant step of a wizard session is recorded as an event:
which branch was taken, whether a backup was made, whether validation
passed and which files were written.

DESIGN DECISION: Events are correlated per session, so one run of the
wizard can be reconstructed from the log alone.
"""

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    One per stage of the session, plus failures.
    """
    # Session
    SESSION_STARTED = "session_started"
    SESSION_CANCELLED = "session_cancelled"

    # Detection
    EXTERNAL_CONTEXT_DETECTED = "external_context_detected"
    EXISTING_DOCUMENT_DETECTED = "existing_document_detected"
    MODE_SELECTED = "mode_selected"

    # Replace all
    BACKUP_CREATED = "backup_created"

    # Validation
    VALIDATION_PASSED = "validation_passed"
    VALIDATION_FAILED = "validation_failed"

    # Persistence
    DOCUMENTS_WRITTEN = "documents_written"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - all events of one wizard session
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by every event of one session"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user answer?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.mode_selected("review", correlation_id)
        event = AuditEventBuilder.documents_written(paths, "1.3", correlation_id)
    """

    @staticmethod
    def session_started(
        mode: str,
        context_dir: Path,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_STARTED,
            correlation_id=correlation_id,
            description=f"Session started: {mode}",
            details={
                "mode": mode,
                "context_dir": str(context_dir),
            },
            is_user_action=True,
        )

    @staticmethod
    def session_cancelled(
        reason: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_CANCELLED,
            correlation_id=correlation_id,
            description=f"Session cancelled: {reason}",
            details={"reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def external_context_detected(
        files: list[str],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXTERNAL_CONTEXT_DETECTED,
            correlation_id=correlation_id,
            description=f"Found {len(files)} external context file(s)",
            details={"files": files},
        )

    @staticmethod
    def existing_document_detected(
        version: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXISTING_DOCUMENT_DETECTED,
            correlation_id=correlation_id,
            description=f"Existing document at version {version}",
            details={"version": version},
        )

    @staticmethod
    def mode_selected(
        mode: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MODE_SELECTED,
            correlation_id=correlation_id,
            description=f"Update mode selected: {mode}",
            details={"mode": mode},
            is_user_action=True,
        )

    @staticmethod
    def backup_created(
        backup_dir: Path,
        files: list[str],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BACKUP_CREATED,
            correlation_id=correlation_id,
            description=f"Backup created at {backup_dir}",
            details={
                "backup_dir": str(backup_dir),
                "files": files,
            },
        )

    @staticmethod
    def validation_passed(
        version: str,
        line_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_PASSED,
            correlation_id=correlation_id,
            description=f"Validation passed ({line_count} lines)",
            details={
                "version": version,
                "line_count": line_count,
            },
        )

    @staticmethod
    def validation_failed(
        issues: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Validation failed with {len(issues)} issues",
            details={"issues": issues},
        )

    @staticmethod
    def documents_written(
        paths: list[Path],
        version: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DOCUMENTS_WRITTEN,
            correlation_id=correlation_id,
            description=f"Wrote {len(paths)} file(s) at version {version}",
            details={
                "paths": [str(p) for p in paths],
                "version": version,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
