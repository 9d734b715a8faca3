"""
Audit Logger

DESIGN DECISION: Every significant step of a session is logged.
This provides:
1. Traceability of which branch a session took
2. Debugging capability when a write is refused
3. A record of backups made before Replace all

The audit logger:
- Writes structured JSON to stderr, never to the prompt stream
- Supports correlation IDs to trace one session end to end
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from uuid import UUID, uuid4

import structlog

from add_context.models.audit import AuditEvent, AuditEventBuilder


def configure_logging(level: str = "WARNING") -> None:
    """
    Configure structlog and the stdlib root logger.

    Called once by the CLI before a session starts.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Events are logged locally through structlog, bound to the session's
    correlation ID.
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        self.correlation_id = correlation_id or create_correlation_id()
        self._logger = structlog.get_logger("add_context.audit")
        self.events: list[AuditEvent] = []

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at a level matching its severity."""
        self.events.append(event)
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_session_started(self, mode: str, context_dir: Path) -> None:
        self.log(AuditEventBuilder.session_started(
            mode=mode,
            context_dir=context_dir,
            correlation_id=self.correlation_id,
        ))

    def log_session_cancelled(self, reason: str) -> None:
        self.log(AuditEventBuilder.session_cancelled(
            reason=reason,
            correlation_id=self.correlation_id,
        ))

    def log_external_context_detected(self, files: list[str]) -> None:
        self.log(AuditEventBuilder.external_context_detected(
            files=files,
            correlation_id=self.correlation_id,
        ))

    def log_existing_document_detected(self, version: str) -> None:
        self.log(AuditEventBuilder.existing_document_detected(
            version=version,
            correlation_id=self.correlation_id,
        ))

    def log_mode_selected(self, mode: str) -> None:
        self.log(AuditEventBuilder.mode_selected(
            mode=mode,
            correlation_id=self.correlation_id,
        ))

    def log_backup_created(self, backup_dir: Path, files: list[str]) -> None:
        self.log(AuditEventBuilder.backup_created(
            backup_dir=backup_dir,
            files=files,
            correlation_id=self.correlation_id,
        ))

    def log_validation_passed(self, version: str, line_count: int) -> None:
        self.log(AuditEventBuilder.validation_passed(
            version=version,
            line_count=line_count,
            correlation_id=self.correlation_id,
        ))

    def log_validation_failed(self, issues: list[dict]) -> None:
        self.log(AuditEventBuilder.validation_failed(
            issues=issues,
            correlation_id=self.correlation_id,
        ))

    def log_documents_written(self, paths: list[Path], version: str) -> None:
        self.log(AuditEventBuilder.documents_written(
            paths=paths,
            version=version,
            correlation_id=self.correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=self.correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    One per wizard session.
    """
    return uuid4()
