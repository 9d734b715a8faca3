"""
Rendered Document Validation

DESIGN DECISION: Validation runs on the rendered text, in memory, before
anything is written. It is a hard gate: one violated rule and nothing
reaches disk.

Rules:
- MVI compliance: at most `max_lines` lines (200 by default)
- Frontmatter comment present
- Purpose and Last Updated metadata present
- Codebase references section present
- Priority is critical
- Version is dotted major.minor

IMPORTANT: Validation NEVER silently fixes issues.
It reports every violated rule.
"""

import re
from typing import Optional

from add_context.config.settings import DocumentSettings, get_settings
from add_context.document.renderer import count_lines
from add_context.models.intelligence import ValidationIssue, ValidationResult


FRONTMATTER_PATTERN = re.compile(
    r"<!-- Context: .* \| Priority: .* \| Version: .* \| Updated: .* -->"
)
VERSION_PATTERN = re.compile(r"Version: (\d+\.\d+)")

PURPOSE_MARKER = "**Purpose**:"
LAST_UPDATED_MARKER = "**Last Updated**:"
CODEBASE_REFS_MARKER = "📂 Codebase References"
REQUIRED_PRIORITY = "Priority: critical"


class DocumentValidator:
    """Checks a rendered technical-domain document against fixed rules."""

    def __init__(self, settings: Optional[DocumentSettings] = None):
        self._settings = settings or get_settings().document

    def validate(self, content: str) -> ValidationResult:
        """
        Run every rule and collect all violations.

        Args:
            content: Rendered technical-domain.md text

        Returns:
            ValidationResult listing every violated rule
        """
        issues = []
        line_count = count_lines(content)
        max_lines = self._settings.max_lines

        if line_count > max_lines:
            issues.append(ValidationIssue(
                rule="mvi_compliance",
                message=(
                    f"Exceeds {max_lines} lines (@mvi_compliance): "
                    f"Current {line_count} | Limit {max_lines}"
                ),
                suggested_fix="Trim patterns or move detail into separate context files",
            ))

        if not FRONTMATTER_PATTERN.search(content):
            issues.append(ValidationIssue(
                rule="frontmatter_required",
                message="Missing or invalid frontmatter (@frontmatter_required)",
            ))

        if PURPOSE_MARKER not in content:
            issues.append(ValidationIssue(
                rule="metadata_purpose",
                message="Missing metadata: Purpose",
            ))
        if LAST_UPDATED_MARKER not in content:
            issues.append(ValidationIssue(
                rule="metadata_last_updated",
                message="Missing metadata: Last Updated",
            ))

        if CODEBASE_REFS_MARKER not in content:
            issues.append(ValidationIssue(
                rule="codebase_refs",
                message="Missing codebase references (@codebase_refs)",
            ))

        if REQUIRED_PRIORITY not in content:
            issues.append(ValidationIssue(
                rule="priority_assignment",
                message="Priority should be critical for tech stack (@priority_assignment)",
            ))

        version_match = VERSION_PATTERN.search(content)
        if not version_match:
            issues.append(ValidationIssue(
                rule="version_tracking",
                message="Missing version (@version_tracking)",
                suggested_fix="Use a dotted major.minor version such as 1.0",
            ))

        return ValidationResult(
            is_valid=not any(issue.severity == "error" for issue in issues),
            line_count=line_count,
            max_lines=max_lines,
            version=version_match.group(1) if version_match else None,
            issues=issues,
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Checklist on success, list of violated rules on failure."""
        if result.is_valid:
            return "\n".join([
                f"✅ <{result.max_lines} lines (@mvi_compliance)",
                "✅ Has HTML frontmatter (@frontmatter_required)",
                "✅ Has metadata (Purpose, Last Updated)",
                "✅ Has codebase refs (@codebase_refs)",
                "✅ Priority assigned: critical (@priority_assignment)",
                f"✅ Version set: {result.version} (@version_tracking)",
            ])

        lines = ["Validation failed:"]
        for issue in result.issues:
            lines.append(f"  ✗ {issue.message}")
            if issue.suggested_fix:
                lines.append(f"    💡 {issue.suggested_fix}")
        return "\n".join(lines)
