"""
technical-domain.md and navigation.md renderer

Rendering is deterministic: the same record always produces the same
text, line for line. Optional sections are omitted entirely when their
field is empty, and the boilerplate footer is always present because
the validator looks for it.

Table cells escape "|" so values survive a parse. Pattern blocks use a
backtick fence longer than any backtick run inside the pattern.
"""

import re
from typing import Optional

from add_context.config.settings import DocumentSettings, get_settings
from add_context.models.intelligence import (
    Frontmatter,
    NavigationEntry,
    Priority,
    ProjectIntelligence,
)


CODEBASE_REFERENCES_HEADING = "## 📂 Codebase References"
BACKTICK_RUN_PATTERN = re.compile(r"`+")

NAVIGATION_ENTRIES = [
    NavigationEntry(
        name="technical-domain.md",
        description="Tech stack & patterns",
        priority=Priority.CRITICAL,
    ),
]


class DocumentRenderer:
    """Serializes a ProjectIntelligence record to markdown."""

    def __init__(self, settings: Optional[DocumentSettings] = None):
        self._settings = settings or get_settings().document

    def render(self, data: ProjectIntelligence) -> str:
        """Render technical-domain.md (no trailing newline)."""
        frontmatter = Frontmatter(
            context=self._settings.context_tag,
            priority=Priority.CRITICAL,
            version=data.version,
            updated=data.updated,
        )
        updated = data.updated.isoformat()

        lines = [
            frontmatter.to_comment(),
            "",
            "# Technical Domain",
            "",
            "**Purpose**: Tech stack, architecture, development patterns for this project.",
            f"**Last Updated**: {updated}",
            "",
            "---",
            "",
            "## Quick Reference",
            "**Update Triggers**: Tech stack changes | New patterns | Architecture decisions",
            "**Audience**: Developers, AI agents",
            "",
            "---",
            "",
            "## Primary Stack",
            "| Layer | Technology | Version | Rationale |",
            "|-------|-----------|---------|-----------|",
        ]

        if data.tech_stack:
            stack = data.tech_stack
            lines.append(f"| Framework | {escape_cell(stack.framework)} | | |")
            lines.append(f"| Language | {escape_cell(stack.language)} | | |")
            lines.append(f"| Database | {escape_cell(stack.database)} | | |")
            lines.append(f"| Styling | {escape_cell(stack.styling)} | | |")

        lines += ["", "---", "", "## Code Patterns"]

        if data.api_pattern:
            lines += self._pattern_block("### API Endpoint", data.api_pattern)
        if data.component_pattern:
            lines += self._pattern_block("### Component", data.component_pattern)

        lines += [
            "---",
            "",
            "## Naming Conventions",
            "| Type | Convention | Example |",
            "|------|-----------|---------|",
        ]

        if data.naming:
            naming = data.naming
            lines.append(f"| Files | {escape_cell(naming.files)} | |")
            lines.append(f"| Components | {escape_cell(naming.components)} | |")
            lines.append(f"| Functions | {escape_cell(naming.functions)} | |")
            lines.append(f"| Database | {escape_cell(naming.database)} | |")

        lines += ["", "---", "", "## Code Standards"]
        lines += [f"- {item}" for item in data.standards]

        lines += ["", "---", "", "## Security Requirements"]
        lines += [f"- {item}" for item in data.security]

        lines += [
            "",
            "---",
            "",
            CODEBASE_REFERENCES_HEADING,
            "**Implementation**: `src/` - Application source code",
            "**Config**: package.json, tsconfig.json",
            "",
            "---",
            "",
            "## Related Files",
            "- Business Domain (example: business-domain.md)",
            "- Decisions Log (example: decisions-log.md)",
        ]

        return "\n".join(lines)

    def _pattern_block(self, heading: str, pattern: str) -> list[str]:
        fence = code_fence_for(pattern)
        return [
            heading,
            f"{fence}{self._settings.code_language}",
            pattern,
            fence,
            "",
        ]

    def render_navigation(
        self,
        entries: Optional[list[NavigationEntry]] = None,
    ) -> str:
        """Render navigation.md from scratch."""
        entries = entries if entries is not None else NAVIGATION_ENTRIES
        lines = [
            "# Project Intelligence",
            "",
            "| File | Description | Priority |",
            "|------|-------------|----------|",
        ]
        for entry in entries:
            lines.append(f"| {entry.name} | {entry.description} | {entry.priority.value} |")
        return "\n".join(lines)


def escape_cell(value: str) -> str:
    return value.replace("|", "\\|")


def code_fence_for(pattern: str) -> str:
    """Backtick fence longer than any backtick run inside the pattern."""
    longest = max((len(run) for run in BACKTICK_RUN_PATTERN.findall(pattern)), default=0)
    return "`" * max(3, longest + 1)


def count_lines(content: str) -> int:
    return len(content.split("\n"))
