"""
technical-domain.md parser

DESIGN DECISION: Parsing never fails. The document is both hand-edited
and machine-generated, so anything that deviates from the generated
layout is skipped and the affected field comes back empty.

The parser is a small state machine fed one line at a time:

    NONE ──"## Primary Stack"──────────▶ STACK_TABLE
    NONE ──"## Naming Conventions"─────▶ NAMING_TABLE
    NONE ──"## Code Standards"─────────▶ STANDARDS
    NONE ──"## Security Requirements"──▶ SECURITY
    any  ──"```"───────────────────────▶ CODE_BLOCK ──"```"──▶ previous state

Any other heading returns to NONE. "### API Endpoint" and "### Component"
arm a capture: the next code block that closes is stored as that pattern.

A block closes only on a bare fence at least as long as the one that
opened it, so patterns that contain their own ``` fences survive. A
block still open at the end of the document is discarded and its lines
are parsed as ordinary content.
"""

import re
from datetime import date
from enum import Enum
from typing import Optional

from add_context.models.intelligence import (
    DEFAULT_VERSION,
    NamingConventions,
    ProjectIntelligence,
    TechStack,
)


FRONTMATTER_PATTERN = re.compile(
    r"<!-- Context: .* \| Priority: .* \| Version: (.*?) \| Updated: (.*?) -->"
)
HEADING_PATTERN = re.compile(r"^#{1,6}\s")
SEPARATOR_CELL_PATTERN = re.compile(r"^:?-+:?$")
OPENING_FENCE_PATTERN = re.compile(r"^(`{3,})")
UNESCAPED_PIPE_PATTERN = re.compile(r"(?<!\\)\|")

STACK_HEADING = "## Primary Stack"
NAMING_HEADING = "## Naming Conventions"
STANDARDS_HEADING = "## Code Standards"
SECURITY_HEADING = "## Security Requirements"
API_HEADING = "### API Endpoint"
COMPONENT_HEADING = "### Component"


class ParserState(str, Enum):
    NONE = "none"
    STACK_TABLE = "stack_table"
    NAMING_TABLE = "naming_table"
    STANDARDS = "standards"
    SECURITY = "security"
    CODE_BLOCK = "code_block"


class PatternKind(str, Enum):
    API = "api"
    COMPONENT = "component"


SECTION_HEADINGS = [
    (STACK_HEADING, ParserState.STACK_TABLE),
    (NAMING_HEADING, ParserState.NAMING_TABLE),
    (STANDARDS_HEADING, ParserState.STANDARDS),
    (SECURITY_HEADING, ParserState.SECURITY),
]

PATTERN_HEADINGS = [
    (API_HEADING, PatternKind.API),
    (COMPONENT_HEADING, PatternKind.COMPONENT),
]


def split_table_row(line: str) -> list[str]:
    """
    Split a pipe-delimited row into trimmed cells.

    Only the empty pieces outside the outer pipes are dropped, so
    "| Framework | Next.js | | |" gives ["Framework", "Next.js", "", ""].
    Escaped pipes ("\\|") stay inside their cell.
    """
    cells = UNESCAPED_PIPE_PATTERN.split(line.strip())
    if cells and not cells[0].strip():
        cells = cells[1:]
    if cells and not cells[-1].strip():
        cells = cells[:-1]
    return [cell.strip().replace("\\|", "|") for cell in cells]


def is_separator_row(cells: list[str]) -> bool:
    filled = [cell for cell in cells if cell]
    return bool(filled) and all(SEPARATOR_CELL_PATTERN.match(cell) for cell in filled)


class TechnicalDomainParser:
    """
    Line-oriented parser for technical-domain.md.

    One instance parses one document; call parse() again to reuse it.
    """

    def __init__(self, today: Optional[date] = None):
        self._today = today
        self._reset()

    def _reset(self) -> None:
        self.state = ParserState.NONE
        self._resume_state = ParserState.NONE
        self._armed_pattern: Optional[PatternKind] = None
        self._fence = ""
        self._block_lines: list[str] = []

        self._stack: dict[str, str] = {}
        self._naming: dict[str, str] = {}
        self._patterns: dict[PatternKind, str] = {}
        self._standards: list[str] = []
        self._security: list[str] = []

    def parse(self, content: str) -> ProjectIntelligence:
        """Parse a full document into a best-effort record."""
        self._reset()
        for line in content.split("\n"):
            self.feed(line)
        self._recover_unclosed_block()
        return self._build(content)

    def feed(self, raw_line: str) -> None:
        """Consume one line and move the state machine."""
        if self.state == ParserState.CODE_BLOCK:
            if self._is_closing_fence(raw_line):
                self._close_code_block()
            else:
                self._block_lines.append(raw_line)
            return

        line = raw_line.strip()
        fence = OPENING_FENCE_PATTERN.match(line)

        if fence:
            self._resume_state = self.state
            self._fence = fence.group(1)
            self._block_lines = []
            self.state = ParserState.CODE_BLOCK
        elif HEADING_PATTERN.match(line):
            self._enter_heading(line)
        elif line.startswith("|") and self.state in (
            ParserState.STACK_TABLE,
            ParserState.NAMING_TABLE,
        ):
            self._read_table_row(line)
        elif line.startswith("- ") and self.state in (
            ParserState.STANDARDS,
            ParserState.SECURITY,
        ):
            item = line[2:].strip()
            if item:
                target = (
                    self._standards
                    if self.state == ParserState.STANDARDS
                    else self._security
                )
                target.append(item)

    def _enter_heading(self, line: str) -> None:
        self.state = ParserState.NONE
        self._armed_pattern = None

        for heading, state in SECTION_HEADINGS:
            if line.startswith(heading):
                self.state = state
                return

        for heading, kind in PATTERN_HEADINGS:
            if line.startswith(heading):
                self._armed_pattern = kind
                return

    def _is_closing_fence(self, raw_line: str) -> bool:
        """A bare backtick run at least as long as the opening fence."""
        line = raw_line.strip()
        return len(line) >= len(self._fence) and line == "`" * len(line)

    def _close_code_block(self) -> None:
        if self._armed_pattern is not None:
            # Later blocks for the same kind overwrite earlier ones
            self._patterns[self._armed_pattern] = "\n".join(self._block_lines)
            self._armed_pattern = None
        self._block_lines = []
        self.state = self._resume_state

    def _recover_unclosed_block(self) -> None:
        """
        Treat a fence that never closes as a stray line.

        Its capture is dropped and the swallowed lines are read again,
        so only the pattern it belonged to is lost.
        """
        while self.state == ParserState.CODE_BLOCK:
            pending = self._block_lines
            self._block_lines = []
            self._armed_pattern = None
            self.state = self._resume_state
            for line in pending:
                self.feed(line)

    def _read_table_row(self, line: str) -> None:
        cells = split_table_row(line)
        if len(cells) < 2 or is_separator_row(cells):
            return

        key = cells[0].lower()
        value = cells[1]
        if self.state == ParserState.STACK_TABLE:
            if key in TechStack.model_fields:
                self._stack[key] = value
        elif key in NamingConventions.model_fields:
            self._naming[key] = value

    def _build(self, content: str) -> ProjectIntelligence:
        today = self._today or date.today()
        version, updated = parse_frontmatter(content, today)

        return ProjectIntelligence(
            version=version,
            updated=updated,
            tech_stack=TechStack(**self._stack) if self._stack else None,
            api_pattern=self._patterns.get(PatternKind.API),
            component_pattern=self._patterns.get(PatternKind.COMPONENT),
            naming=NamingConventions(**self._naming) if self._naming else None,
            standards=list(self._standards),
            security=list(self._security),
        )


def parse_frontmatter(content: str, today: date) -> tuple[str, date]:
    """
    Extract (version, updated) from the frontmatter comment.

    Missing frontmatter gives ("1.0", today); an unreadable date gives today.
    """
    match = FRONTMATTER_PATTERN.search(content)
    if not match:
        return DEFAULT_VERSION, today

    version = match.group(1).strip() or DEFAULT_VERSION
    try:
        updated = date.fromisoformat(match.group(2).strip())
    except ValueError:
        updated = today
    return version, updated


def parse_technical_domain(
    content: str,
    today: Optional[date] = None,
) -> ProjectIntelligence:
    """Parse technical-domain.md text. Never raises."""
    return TechnicalDomainParser(today=today).parse(content)
