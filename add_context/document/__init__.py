"""Parse and render technical-domain.md."""

from add_context.document.parser import (
    ParserState,
    TechnicalDomainParser,
    parse_technical_domain,
)
from add_context.document.renderer import (
    NAVIGATION_ENTRIES,
    DocumentRenderer,
    count_lines,
)

__all__ = [
    "NAVIGATION_ENTRIES",
    "DocumentRenderer",
    "ParserState",
    "TechnicalDomainParser",
    "count_lines",
    "parse_technical_domain",
]
