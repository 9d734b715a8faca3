"""Interactive prompts and the six-question wizard."""

from add_context.wizard.collector import SKIP_SENTINEL, FieldCollector
from add_context.wizard.console import END_SENTINEL, ConsolePrompter

__all__ = [
    "END_SENTINEL",
    "SKIP_SENTINEL",
    "ConsolePrompter",
    "FieldCollector",
]
