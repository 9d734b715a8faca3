"""
Console prompter

All interaction with the user goes through this class, so the session
flow can be driven from a script in tests.

Three input modes:
- ask: one trimmed line
- read_list: lines until a blank line or the end sentinel, each trimmed
- read_blob: lines until the end sentinel only, kept verbatim
"""

import sys
from typing import Callable, Optional, TextIO

from add_context.errors import SessionCancelled


END_SENTINEL = "---END---"
DIVIDER = "━" * 80


class ConsolePrompter:
    """Line-based terminal prompter."""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output: Optional[TextIO] = None,
    ):
        self._input = input_func
        self._output = output or sys.stdout

    def echo(self, message: str = "") -> None:
        print(message, file=self._output)

    def divider(self) -> None:
        self.echo(DIVIDER)

    def header(self, title: str) -> None:
        self.divider()
        self.echo(title)
        self.divider()
        self.echo()

    def _read(self, prompt: str) -> str:
        try:
            return self._input(prompt)
        except EOFError:
            raise SessionCancelled("Input closed. Exiting.")
        except KeyboardInterrupt:
            raise SessionCancelled("Interrupted. Exiting.")

    def _read_until_eof(self) -> Optional[str]:
        """One raw line, or None when input is exhausted."""
        try:
            return self._input("")
        except EOFError:
            return None
        except KeyboardInterrupt:
            raise SessionCancelled("Interrupted. Exiting.")

    def ask(self, prompt: str) -> str:
        return self._read(prompt).strip()

    def ask_required(self, prompt: str) -> str:
        """Ask until a non-empty answer is given."""
        while True:
            answer = self.ask(prompt)
            if answer:
                return answer
            self.echo("  (an answer is required)")

    def confirm(self, prompt: str) -> bool:
        return self.ask(f"{prompt} [y/n]: ").lower() == "y"

    def read_list(self) -> list[str]:
        self.echo(f"(Enter a blank line or {END_SENTINEL} to finish)")
        items = []
        while True:
            line = self._read_until_eof()
            if line is None:
                break
            item = line.strip()
            if not item or item == END_SENTINEL:
                break
            items.append(item)
        return items

    def read_blob(self) -> str:
        self.echo(f"(Enter {END_SENTINEL} on its own line to finish)")
        lines = []
        while True:
            line = self._read_until_eof()
            if line is None or line.strip() == END_SENTINEL:
                break
            lines.append(line)
        return "\n".join(lines)
