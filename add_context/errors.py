"""
Exceptions raised during a wizard session.

Each maps to one exit path in the CLI: cancellations exit 0,
everything else exits 1.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from add_context.models.intelligence import ValidationResult


class ContextWizardError(Exception):
    """Base exception for add-context."""
    pass


class SessionCancelled(ContextWizardError):
    """User declined, chose Cancel, or closed the input."""

    def __init__(self, message: str = "Exiting."):
        super().__init__(message)
        self.message = message


class InvalidChoiceError(ContextWizardError):
    """Answer outside the options offered by a menu."""

    def __init__(self, choice: str):
        super().__init__(f"Invalid choice: {choice!r}. Exiting.")
        self.choice = choice


class DocumentNotFoundError(ContextWizardError):
    """An update mode that needs an existing document found none."""
    pass


class ValidationFailedError(ContextWizardError):
    """The rendered document broke one or more structural rules."""

    def __init__(self, result: "ValidationResult"):
        super().__init__(
            f"Validation failed with {result.error_count} issue(s). No files written."
        )
        self.result = result
