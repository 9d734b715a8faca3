"""Rendered document validation."""

from add_context.validation.validator import DocumentValidator

__all__ = ["DocumentValidator"]
