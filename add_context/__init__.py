"""
add-context - Project Intelligence Wizard

Captures a project's tech stack, code patterns, naming conventions,
standards and security rules into technical-domain.md, so coding
agents follow the project's own conventions.

DESIGN PRINCIPLES:
1. Wizard asks → User previews → User confirms → System writes
2. Validation is a hard gate before any write
3. Replace all backs up first
4. Every step is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "add-context Team"
