"""
External context scanner.

Looks in the holding directory (.tmp/) for loosely named markdown files
that a harvest should turn into permanent context. Read only.
"""

from pathlib import Path

from add_context.models.intelligence import ExternalContextFile


DOCUMENT_EXTENSION = ".md"


def is_external_context_name(name: str) -> bool:
    """external-*.md, context-*.md or *-context*.md"""
    if not name.endswith(DOCUMENT_EXTENSION):
        return False
    return (
        name.startswith("external-")
        or name.startswith("context-")
        or "-context" in name
    )


def find_external_context_files(tmp_dir: Path) -> list[ExternalContextFile]:
    """
    List external context files in `tmp_dir`, sorted by name.

    A missing directory simply yields no files.
    """
    if not tmp_dir.is_dir():
        return []

    found = []
    for entry in sorted(tmp_dir.iterdir()):
        if entry.is_file() and is_external_context_name(entry.name):
            found.append(ExternalContextFile(
                name=entry.name,
                path=entry,
                size_bytes=entry.stat().st_size,
            ))
    return found
