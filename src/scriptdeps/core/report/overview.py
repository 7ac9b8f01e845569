from __future__ import annotations

"""
Report Overview Sections.

Renders the aggregate read/write/execute/error lists of a traversal as
markdown bullet groups. Empty groups are omitted; entries are sorted by
path inside each group.
"""

from typing import List, Sequence, Union

from scriptdeps.domain.analysis_models import ExecutableEntry, FileEntry, FileError
from scriptdeps.domain.constants import (
    SECTION_BINARIES,
    SECTION_ERRORS,
    SECTION_EXECUTABLES,
    SECTION_READ,
    SECTION_WRITE,
)
from scriptdeps.domain.graph_models import TraversalResult

AnyEntry = Union[FileEntry, ExecutableEntry, FileError]


def to_markdown(traversal: TraversalResult, heading_level: int = 3) -> str:
    """
    Render the overview groups.

    Args:
        traversal: Graph builder result holding the aggregates.
        heading_level: Markdown heading depth of each group title.

    Returns:
        str: Groups separated by a blank line, '' when all are empty.
    """
    heading = "#" * heading_level
    executables = [e for e in traversal.execute_files if not e.file_type]
    binaries = [e for e in traversal.execute_files if e.file_type]

    groups = [
        (SECTION_READ, traversal.read_files),
        (SECTION_WRITE, traversal.write_files),
        (SECTION_EXECUTABLES, executables),
        (SECTION_BINARIES, binaries),
        (SECTION_ERRORS, traversal.errors),
    ]

    sections: List[str] = []
    for title, entries in groups:
        if entries:
            sections.append(f"{heading} {title}\n" + render_entries(entries))
    return "\n\n".join(sections)


def render_entries(entries: Sequence[AnyEntry]) -> str:
    """Render one group as bullet lines sorted by path."""
    return "\n".join(format_entry(e) for e in sorted(entries, key=lambda e: e.path))


def format_entry(entry: AnyEntry) -> str:
    """
    Format a single bullet.

    Layout: '- **<path>** (<type>) — <description or error> (args: ...)',
    optional parts dropped when empty.
    """
    line = f"- **{entry.path}**"

    if isinstance(entry, ExecutableEntry) and entry.file_type:
        line += f" ({entry.file_type})"

    if isinstance(entry, FileError):
        if entry.error:
            line += f" — {entry.error}"
    elif entry.description:
        line += f" — {entry.description}"

    if isinstance(entry, ExecutableEntry) and entry.args:
        line += f" (args: {' '.join(entry.args)})"

    return line
