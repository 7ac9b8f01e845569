from __future__ import annotations

"""
Analysis Report Reader.

Recovers the file list from the overview groups of a previously written
analysis report, so the referenced files can be collected (see the copy
service).
"""

import os
import re
from dataclasses import dataclass
from typing import List, Optional

from scriptdeps.domain.constants import (
    SECTION_BINARIES,
    SECTION_ERRORS,
    SECTION_EXECUTABLES,
    SECTION_READ,
    SECTION_WRITE,
)

_BOLD_PATH_RX = re.compile(r"^\s*-\s*\*\*([^*]+)\*\*")

_SECTION_KINDS = (
    (SECTION_READ, "read"),
    (SECTION_WRITE, "write"),
    (SECTION_EXECUTABLES, "executable"),
    (SECTION_BINARIES, "binary"),
    (SECTION_ERRORS, "error"),
)


@dataclass(frozen=True)
class ExtractOptions:
    """
    Group filter for report extraction.

    Attributes:
        include_read_files: Keep '### Read Files' entries.
        include_write_files: Keep '### Written Files' entries.
        include_executables: Keep '### Executables' entries.
        include_binaries: Keep '### Binaries' entries.
        exclude_errors: Drop '### Errors' entries.
    """
    include_read_files: bool = True
    include_write_files: bool = True
    include_executables: bool = True
    include_binaries: bool = True
    exclude_errors: bool = True

    def accepts(self, kind: str) -> bool:
        return {
            "read": self.include_read_files,
            "write": self.include_write_files,
            "executable": self.include_executables,
            "binary": self.include_binaries,
            "error": not self.exclude_errors,
        }.get(kind, False)


def parse_file_path_from_line(line: str) -> Optional[str]:
    """Return the bold path of a bullet line, or None."""
    match = _BOLD_PATH_RX.match(line)
    if match:
        return match.group(1).strip()
    return None


def is_markdown_file(file_path: str) -> bool:
    return os.path.splitext(file_path)[1].lower() == ".md"


def extract_file_list_from_markdown(
        content: str,
        options: Optional[ExtractOptions] = None,
) -> List[str]:
    """
    Collect the paths listed in the overview groups of a report.

    Args:
        content: Markdown report content.
        options: Group filter; defaults keep everything except errors.

    Returns:
        List[str]: Paths in document order, duplicates removed.
    """
    opts = options or ExtractOptions()
    paths: List[str] = []
    seen = set()
    current: Optional[str] = None

    for line in content.splitlines():
        stripped = line.strip()

        if stripped.startswith("###"):
            current = _section_kind(stripped)
            continue
        if stripped.startswith("#"):
            current = None
            continue

        if current is None or not opts.accepts(current):
            continue

        path = parse_file_path_from_line(line)
        if path and path not in seen:
            seen.add(path)
            paths.append(path)

    return paths


def extract_file_list_from_markdown_file(
        file_path: str,
        options: Optional[ExtractOptions] = None,
) -> List[str]:
    """Read a report from disk and extract its file list."""
    with open(file_path, "r", encoding="utf-8") as f:
        content = f.read()
    return extract_file_list_from_markdown(content, options)


def _section_kind(heading: str) -> Optional[str]:
    for title, kind in _SECTION_KINDS:
        if title in heading:
            return kind
    return None
