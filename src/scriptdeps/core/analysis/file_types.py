from __future__ import annotations

"""
Executable Type Detection.

Classifies discovered executables as opaque binaries or analyzable text.
Known binary formats are recognized by their magic numbers; anything else
containing a null byte in its head is treated as an unknown binary.
"""

import logging
from typing import Optional

import filetype

from scriptdeps.core.paths.mapper import PathMapper
from scriptdeps.domain.analysis_models import ExecutableEntry
from scriptdeps.domain.constants import FILE_TYPE_HEADER_BYTES

logger = logging.getLogger(__name__)

UNKNOWN_BINARY_TYPE = "unknown"


class FileTypeDetector:
    """
    Sniff the type of executables through the path mapping.

    Args:
        mapper: Mapper translating production paths to local paths.
    """

    def __init__(self, mapper: PathMapper) -> None:
        self._mapper = mapper

    def detect(self, entry: ExecutableEntry) -> Optional[str]:
        """
        Determine the binary type of an executable.

        Args:
            entry: Executable as reported by the oracle.

        Returns:
            Optional[str]: Extension of the detected format, 'unknown' for
                           unrecognized binaries, None for text files or
                           unreadable paths.
        """
        local_path = self._mapper.resolve_local(entry.pwd or "/", entry.path)
        try:
            with open(local_path, "rb") as f:
                head = f.read(FILE_TYPE_HEADER_BYTES)
        except OSError as e:
            logger.warning(f"Could not determine file type for {entry.path} ({local_path}): {e}")
            return None

        return classify_bytes(head)


def classify_bytes(head: bytes) -> Optional[str]:
    """
    Classify the first bytes of a file.

    Args:
        head: Leading bytes of the file.

    Returns:
        Optional[str]: Format extension, 'unknown' or None for text.
    """
    if not head:
        return None

    kind = filetype.guess(head)
    if kind is not None:
        return kind.extension

    if b"\x00" in head:
        return UNKNOWN_BINARY_TYPE
    return None
