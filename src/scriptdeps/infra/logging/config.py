from __future__ import annotations

"""
Logging Configuration Model.

Describes how the logging subsystem of a run is set up: severity, console
output, optional rotating file, and the record formats of each sink.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Accepted level names and their numeric values
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable logging setup for one process.

    Attributes:
        level: Minimum severity captured by every sink.
        console: Emit records on stderr.
        log_file: Optional path of a rotating log file.
        max_bytes: Size threshold that triggers a file rollover.
        backup_count: Rolled-over files kept next to the active one.
        console_fmt: Record format on stderr.
        file_fmt: Record format in the log file.
        datefmt: Timestamp format in the log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_flags(cls, debug: bool = False, log_file: Optional[str] = None) -> "LoggingConfig":
        """Build the configuration matching the CLI switches."""
        return cls(level="DEBUG" if debug else "INFO", log_file=log_file or None)
