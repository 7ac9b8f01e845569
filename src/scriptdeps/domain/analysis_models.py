from __future__ import annotations

"""
Analysis Domain Data Models.

Defines the structures exchanged between the oracle layer and the graph
builder: the per-file AnalysisRecord, its entry types, and the tagged
result objects used instead of exceptions for fallible steps.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# -----------------------------------------------------------------------------
# RECORD ENTRIES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileEntry:
    """
    A file read or written by the analyzed unit.

    Attributes:
        path: Referenced path as reported by the oracle.
        description: Optional human-readable purpose of the access.
    """
    path: str
    description: str = ""


@dataclass(frozen=True)
class ExecutableEntry:
    """
    A program, script or library the analyzed unit executes or imports.

    Attributes:
        path: Referenced path as reported by the oracle.
        pwd: Working directory the program runs under.
        args: Arguments the program is invoked with.
        description: Optional human-readable purpose.
        file_type: Detected binary type, None for text/script files.
    """
    path: str
    pwd: str = ""
    args: Tuple[str, ...] = ()
    description: str = ""
    file_type: Optional[str] = None


@dataclass(frozen=True)
class FileError:
    """
    A failure attached to a file (unreadable, unparseable, oracle error).
    """
    path: str
    pwd: str
    error: str


@dataclass(frozen=True)
class AnalysisRecord:
    """
    Read/write/execute references extracted from one analyzed unit.
    """
    read_files: List[FileEntry] = field(default_factory=list)
    write_files: List[FileEntry] = field(default_factory=list)
    execute_files: List[ExecutableEntry] = field(default_factory=list)
    errors: List[FileError] = field(default_factory=list)

# -----------------------------------------------------------------------------
# TAGGED RESULTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of turning a raw oracle reply into an AnalysisRecord.

    Attributes:
        ok: True when the reply held a schema-valid record.
        record: The parsed record when ok.
        error: Description of the failure when not ok.
        raw: Raw payload kept for diagnostics.
    """
    ok: bool
    record: Optional[AnalysisRecord] = None
    error: str = ""
    raw: Any = None


@dataclass(frozen=True)
class AnalysisOutcome:
    """
    Result of analyzing a single FileUnit as seen by the graph builder.

    A failed outcome carries only error entries and contributes no edges.
    """
    ok: bool
    record: Optional[AnalysisRecord] = None
    errors: List[FileError] = field(default_factory=list)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def parse_success(record: AnalysisRecord, raw: Any = None) -> ParseResult:
    return ParseResult(ok=True, record=record, raw=raw)


def parse_failure(error: str, raw: Any = None) -> ParseResult:
    return ParseResult(ok=False, error=error, raw=raw)


def outcome_success(record: AnalysisRecord) -> AnalysisOutcome:
    return AnalysisOutcome(ok=True, record=record)


def outcome_failure(path: str, pwd: str, error: str) -> AnalysisOutcome:
    """Create a failed outcome holding one error entry for the given unit."""
    return AnalysisOutcome(ok=False, errors=[FileError(path=path, pwd=pwd, error=error)])


def record_to_dict(record: AnalysisRecord) -> Dict[str, Any]:
    """Serialize a record using the wire key names of the oracle schema."""
    return {
        "readFiles": [_entry_dict(e) for e in record.read_files],
        "writeFiles": [_entry_dict(e) for e in record.write_files],
        "executeFiles": [
            {
                "path": e.path,
                "pwd": e.pwd,
                "args": list(e.args),
                **({"description": e.description} if e.description else {}),
                **({"fileType": e.file_type} if e.file_type else {}),
            }
            for e in record.execute_files
        ],
        "errors": [{"path": e.path, "pwd": e.pwd, "error": e.error} for e in record.errors],
    }


def _entry_dict(entry: FileEntry) -> Dict[str, str]:
    out = {"path": entry.path}
    if entry.description:
        out["description"] = entry.description
    return out
