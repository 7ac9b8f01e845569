from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A scripted in-memory oracle replacing the LLM service.
3. Shared configuration dictionaries.
"""

import os
import sys
from typing import Any, Callable, Dict, List, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from scriptdeps.core.analysis.oracle.base import AnalysisOracle, OracleRequest  # noqa: E402
from scriptdeps.core.analysis.response_parser import parse_analysis_payload  # noqa: E402
from scriptdeps.domain.analysis_models import (  # noqa: E402
    AnalysisOutcome,
    AnalysisRecord,
    ExecutableEntry,
    FileEntry,
    ParseResult,
    outcome_success,
)
from scriptdeps.domain.graph_models import FileUnit  # noqa: E402


# -----------------------------------------------------------------------------
# Test Doubles
# -----------------------------------------------------------------------------
class ScriptedOracle(AnalysisOracle):
    """
    Oracle answering from a dict keyed by canonical file path.

    Unknown files get an empty record. A value that is an Exception instance
    is raised instead of answered.
    """

    def __init__(self, replies: Dict[str, Any]) -> None:
        self.replies = replies
        self.requests: List[OracleRequest] = []

    def analyze(self, request: OracleRequest) -> ParseResult:
        self.requests.append(request)
        reply = self.replies.get(request.file_path)
        if isinstance(reply, Exception):
            raise reply
        if reply is None:
            reply = {"readFiles": [], "writeFiles": [], "executeFiles": [], "errors": []}
        return parse_analysis_payload(reply)


def _make_record(
        reads: Optional[List[str]] = None,
        writes: Optional[List[str]] = None,
        execs: Optional[List[str]] = None,
        exec_pwd: str = "",
) -> AnalysisRecord:
    """Build a record from bare path lists."""
    return AnalysisRecord(
        read_files=[FileEntry(p) for p in reads or []],
        write_files=[FileEntry(p) for p in writes or []],
        execute_files=[ExecutableEntry(path=p, pwd=exec_pwd) for p in execs or []],
    )


def _graph_analyzer(graph: Dict[str, List[str]]) -> Callable[[FileUnit], AnalysisOutcome]:
    """
    Build an analyze callable from an adjacency list of absolute paths.

    Every listed child is reported as an executable run from '/'.
    """
    calls: List[str] = []

    def analyze(unit: FileUnit) -> AnalysisOutcome:
        calls.append(unit.path)
        return outcome_success(_make_record(execs=graph.get(unit.path, []), exec_pwd="/"))

    analyze.calls = calls  # type: ignore[attr-defined]
    return analyze


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def scripted_oracle() -> Callable[[Dict[str, Any]], ScriptedOracle]:
    """Factory fixture returning a ScriptedOracle for the given replies."""
    return ScriptedOracle


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid configuration dictionary for testing.

    Mirrors the JSON layout read by 'scriptdeps.domain.config.load_config'.
    """
    return {
        "pwd": "/opt/app",
        "entryPoints": [{"pwd": "/opt/app", "path": "main.sh", "args": []}],
        "pathMappings": [{"from": "/opt/app", "to": "./app"}],
        "outDir": "./output",
        "maxIterations": 100,
    }


@pytest.fixture
def make_record() -> Callable[..., AnalysisRecord]:
    """Factory fixture building an AnalysisRecord from path lists."""
    return _make_record


@pytest.fixture
def graph_analyzer() -> Callable[[Dict[str, List[str]]], Callable[[FileUnit], AnalysisOutcome]]:
    """Factory fixture turning an adjacency list into an analyze callable."""
    return _graph_analyzer
