from __future__ import annotations

"""
Unit tests for domain data models and their factories.
"""

from scriptdeps.domain.analysis_models import (
    AnalysisRecord,
    ExecutableEntry,
    FileEntry,
    FileError,
    outcome_failure,
    record_to_dict,
)
from scriptdeps.domain.graph_models import Edge, FileAction, FileUnit, TraversalResult
from scriptdeps.domain.path_models import PathMapping
from scriptdeps.domain.run_models import create_error_result, create_success_result


def test_path_mapping_from_dict() -> None:
    assert PathMapping.from_dict({"from": "/c/data", "to": "D:\\copy"}) == PathMapping("/c/data", "D:\\copy")


def test_file_unit_from_dict() -> None:
    unit = FileUnit.from_dict({"path": "run.sh", "args": ["a", 1]})

    assert unit == FileUnit(pwd="", path="run.sh", args=("a", "1"))


def test_outcome_failure_holds_one_error() -> None:
    outcome = outcome_failure("/a.sh", "/", "boom")

    assert not outcome.ok
    assert outcome.record is None
    assert outcome.errors == [FileError("/a.sh", "/", "boom")]


def test_record_to_dict_uses_wire_names() -> None:
    record = AnalysisRecord(
        read_files=[FileEntry("/a", "cfg")],
        execute_files=[ExecutableEntry(path="/bin/x", pwd="/", args=("-v",), file_type="elf")],
        errors=[FileError("/e", "/", "err")],
    )

    data = record_to_dict(record)

    assert data["readFiles"] == [{"path": "/a", "description": "cfg"}]
    assert data["writeFiles"] == []
    assert data["executeFiles"] == [{"path": "/bin/x", "pwd": "/", "args": ["-v"], "fileType": "elf"}]
    assert data["errors"] == [{"path": "/e", "pwd": "/", "error": "err"}]


def test_traversal_stats_counts_edges() -> None:
    traversal = TraversalResult(
        graph={"/a": [Edge("/b", FileAction.EXECUTE), Edge("/c", FileAction.READ)], "/b": []},
        roots=["/a"],
        iterations=2,
        analyzed=2,
    )

    stats = traversal.stats()

    assert stats["nodes"] == 2
    assert stats["edges"] == 2
    assert stats["truncated"] is False


def test_run_result_factories() -> None:
    traversal = TraversalResult(graph={}, roots=["/a"], iterations=1)

    ok = create_success_result(traversal, "# r", "/out", report_path="/out/r.md", summary_extra={"x": 1})
    failed = create_error_result("bad", config_path="/c.json", summary_extra={"stage": "configuration"})

    assert ok.ok and ok.summary["iterations"] == 1 and ok.summary["x"] == 1
    assert not failed.ok
    assert failed.summary == {"stage": "configuration"}
    assert failed.traversal is None
