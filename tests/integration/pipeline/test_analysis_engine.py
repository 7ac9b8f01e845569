from __future__ import annotations

"""
Integration tests for the analysis engine.

Runs complete analyses over a temporary 'production' tree reached through a
path mapping, with a scripted oracle standing in for the LLM service.
Verifies:
1. Transitive traversal, report content and report persistence.
2. Binary detection on real files.
3. Configuration failures reported as stage-tagged results.
"""

from pathlib import Path
from typing import Any, Dict

import pytest

from scriptdeps.core.pipeline.engine import run_analysis


def _reply(reads=(), writes=(), execs=(), errors=()) -> Dict[str, Any]:
    return {
        "readFiles": [{"path": p} for p in reads],
        "writeFiles": [{"path": p} for p in writes],
        "executeFiles": [{"path": p, "pwd": "/opt/app", "args": []} for p in execs],
        "errors": list(errors),
    }


@pytest.fixture
def prod_tree(tmp_path: Path) -> Path:
    root = tmp_path / "prod"
    (root / "bin").mkdir(parents=True)
    (root / "main.sh").write_text("./helper.pl\n./bin/tool\n", encoding="utf-8")
    (root / "helper.pl").write_text("open(F, '/opt/app/conf.ini');\n", encoding="utf-8")
    (root / "conf.ini").write_text("[x]\n", encoding="utf-8")
    (root / "bin" / "tool").write_bytes(b"\x7fELF\x02\x01\x01" + b"\x00" * 120)
    return root


@pytest.fixture
def config(prod_tree: Path, tmp_path: Path) -> Dict[str, Any]:
    return {
        "pwd": "/opt/app",
        "entryPoints": [{"path": "main.sh"}],
        "pathMappings": [{"from": "/opt/app", "to": str(prod_tree)}],
        "outDir": str(tmp_path / "reports"),
        "maxIterations": 50,
    }


@pytest.fixture
def oracle(scripted_oracle):
    return scripted_oracle({
        "/opt/app/main.sh": _reply(execs=["/opt/app/helper.pl", "/opt/app/bin/tool"]),
        "/opt/app/helper.pl": _reply(reads=["/opt/app/conf.ini"], writes=["/var/log/helper.log"]),
    })


def test_full_run_writes_report(config, oracle, tmp_path) -> None:
    """TC-01: The traversal follows executables and persists the report."""
    result = run_analysis(config, oracle=oracle, config_path="/etc/config.json")

    assert result.ok, result.error
    traversal = result.traversal
    assert traversal.roots == ["/opt/app/main.sh"]
    assert traversal.visited == ["/opt/app/main.sh", "/opt/app/helper.pl", "/opt/app/bin/tool"]
    assert traversal.analyzed == 2
    assert traversal.skipped_binaries == 1
    assert "/opt/app/bin/tool" not in traversal.graph

    assert [r.file_path for r in oracle.requests] == ["/opt/app/main.sh", "/opt/app/helper.pl"]
    assert oracle.requests[1].content == "open(F, '/opt/app/conf.ini');\n"

    report_path = Path(result.report_path)
    assert report_path.parent == tmp_path / "reports"
    content = report_path.read_text(encoding="utf-8")
    assert content == result.report
    assert "### Binaries\n- **/opt/app/bin/tool** (elf)" in content
    assert "[B] /opt/app/bin/tool" in content
    assert "[R] /opt/app/conf.ini" in content
    assert result.summary["config_warnings"] == []
    assert result.config_path == "/etc/config.json"


def test_entry_override_and_no_report(config, oracle) -> None:
    result = run_analysis(config, oracle=oracle, entry="helper.pl", write_report=False)

    assert result.ok
    assert result.report_path == ""
    assert result.traversal.roots == ["/opt/app/helper.pl"]
    assert result.traversal.iterations == 1


def test_iteration_cap_override_truncates(config, oracle) -> None:
    """TC-02: A cap smaller than the graph yields a partial result."""
    result = run_analysis(config, oracle=oracle, max_iterations=1, write_report=False)

    assert result.ok
    assert result.traversal.truncated
    assert result.summary["pending"] == 2
    assert "results are partial" in result.report


def test_oracle_failure_becomes_error_entry(config, scripted_oracle) -> None:
    oracle = scripted_oracle({"/opt/app/main.sh": RuntimeError("service unavailable")})

    result = run_analysis(config, oracle=oracle, write_report=False)

    assert result.ok
    assert result.traversal.graph == {"/opt/app/main.sh": []}
    assert "Oracle failure: service unavailable" in result.report


@pytest.mark.parametrize("override, message", [
    ({"entryPoints": []}, "No entry points"),
    ({"pathMappings": [{"from": "D:\\x", "to": "y"}]}, "Unix-style"),
    ({"pathMappings": [{"from": "/opt//app", "to": "./app"}]}, "canonical"),
    ({"maxIterations": 0}, "maxIterations"),
    ({"maxIterations": -5}, "maxIterations"),
])
def test_configuration_failures(config, oracle, override, message) -> None:
    """TC-03: Broken configuration aborts with stage 'configuration'."""
    config.update(override)

    result = run_analysis(config, oracle=oracle)

    assert not result.ok
    assert message in result.error
    assert result.summary["stage"] == "configuration"
    assert oracle.requests == []


def test_non_positive_cap_is_rejected(config, oracle) -> None:
    result = run_analysis(config, oracle=oracle, max_iterations=0)

    assert not result.ok
    assert result.summary["stage"] == "configuration"


def test_unwritable_report_directory(config, oracle, tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file", encoding="utf-8")

    result = run_analysis(config, oracle=oracle, out_dir=str(blocker / "reports"))

    assert not result.ok
    assert result.summary["stage"] == "report"
