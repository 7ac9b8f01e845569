from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the package via
subprocess. These tests validate argument parsing, exit codes, stream
output (stdout/stderr) and file system side effects of the commands that
do not need the LLM service.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"


def run_cli(args: List[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH to ensure the package
    is resolvable without being installed in site-packages.

    Args:
        args: List of command line arguments (excluding 'python -m scriptdeps').
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: The result object containing returncode, stdout, and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    cmd = [sys.executable, "-m", "scriptdeps"] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """
    Create a mapped production tree and its configuration.

    Structure:
    /prod
      main.sh
      conf/app.ini
    config.json   (/opt/app -> ./prod)
    """
    prod = tmp_path / "prod"
    (prod / "conf").mkdir(parents=True)
    (prod / "main.sh").write_text("#!/bin/sh\n", encoding="utf-8")
    (prod / "conf" / "app.ini").write_text("[app]\n", encoding="utf-8")

    config = {
        "pwd": "/opt/app",
        "entryPoints": [{"path": "main.sh"}],
        "pathMappings": [{"from": "/opt/app", "to": str(prod)}],
        "outDir": str(tmp_path / "reports"),
    }
    (tmp_path / "config.json").write_text(json.dumps(config), encoding="utf-8")
    return tmp_path


def test_help_lists_commands() -> None:
    """TC-01: '--help' exits cleanly and names both subcommands."""
    result = run_cli(["--help"])

    assert result.returncode == 0
    assert "analyze" in result.stdout
    assert "copy" in result.stdout


def test_analyze_missing_config(tmp_path: Path) -> None:
    """TC-02: A missing configuration file is an input error."""
    result = run_cli(["analyze", "-c", str(tmp_path / "absent.json")])

    assert result.returncode == 2
    assert "Configuration file not found" in result.stderr


def test_analyze_without_entry_points(tmp_path: Path) -> None:
    (tmp_path / "config.json").write_text(json.dumps({"pwd": "/"}), encoding="utf-8")

    result = run_cli(["analyze", "-c", "config.json"], cwd=tmp_path)

    assert result.returncode == 2
    assert "No entry points" in result.stderr


def test_copy_from_file_list(workspace: Path) -> None:
    """TC-03: Listed files are mirrored below the output directory."""
    listing = workspace / "files.txt"
    listing.write_text("/opt/app/main.sh\nconf/app.ini\n", encoding="utf-8")
    out = workspace / "collected"

    result = run_cli(["copy", "-i", str(listing), "-o", str(out), "-c", str(workspace / "config.json")])

    assert result.returncode == 0, result.stderr
    assert "Copied:      2" in result.stdout
    assert (out / "opt" / "app" / "main.sh").is_file()
    assert (out / "opt" / "app" / "conf" / "app.ini").is_file()


def test_copy_from_report_dry_run(workspace: Path) -> None:
    """TC-04: A dry run over a report counts files without writing them."""
    report = workspace / "analysis-20240101-000000.md"
    report.write_text(
        "## Overview\n### Read Files\n- **/opt/app/conf/app.ini**\n\n"
        "### Executables\n- **/opt/app/missing.sh**\n",
        encoding="utf-8",
    )
    out = workspace / "collected"

    result = run_cli([
        "copy", "-i", str(report), "-o", str(out),
        "-c", str(workspace / "config.json"), "--dry-run",
    ])

    assert result.returncode == 0, result.stderr
    assert "Missing:     1" in result.stdout
    assert "This was a dry run" in result.stdout
    assert not out.exists()


def test_copy_missing_input(workspace: Path) -> None:
    result = run_cli([
        "copy", "-i", str(workspace / "nope.md"), "-o", str(workspace / "out"),
        "-c", str(workspace / "config.json"),
    ])

    assert result.returncode == 2
    assert "Input file not found" in result.stderr
