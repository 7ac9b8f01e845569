from __future__ import annotations

"""
Run Domain Data Models.

Defines the result object handed from the analysis engine to the interface
layer, together with the factory functions that build it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from scriptdeps.domain.graph_models import TraversalResult

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class AnalysisRunResult:
    """
    Unified result of a complete analysis run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        config_path: Configuration file the run was started from.
        out_dir: Directory the report was written to.
        report_path: Absolute path of the persisted report ('' if not written).
        report: Full markdown report content.
        traversal: Graph builder result, None when the run aborted early.
        summary: Execution statistics.
    """
    ok: bool
    error: str
    config_path: str = ""
    out_dir: str = ""
    report_path: str = ""
    report: str = ""
    traversal: Optional[TraversalResult] = None
    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        config_path: str = "",
        out_dir: str = "",
        summary_extra: Optional[Dict[str, Any]] = None
) -> AnalysisRunResult:
    """
    Create a failed run result.

    Args:
        error: Detailed error description.
        config_path: Configuration file, if known.
        out_dir: Resolved output directory, if known.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        AnalysisRunResult: An immutable error result object.
    """
    return AnalysisRunResult(
        ok=False,
        error=error,
        config_path=config_path,
        out_dir=out_dir,
        summary=summary_extra or {},
    )


def create_success_result(
        traversal: TraversalResult,
        report: str,
        out_dir: str,
        report_path: str = "",
        config_path: str = "",
        summary_extra: Optional[Dict[str, Any]] = None
) -> AnalysisRunResult:
    """
    Create a successful run result.

    Args:
        traversal: The graph builder output.
        report: Rendered markdown report.
        out_dir: Output directory.
        report_path: Path of the written report file.
        config_path: Configuration file the run was started from.
        summary_extra: Additional metadata merged into the summary.

    Returns:
        AnalysisRunResult: An immutable success result object.
    """
    summary = traversal.stats()
    summary.update(summary_extra or {})
    return AnalysisRunResult(
        ok=True,
        error="",
        config_path=config_path,
        out_dir=out_dir,
        report_path=report_path,
        report=report,
        traversal=traversal,
        summary=summary,
    )
