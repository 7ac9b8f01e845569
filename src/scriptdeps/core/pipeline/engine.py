from __future__ import annotations

"""
Core Analysis Orchestration.

Coordinates one dependency analysis run:
1. Validates the configuration and builds the path mapper.
2. Resolves the entry points (configuration or explicit override).
3. Wires the oracle, file analyzer and type detector into a graph builder.
4. Traverses the dependency graph.
5. Renders and persists the markdown report.

Every collaborator is built here and passed explicitly; nothing is shared
between runs.
"""

import logging
from typing import Any, Dict, List, Optional

from scriptdeps.core.analysis.file_analyzer import FileAnalyzer
from scriptdeps.core.analysis.file_types import FileTypeDetector
from scriptdeps.core.analysis.oracle import AnalysisOracle, AnthropicOracle
from scriptdeps.core.analysis.tools import ReadFileTool
from scriptdeps.core.graph.builder import GraphBuilder, ProgressFn
from scriptdeps.core.paths.mapper import PathMapper
from scriptdeps.core.pipeline.validator import validate_config
from scriptdeps.core.report.writer import build_report, write_report as persist_report
from scriptdeps.domain.errors import ConfigurationError
from scriptdeps.domain.graph_models import FileUnit
from scriptdeps.domain.run_models import (
    AnalysisRunResult,
    create_error_result,
    create_success_result,
)
from scriptdeps.infra.fs import normalize_path

logger = logging.getLogger(__name__)


def run_analysis(
        config: Optional[Dict[str, Any]],
        *,
        oracle: Optional[AnalysisOracle] = None,
        entry: Optional[str] = None,
        out_dir: Optional[str] = None,
        max_iterations: Optional[int] = None,
        write_report: bool = True,
        config_path: str = "",
        on_progress: Optional[ProgressFn] = None,
        collapse_repeated: bool = False,
) -> AnalysisRunResult:
    """
    Execute a complete analysis run.

    Args:
        config: Raw configuration dictionary.
        oracle: Analysis backend. An AnthropicOracle is built when None.
        entry: Single entry path overriding the configured entry points;
               resolved against the configuration 'pwd'.
        out_dir: Report directory overriding 'outDir'.
        max_iterations: Iteration cap overriding 'maxIterations'.
        write_report: If False, the report is built but not written.
        config_path: Configuration file location, kept for the summary.
        on_progress: Optional per-dequeue progress callback.
        collapse_repeated: Draw shared subtrees once in the report tree.

    Returns:
        AnalysisRunResult: Status, report and traversal details.
    """
    logger.info("Analysis run started.")

    # -------------------------------------------------------------------------
    # 1) Configuration
    # -------------------------------------------------------------------------
    try:
        cfg, warnings = validate_config(config, strict=False)
        mapper = PathMapper.from_config(cfg)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return _failure(str(e), "configuration", config_path)

    final_out_dir = normalize_path(out_dir or cfg["outDir"], ".")
    cap = max_iterations if max_iterations is not None else cfg["maxIterations"]
    if cap <= 0:
        msg = f"Iteration cap must be positive, got {cap}."
        logger.error(msg)
        return _failure(msg, "configuration", config_path, final_out_dir)

    # -------------------------------------------------------------------------
    # 2) Entry points
    # -------------------------------------------------------------------------
    entries = _resolve_entry_points(cfg, entry)
    if not entries:
        msg = "No entry points configured. Add 'entryPoints' to the configuration or pass an entry path."
        logger.error(msg)
        return _failure(msg, "configuration", config_path, final_out_dir)

    logger.info(f"Starting from {len(entries)} entry point(s), iteration cap {cap}.")

    # -------------------------------------------------------------------------
    # 3) Collaborators
    # -------------------------------------------------------------------------
    if oracle is None:
        try:
            oracle = AnthropicOracle(ReadFileTool(mapper))
        except ImportError as e:
            logger.error(f"Oracle unavailable: {e}")
            return _failure(str(e), "oracle", config_path, final_out_dir)

    analyzer = FileAnalyzer(mapper, oracle)
    detector = FileTypeDetector(mapper)
    builder = GraphBuilder(classify_type=detector.detect, on_progress=on_progress)

    # -------------------------------------------------------------------------
    # 4) Traversal
    # -------------------------------------------------------------------------
    traversal = builder.run(entries, analyzer, max_iterations=cap)

    # -------------------------------------------------------------------------
    # 5) Report
    # -------------------------------------------------------------------------
    report = build_report(traversal, collapse_repeated=collapse_repeated)
    report_path = ""
    if write_report:
        try:
            report_path = persist_report(final_out_dir, report)
        except OSError as e:
            msg = f"Failed to write report to {final_out_dir}: {e}"
            logger.critical(msg)
            return _failure(msg, "report", config_path, final_out_dir)

    summary_extra = {
        "out_dir": final_out_dir,
        "report_path": report_path,
        "config_warnings": list(warnings),
        "max_iterations": cap,
    }

    logger.info(
        f"Analysis completed: {traversal.iterations} iteration(s), "
        f"{len(traversal.errors)} error(s)."
    )
    return create_success_result(
        traversal,
        report,
        final_out_dir,
        report_path=report_path,
        config_path=config_path,
        summary_extra=summary_extra,
    )


def _resolve_entry_points(cfg: Dict[str, Any], entry: Optional[str]) -> List[FileUnit]:
    if entry:
        return [FileUnit(pwd=cfg["pwd"], path=entry)]
    return [FileUnit.from_dict(e) for e in cfg["entryPoints"]]


def _failure(msg: str, stage: str, config_path: str, out_dir: str = "") -> AnalysisRunResult:
    """Build an error result tagged with the stage that aborted the run."""
    return create_error_result(
        msg,
        config_path=config_path,
        out_dir=out_dir,
        summary_extra={"stage": stage},
    )
