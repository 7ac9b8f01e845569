from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: environment and logging bootstrap,
configuration loading, dispatch to the analysis engine or the copy service,
and result rendering.

Exit codes: 0 success, 1 failure, 2 configuration or input error,
130 interrupted.
"""

import argparse
import json
import os
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from scriptdeps.core.analysis.oracle import credentials_configured
from scriptdeps.core.pipeline.engine import run_analysis
from scriptdeps.core.pipeline.validator import validate_config
from scriptdeps.core.services.copier import FileCopyService, format_stats
from scriptdeps.domain.analysis_models import AnalysisRecord, record_to_dict
from scriptdeps.domain.config import load_config
from scriptdeps.domain.errors import ConfigurationError
from scriptdeps.domain.run_models import AnalysisRunResult
from scriptdeps.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from scriptdeps.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INPUT_ERROR = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    load_dotenv()
    configure_logging(LoggingConfig.from_flags(debug=args.debug, log_file=args.log_file))

    try:
        if args.command == "analyze":
            return _run_analyze(args)
        return _run_copy(args)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    finally:
        shutdown_logging()

# -----------------------------------------------------------------------------
# SUBCOMMANDS
# -----------------------------------------------------------------------------

def _run_analyze(args: argparse.Namespace) -> int:
    try:
        raw_conf = load_config(args.config_path)
    except ConfigurationError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    if not isinstance(raw_conf, dict):
        print("ERROR: Configuration root must be a JSON object.", file=sys.stderr)
        return EXIT_INPUT_ERROR

    raw_conf.update(cli_args.args_to_overrides(args))

    if not credentials_configured():
        logger.warning(
            "No oracle credentials found. Set AWS_REGION, AWS_ACCESS_KEY_ID and "
            "AWS_SECRET_ACCESS_KEY for Bedrock, or ANTHROPIC_API_KEY."
        )

    try:
        result = run_analysis(
            raw_conf,
            entry=args.entry,
            max_iterations=args.max_iterations,
            config_path=os.path.abspath(args.config_path),
            collapse_repeated=args.compact_tree,
        )
    except Exception as e:
        logger.critical(f"Analysis failed: {e}", exc_info=True)
        print(f"ERROR: Analysis failed: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        if result.summary.get("stage") == "configuration":
            return EXIT_INPUT_ERROR
        return EXIT_FAILURE

    if args.json_output:
        print(json.dumps(_result_payload(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return EXIT_OK


def _run_copy(args: argparse.Namespace) -> int:
    try:
        cfg, _ = validate_config(load_config(args.config_path), strict=False)
    except ConfigurationError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    options = cli_args.args_to_copy_options(args)
    try:
        stats = FileCopyService(cfg).copy_files(args.input_path, args.out_dir, options)
    except FileNotFoundError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except OSError as e:
        logger.critical(f"Copy failed: {e}", exc_info=True)
        print(f"ERROR: Copy failed: {e}", file=sys.stderr)
        return EXIT_FAILURE

    for line in format_stats(stats, dry_run=options.dry_run):
        print(line)

    return EXIT_OK if stats.errors == 0 else EXIT_FAILURE

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _result_payload(result: AnalysisRunResult) -> Dict[str, Any]:
    """Build the machine-readable view of a successful run."""
    traversal = result.traversal
    payload: Dict[str, Any] = {
        "ok": result.ok,
        "error": result.error,
        "config_path": result.config_path,
        "report_path": result.report_path,
        "summary": result.summary,
    }
    if traversal is not None:
        payload["result"] = record_to_dict(
            AnalysisRecord(
                read_files=traversal.read_files,
                write_files=traversal.write_files,
                execute_files=traversal.execute_files,
                errors=traversal.errors,
            )
        )
        payload["roots"] = list(traversal.roots)
    return payload


def _print_human_summary(result: AnalysisRunResult) -> None:
    """Print the report followed by where it was saved."""
    print(result.report)
    print()

    summary = result.summary
    print(f"Iterations: {summary.get('iterations', 0)}")
    print(f"Analyzed files: {summary.get('analyzed', 0)}")
    print(f"Errors: {summary.get('errors', 0)}")
    if summary.get("truncated"):
        print(f"WARNING: iteration cap reached, {summary.get('pending', 0)} unit(s) not processed.")
    if result.report_path:
        print(f"Report saved to: {result.report_path}")


if __name__ == "__main__":
    sys.exit(main())
