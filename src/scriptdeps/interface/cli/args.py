from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the 'analyze' and 'copy' subcommands and translates parsed
namespaces into configuration overrides and copy options.
"""

import argparse
from typing import Any, Dict

from scriptdeps.core.report.markdown_parser import ExtractOptions
from scriptdeps.core.services.copier import CopyOptions
from scriptdeps.domain.constants import DEFAULT_CONFIG_FILE

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the scriptdeps CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="scriptdeps",
        description="Discover the files a collection of scripts reads, writes and executes.",
    )
    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- analyze ---
    analyze = sub.add_parser(
        "analyze",
        help="Build the dependency graph starting from the entry points.",
    )
    analyze.add_argument(
        "-e", "--entry",
        dest="entry",
        default=None,
        help="Single entry file overriding the configured entry points.",
    )
    analyze.add_argument(
        "-c", "--config",
        dest="config_path",
        default=DEFAULT_CONFIG_FILE,
        help=f"Configuration file (default: {DEFAULT_CONFIG_FILE}).",
    )
    analyze.add_argument(
        "-o", "--out-dir",
        dest="out_dir",
        default=None,
        help="Report directory (overrides 'outDir').",
    )
    analyze.add_argument(
        "--max-iterations",
        dest="max_iterations",
        type=int,
        default=None,
        help="Maximum number of files to process (overrides 'maxIterations').",
    )
    analyze.add_argument(
        "--compact-tree",
        dest="compact_tree",
        action="store_true",
        help="Draw shared subtrees once and mark repeats with [SEE ABOVE].",
    )
    _add_logging_flags(analyze)
    analyze.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run summary as JSON instead of the report.",
    )

    # --- copy ---
    copy = sub.add_parser(
        "copy",
        help="Copy the files listed in an analysis report or a file list.",
    )
    copy.add_argument(
        "-i", "--input",
        dest="input_path",
        required=True,
        help="Analysis report (.md) or text file with one path per line.",
    )
    copy.add_argument(
        "-o", "--out-dir",
        dest="out_dir",
        required=True,
        help="Destination directory.",
    )
    copy.add_argument(
        "-c", "--config",
        dest="config_path",
        default=DEFAULT_CONFIG_FILE,
        help=f"Configuration file (default: {DEFAULT_CONFIG_FILE}).",
    )
    copy.add_argument("--dry-run", action="store_true", help="Show what would be copied.")
    copy.add_argument("-v", "--verbose", action="store_true", help="Log every mapping decision.")
    copy.add_argument("--no-read", action="store_true", help="Skip '### Read Files' entries.")
    copy.add_argument("--no-write", action="store_true", help="Skip '### Written Files' entries.")
    copy.add_argument("--no-exec", action="store_true", help="Skip '### Executables' entries.")
    copy.add_argument("--no-binary", action="store_true", help="Skip '### Binaries' entries.")
    copy.add_argument(
        "--include-errors",
        action="store_true",
        help="Also copy files listed under '### Errors'.",
    )
    _add_logging_flags(copy)

    return p


def _add_logging_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file (rotated).",
    )

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate 'analyze' arguments into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Only the keys the user actually set.
    """
    overrides: Dict[str, Any] = {}
    if getattr(args, "out_dir", None):
        overrides["outDir"] = args.out_dir
    return overrides


def args_to_copy_options(args: argparse.Namespace) -> CopyOptions:
    """Translate 'copy' arguments into copy options."""
    extract = ExtractOptions(
        include_read_files=not args.no_read,
        include_write_files=not args.no_write,
        include_executables=not args.no_exec,
        include_binaries=not args.no_binary,
        exclude_errors=not args.include_errors,
    )
    return CopyOptions(extract=extract, dry_run=bool(args.dry_run), verbose=bool(args.verbose))
