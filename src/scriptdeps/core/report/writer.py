from __future__ import annotations

"""
Analysis Report Assembly and Persistence.

Builds the full markdown report of a traversal (summary, overview groups
and dependency tree) and writes it to a timestamped file in the output
directory.
"""

import logging
import os
from datetime import datetime
from typing import List, Optional

from scriptdeps.core.graph.renderer import render_dependency_tree
from scriptdeps.core.report.overview import to_markdown
from scriptdeps.domain.constants import REPORT_FILE_PREFIX, REPORT_TIMESTAMP_FORMAT
from scriptdeps.domain.graph_models import TraversalResult

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_report(traversal: TraversalResult, collapse_repeated: bool = False) -> str:
    """
    Assemble the markdown report.

    Args:
        traversal: Graph builder result.
        collapse_repeated: Draw shared subtrees once in the dependency graph.

    Returns:
        str: Complete report content.
    """
    lines: List[str] = [
        "# Analysis Result",
        "",
        "## Summary",
        f"- **Iterations**: {traversal.iterations}",
        f"- **Analyzed files**: {traversal.analyzed}",
        f"- **Truncated**: {_truncation_note(traversal)}",
        "",
        "## Overview",
        to_markdown(traversal, heading_level=3),
        "",
        "## Dependency Graph",
        render_dependency_tree(traversal.graph, traversal.roots, collapse_repeated),
    ]
    return "\n".join(lines)


def report_filename(now: Optional[datetime] = None) -> str:
    """Return 'analysis-YYYYMMDD-HHMMSS.md' for the given (or current) time."""
    stamp = (now or datetime.now()).strftime(REPORT_TIMESTAMP_FORMAT)
    return f"{REPORT_FILE_PREFIX}-{stamp}.md"


def write_report(out_dir: str, content: str, now: Optional[datetime] = None) -> str:
    """
    Persist the report in the output directory.

    Args:
        out_dir: Target directory, created when missing.
        content: Report content.
        now: Timestamp used for the filename.

    Returns:
        str: Absolute path of the written file.

    Raises:
        OSError: If the directory cannot be created or written.
    """
    os.makedirs(out_dir, exist_ok=True)
    out_file = os.path.abspath(os.path.join(out_dir, report_filename(now)))

    with open(out_file, "w", encoding="utf-8") as f:
        f.write(content)

    logger.info(f"Report written to {out_file}")
    return out_file

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _truncation_note(traversal: TraversalResult) -> str:
    if not traversal.truncated:
        return "no"
    return f"yes ({traversal.pending} unit(s) left in the worklist, results are partial)"
