from __future__ import annotations

"""
Dependency Graph Data Models.

Provides the worklist unit, the edge type and the traversal result produced
by the graph builder and consumed by the renderer and the report writer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from scriptdeps.domain.analysis_models import ExecutableEntry, FileEntry, FileError

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class FileAction(str, Enum):
    READ = "read"
    WRITE = "write"
    EXECUTE = "execute"


@dataclass(frozen=True)
class FileUnit:
    """
    One worklist entry: a file to analyze and the context it was found in.

    Attributes:
        pwd: Working directory the file was referenced from.
        path: Path exactly as written by the referencing file or config.
        args: Arguments the file is invoked with.
        file_type: Detected type for opaque binaries, None for scripts.
        description: Optional purpose reported by the oracle.
    """
    pwd: str
    path: str
    args: Tuple[str, ...] = ()
    file_type: Optional[str] = None
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileUnit":
        return cls(
            pwd=str(data.get("pwd", "")),
            path=str(data["path"]),
            args=tuple(str(a) for a in data.get("args") or ()),
        )


@dataclass(frozen=True)
class Edge:
    """
    A directed read/write/execute relation from an analyzed node.

    Attributes:
        path: Canonical absolute path of the referenced file.
        action: Kind of access.
        file_type: Binary type for execute edges pointing at binaries.
    """
    path: str
    action: FileAction
    file_type: Optional[str] = None


DependencyGraph = Dict[str, List[Edge]]

# -----------------------------------------------------------------------------
# TRAVERSAL RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TraversalResult:
    """
    Final artifact of a graph builder run.

    Attributes:
        graph: Adjacency map keyed by canonical path of each analyzed node.
        roots: Canonical paths of the entry points.
        read_files: Deduplicated read aggregate.
        write_files: Deduplicated write aggregate.
        execute_files: Deduplicated execute aggregate (binaries included).
        errors: Every error entry collected during the run.
        visited: Canonical paths dequeued and processed, in order.
        iterations: Number of dequeues performed.
        pending: Worklist size when the loop stopped.
        truncated: True when the iteration cap stopped a non-empty worklist.
        analyzed: Units handed to the oracle.
        skipped_binaries: Units skipped because they are binaries.
        skipped_duplicates: Units skipped because they were already visited.
    """
    graph: DependencyGraph
    roots: List[str]
    read_files: List[FileEntry] = field(default_factory=list)
    write_files: List[FileEntry] = field(default_factory=list)
    execute_files: List[ExecutableEntry] = field(default_factory=list)
    errors: List[FileError] = field(default_factory=list)
    visited: List[str] = field(default_factory=list)
    iterations: int = 0
    pending: int = 0
    truncated: bool = False
    analyzed: int = 0
    skipped_binaries: int = 0
    skipped_duplicates: int = 0

    def stats(self) -> Dict[str, Any]:
        """Return the counters as a plain dictionary for summaries."""
        return {
            "iterations": self.iterations,
            "analyzed": self.analyzed,
            "skipped_binaries": self.skipped_binaries,
            "skipped_duplicates": self.skipped_duplicates,
            "nodes": len(self.graph),
            "edges": sum(len(v) for v in self.graph.values()),
            "read_files": len(self.read_files),
            "write_files": len(self.write_files),
            "execute_files": len(self.execute_files),
            "errors": len(self.errors),
            "pending": self.pending,
            "truncated": self.truncated,
        }
