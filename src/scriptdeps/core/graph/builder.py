from __future__ import annotations

"""
Worklist-Driven Dependency Graph Builder.

Drives the traversal: pulls file units from a FIFO worklist, skips units
already visited or classified as binaries, hands the rest to the analysis
callable, records the resulting edges and enqueues every executable that
was discovered. The loop ends when the worklist drains or when the
iteration cap is hit, whichever happens first.
"""

import dataclasses
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Iterable, List, Optional, Set, TypeVar

from scriptdeps.core.paths.normalizer import resolve_canonical, to_canonical
from scriptdeps.domain.analysis_models import (
    AnalysisOutcome,
    ExecutableEntry,
    FileEntry,
    FileError,
)
from scriptdeps.domain.constants import DEFAULT_MAX_ITERATIONS
from scriptdeps.domain.graph_models import (
    DependencyGraph,
    Edge,
    FileAction,
    FileUnit,
    TraversalResult,
)

logger = logging.getLogger(__name__)

AnalyzeFn = Callable[[FileUnit], AnalysisOutcome]
ClassifyFn = Callable[[ExecutableEntry], Optional[str]]
ProgressFn = Callable[[int, int, FileUnit], None]

T = TypeVar("T", FileEntry, ExecutableEntry)


@dataclass
class _TraversalState:
    """Mutable bookkeeping owned by exactly one run."""
    worklist: Deque[FileUnit]
    graph: DependencyGraph = field(default_factory=dict)
    visited: Set[str] = field(default_factory=set)
    visit_order: List[str] = field(default_factory=list)
    read_files: List[FileEntry] = field(default_factory=list)
    write_files: List[FileEntry] = field(default_factory=list)
    execute_files: List[ExecutableEntry] = field(default_factory=list)
    errors: List[FileError] = field(default_factory=list)
    iterations: int = 0
    analyzed: int = 0
    skipped_binaries: int = 0
    skipped_duplicates: int = 0


class GraphBuilder:
    """
    Builds a deduplicated dependency graph from per-file analysis results.

    The builder itself is stateless between runs; every call to run() owns
    a fresh traversal state.

    Args:
        classify_type: Type sniffer for discovered executables. Returns the
                       binary type or None for text files.
        on_progress: Optional callback receiving (iteration, known_total, unit).
    """

    def __init__(
            self,
            classify_type: Optional[ClassifyFn] = None,
            on_progress: Optional[ProgressFn] = None,
    ) -> None:
        self._classify_type = classify_type
        self._on_progress = on_progress

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def run(
            self,
            entry_points: Iterable[FileUnit],
            analyze: AnalyzeFn,
            max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> TraversalResult:
        """
        Traverse the dependency graph breadth-first from the entry points.

        Args:
            entry_points: Initial worklist content.
            analyze: Callable turning a unit into an AnalysisOutcome.
            max_iterations: Maximum number of dequeues.

        Returns:
            TraversalResult: Graph, deduplicated aggregates and counters.
        """
        entries = list(entry_points)
        roots = _unique_strings(resolve_canonical(u.pwd, u.path) for u in entries)
        state = _TraversalState(worklist=deque(entries))

        while state.worklist and state.iterations < max_iterations:
            state.iterations += 1
            unit = state.worklist.popleft()
            self._report_progress(state, unit)
            self._process_unit(state, unit, analyze)

        truncated = bool(state.worklist)
        if truncated:
            logger.warning(
                f"Iteration cap of {max_iterations} reached with "
                f"{len(state.worklist)} unit(s) still queued. Results are partial."
            )

        return TraversalResult(
            graph=state.graph,
            roots=roots,
            read_files=unique_by_path(state.read_files),
            write_files=unique_by_path(state.write_files),
            execute_files=unique_by_path(state.execute_files),
            errors=list(state.errors),
            visited=list(state.visit_order),
            iterations=state.iterations,
            pending=len(state.worklist),
            truncated=truncated,
            analyzed=state.analyzed,
            skipped_binaries=state.skipped_binaries,
            skipped_duplicates=state.skipped_duplicates,
        )

    # -------------------------------------------------------------------------
    # WORKLIST STEP
    # -------------------------------------------------------------------------

    def _process_unit(self, state: _TraversalState, unit: FileUnit, analyze: AnalyzeFn) -> None:
        node = resolve_canonical(unit.pwd, unit.path)

        if node in state.visited:
            state.skipped_duplicates += 1
            logger.debug(f"Skipping already processed file {node}")
            return

        state.visited.add(node)
        state.visit_order.append(node)

        if unit.file_type:
            state.skipped_binaries += 1
            logger.info(f"Skipping binary file {node} with type {unit.file_type}")
            return

        state.analyzed += 1
        outcome = analyze(unit)

        if not outcome.ok or outcome.record is None:
            state.errors.extend(outcome.errors)
            state.graph[node] = []
            for err in outcome.errors:
                logger.error(f"Analysis failed for {node}: {err.error}")
            return

        record = outcome.record
        state.errors.extend(record.errors)

        edges: List[Edge] = []
        for entry in record.read_files:
            path = resolve_canonical(unit.pwd, entry.path)
            state.read_files.append(FileEntry(path, entry.description))
            edges.append(Edge(path, FileAction.READ))
        for entry in record.write_files:
            path = resolve_canonical(unit.pwd, entry.path)
            state.write_files.append(FileEntry(path, entry.description))
            edges.append(Edge(path, FileAction.WRITE))

        for entry in record.execute_files:
            exec_pwd = to_canonical(entry.pwd or unit.pwd)
            typed = self._with_type(
                ExecutableEntry(
                    path=resolve_canonical(exec_pwd, entry.path),
                    pwd=exec_pwd,
                    args=tuple(entry.args),
                    description=entry.description,
                )
            )
            state.execute_files.append(typed)
            edges.append(Edge(typed.path, FileAction.EXECUTE, typed.file_type))
            # Dedup happens at dequeue time; enqueue unconditionally
            state.worklist.append(
                FileUnit(
                    pwd=exec_pwd,
                    path=typed.path,
                    args=tuple(typed.args),
                    file_type=typed.file_type,
                    description=typed.description,
                )
            )

        state.graph[node] = _unique_edges(edges)

    def _with_type(self, entry: ExecutableEntry) -> ExecutableEntry:
        """Attach the sniffed file type; a failing sniffer means 'undetermined'."""
        if self._classify_type is None:
            return entry
        try:
            file_type = self._classify_type(entry)
        except OSError as e:
            logger.warning(f"Type detection failed for {entry.path}: {e}")
            file_type = None
        return dataclasses.replace(entry, file_type=file_type)

    def _report_progress(self, state: _TraversalState, unit: FileUnit) -> None:
        known_total = state.iterations + len(state.worklist)
        logger.info(f"> Processing {state.iterations} / {known_total}...")
        if self._on_progress:
            self._on_progress(state.iterations, known_total, unit)

# -----------------------------------------------------------------------------
# DEDUPLICATION HELPERS
# -----------------------------------------------------------------------------

def unique_by_path(items: Iterable[T]) -> List[T]:
    """
    Drop entries whose path was already seen, keeping the first occurrence.

    Args:
        items: Entries carrying a 'path' attribute.

    Returns:
        List: Stable, duplicate-free list.
    """
    seen: Set[str] = set()
    out: List[T] = []
    for item in items:
        if item.path in seen:
            continue
        seen.add(item.path)
        out.append(item)
    return out


def _unique_edges(edges: Iterable[Edge]) -> List[Edge]:
    seen = set()
    out: List[Edge] = []
    for edge in edges:
        key = (edge.path, edge.action)
        if key in seen:
            continue
        seen.add(key)
        out.append(edge)
    return out


def _unique_strings(values: Iterable[str]) -> List[str]:
    seen: Set[str] = set()
    out: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            out.append(value)
    return out
