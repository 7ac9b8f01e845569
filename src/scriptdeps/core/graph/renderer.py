from __future__ import annotations

"""
Dependency Tree Renderer.

Converts the adjacency map produced by the graph builder into a visual
tree. Each root becomes its own tree; children are sorted by path and drawn
with standard connectors (├──, └──). A node that already appears among its
own ancestors is printed with a cycle marker and not expanded again.

Shared subtrees are expanded under every parent by default. With
`collapse_repeated` a subtree already drawn in the same tree is printed
once; later occurrences carry a back-reference marker instead.
"""

from typing import FrozenSet, Iterable, List, Optional, Set

from scriptdeps.domain.constants import CIRCULAR_MARKER, SEE_ABOVE_MARKER, TREE_MARKERS
from scriptdeps.domain.graph_models import DependencyGraph, Edge, FileAction

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_dependency_tree(
        graph: DependencyGraph,
        roots: Iterable[str],
        collapse_repeated: bool = False,
) -> str:
    """
    Render the dependency graph as a forest of text trees.

    Args:
        graph: Adjacency map keyed by canonical node path.
        roots: Paths to render as top-level trees.
        collapse_repeated: Draw each subtree once per tree and mark later
                           occurrences with '[SEE ABOVE]'.

    Returns:
        str: Trees separated by a blank line.
    """
    blocks = [
        "\n".join(render_tree_lines(graph, root, collapse_repeated))
        for root in sorted(set(roots))
    ]
    return "\n\n".join(blocks)


def render_tree_lines(
        graph: DependencyGraph,
        root: str,
        collapse_repeated: bool = False,
) -> List[str]:
    """
    Render a single root and its transitive dependencies.

    Args:
        graph: Adjacency map keyed by canonical node path.
        root: Path of the top-level node.
        collapse_repeated: Draw each subtree only once in this tree.

    Returns:
        List[str]: Visual lines of the tree.
    """
    lines: List[str] = [f"{marker_for(FileAction.EXECUTE)} {root}"]
    expanded: Optional[Set[str]] = {root} if collapse_repeated else None
    _render_children(graph, root, "", frozenset({root}), lines, expanded)
    return lines


def marker_for(action: FileAction, file_type: Optional[str] = None) -> str:
    """Return the kind marker for an edge: read, write, binary or execute."""
    if action == FileAction.READ:
        return TREE_MARKERS["read"]
    if action == FileAction.WRITE:
        return TREE_MARKERS["write"]
    if file_type:
        return TREE_MARKERS["binary"]
    return TREE_MARKERS["execute"]

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _render_children(
        graph: DependencyGraph,
        node: str,
        prefix: str,
        ancestors: FrozenSet[str],
        lines: List[str],
        expanded: Optional[Set[str]] = None,
) -> None:
    """
    Recursively append the children of a node.

    The ancestor set is immutable and extended per branch, so sibling
    subtrees never observe each other's path. The optional expanded set is
    shared across the whole tree and only holds nodes with children.
    """
    children = sorted(graph.get(node, []), key=_edge_sort_key)
    total = len(children)

    for i, edge in enumerate(children):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        entry = f"{prefix}{connector}{marker_for(edge.action, edge.file_type)} {edge.path}"

        if edge.path in ancestors:
            lines.append(f"{entry} {CIRCULAR_MARKER}")
            continue

        if expanded is not None and graph.get(edge.path):
            if edge.path in expanded:
                lines.append(f"{entry} {SEE_ABOVE_MARKER}")
                continue
            expanded.add(edge.path)

        lines.append(entry)
        child_prefix = prefix + ("    " if is_last else "│   ")
        _render_children(graph, edge.path, child_prefix, ancestors | {edge.path}, lines, expanded)


def _edge_sort_key(edge: Edge) -> tuple:
    return (edge.path, edge.action.value)
