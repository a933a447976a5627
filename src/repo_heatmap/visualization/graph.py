"""Flatten an activity tree into bubbles for a force-directed layout."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from ..temporal.cochange import build_cochange_links
from ..temporal.models import CommitRecord, GraphLink
from .colors import file_type_color
from .tree import TreeNode, iter_files

MIN_RADIUS = 8.0
MAX_RADIUS = 40.0


@dataclass(frozen=True)
class GraphNode:
    id: str  # file path; identity for the layout engine
    file_path: str
    file_name: str
    commit_count: int
    radius: float
    color: str


@dataclass(frozen=True)
class ForceGraph:
    nodes: list[GraphNode]
    links: list[GraphLink]


def sqrt_scale(
    domain_min: float,
    domain_max: float,
    range_min: float = MIN_RADIUS,
    range_max: float = MAX_RADIUS,
) -> Callable[[float], float]:
    """Square-root scale mapping [domain_min, domain_max] onto the range.

    A degenerate domain maps everything to the middle of the range.
    """
    lo, hi = math.sqrt(domain_min), math.sqrt(domain_max)
    if hi == lo:
        mid = (range_min + range_max) / 2
        return lambda _value: mid

    span = range_max - range_min

    def scale(value: float) -> float:
        return range_min + (math.sqrt(value) - lo) / (hi - lo) * span

    return scale


def to_graph(tree: TreeNode) -> list[GraphNode]:
    """Extract one GraphNode per file in *tree*, dropping directories.

    Radii follow a sqrt scale of commit counts onto [8, 40]; colors come
    from the file type, not from activity. An empty tree yields ``[]``.
    """
    files = list(iter_files(tree))
    if not files:
        return []

    counts = [f.file_data.total_commit_count for f in files]
    scale = sqrt_scale(min(counts), max(counts))

    return [
        GraphNode(
            id=f.path,
            file_path=f.path,
            file_name=f.name,
            commit_count=f.file_data.total_commit_count,
            radius=scale(f.file_data.total_commit_count),
            color=file_type_color(f.path),
        )
        for f in files
    ]


def build_force_graph(
    tree: TreeNode,
    commits: Optional[Iterable[CommitRecord]] = None,
    max_files_per_commit: int = 50,
) -> ForceGraph:
    """Nodes from :func:`to_graph` plus co-change links between them."""
    nodes = to_graph(tree)
    links: list[GraphLink] = []
    if commits is not None and nodes:
        links = build_cochange_links(
            commits,
            {n.id for n in nodes},
            max_files_per_commit=max_files_per_commit,
        )
    return ForceGraph(nodes=nodes, links=links)
