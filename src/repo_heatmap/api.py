"""Public API for Repo Heatmap.

Example:
    >>> from repo_heatmap import analyze, to_graph
    >>>
    >>> tree = analyze("/path/to/repo", "1m")
    >>> tree.value  # total commits touching the displayed files
    412
    >>> nodes = to_graph(tree)

Every call recomputes from scratch; nothing is cached between runs.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from .config import AnalysisConfig
from .logging_config import get_logger
from .temporal.activity import calculate_frequency_scores, count_commits_by_file, select_top_files
from .temporal.git_extractor import GitLogFetcher, LogFetcher, parse_log
from .temporal.models import CommitRecord, TimeRangeConfig, TimeRangePreset
from .temporal.time_range import parse_time_range_preset, resolve_time_range
from .visualization.colors import apply_colors
from .visualization.graph import GraphNode
from .visualization.graph import to_graph as _to_graph
from .visualization.tree import DirectoryNode, TreeNode, build_tree

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisMetadata:
    total_files_analyzed: int  # distinct files before top-N selection
    files_displayed: int
    total_commits: int
    time_range_label: str
    analysis_duration_ms: int


@dataclass(frozen=True)
class AnalysisResult:
    tree: DirectoryNode  # colored
    metadata: AnalysisMetadata
    time_range: TimeRangeConfig
    commits: tuple[CommitRecord, ...]


def analyze_repository(
    repo_path: str,
    time_range: Union[str, TimeRangePreset],
    *,
    now: Optional[datetime] = None,
    fetch_log: Optional[LogFetcher] = None,
    config: Optional[AnalysisConfig] = None,
) -> AnalysisResult:
    """Run the full pipeline and return the colored tree with metadata.

    The pipeline:
    1. Resolve the preset into a concrete window ending at *now*
    2. Fetch and parse ``git log`` for that window
    3. Count total and recent commits per file
    4. Keep the ``config.max_files`` most-committed files
    5. Normalize recent activity into [0, 1] frequency scores
    6. Fold the files into a directory tree and color the leaves

    Args:
        repo_path: Repository root. Existence is not re-checked here.
        time_range: One of ``2w``, ``1m``, ``3m``, ``6m``, ``1y``.
        now: End of the window (defaults to the current UTC time).
        fetch_log: Replacement for the git subprocess, mainly for tests.
        config: Analysis settings (defaults to ``AnalysisConfig()``).

    Raises:
        InvalidTimeRangeError: If *time_range* is not a known preset
        VcsError: If git is missing or the log cannot be read
        LogParseError: If git output is malformed
    """
    config = config or AnalysisConfig()
    preset = parse_time_range_preset(time_range)
    fetch = fetch_log or GitLogFetcher(config)

    started = time.perf_counter()
    window = resolve_time_range(preset, now=now)
    logger.info(f"Analyzing {repo_path} ({window.label})")

    raw = fetch(repo_path, window.start_date.isoformat(), window.end_date.isoformat())
    commits = parse_log(raw)

    counted = count_commits_by_file(commits, window)
    selected = select_top_files(counted, limit=config.max_files)
    scored = calculate_frequency_scores(selected)
    tree = apply_colors(build_tree(scored))

    duration_ms = int((time.perf_counter() - started) * 1000)
    metadata = AnalysisMetadata(
        total_files_analyzed=len(counted),
        files_displayed=len(scored),
        total_commits=len(commits),
        time_range_label=window.label,
        analysis_duration_ms=duration_ms,
    )
    logger.info(
        f"Analysis complete: {metadata.total_commits} commits, "
        f"{metadata.files_displayed}/{metadata.total_files_analyzed} files displayed "
        f"in {duration_ms}ms"
    )

    return AnalysisResult(tree=tree, metadata=metadata, time_range=window, commits=tuple(commits))


def analyze(
    repo_path: str,
    time_range: Union[str, TimeRangePreset] = TimeRangePreset.TWO_WEEKS,
    *,
    now: Optional[datetime] = None,
    fetch_log: Optional[LogFetcher] = None,
    config: Optional[AnalysisConfig] = None,
) -> DirectoryNode:
    """Analyze *repo_path* and return only the colored tree.

    See :func:`analyze_repository` for arguments and errors.
    """
    return analyze_repository(
        repo_path, time_range, now=now, fetch_log=fetch_log, config=config
    ).tree


def to_graph(tree: TreeNode) -> list[GraphNode]:
    """Flatten *tree* into force-graph nodes (see ``visualization.graph``)."""
    return _to_graph(tree)
