"""Per-file commit activity: counting, top-N selection, frequency scoring."""

from collections import defaultdict
from dataclasses import replace
from datetime import datetime
from typing import Iterable

from ..config import TOP_FILES_LIMIT
from ..logging_config import get_logger
from .models import CommitRecord, FileCommitData, TimeRangeConfig

logger = get_logger(__name__)


def count_commits_by_file(
    commits: Iterable[CommitRecord], time_range: TimeRangeConfig
) -> list[FileCommitData]:
    """Fold commit records into one FileCommitData per touched path.

    A file's total is the number of distinct SHAs touching it; its recent
    count is how many of those SHAs are dated at or after the range
    midpoint. Scores are left at 0.0 for the normalizer to fill in.
    """
    shas_by_file: dict[str, set[str]] = defaultdict(set)
    date_by_sha: dict[str, datetime] = {}

    for commit in commits:
        date_by_sha[commit.sha] = commit.date
        for path in commit.files:
            shas_by_file[path].add(commit.sha)

    result = []
    for path, shas in shas_by_file.items():
        recent = sum(1 for sha in shas if date_by_sha[sha] >= time_range.midpoint)
        result.append(
            FileCommitData(
                file_path=path,
                total_commit_count=len(shas),
                recent_commit_count=recent,
            )
        )

    logger.debug("Counted commits for %d files", len(result))
    return result


def select_top_files(
    files: Iterable[FileCommitData], limit: int = TOP_FILES_LIMIT
) -> list[FileCommitData]:
    """Keep the *limit* most-committed files.

    Ties on commit count are broken by path so output is deterministic.
    """
    ranked = sorted(files, key=lambda f: (-f.total_commit_count, f.file_path))
    return ranked[:limit]


def calculate_frequency_scores(files: list[FileCommitData]) -> list[FileCommitData]:
    """Scale recent commit counts into [0, 1] relative to the busiest file."""
    if not files:
        return []

    max_recent = max(f.recent_commit_count for f in files)
    if max_recent == 0:
        return [replace(f, frequency_score=0.0) for f in files]

    return [replace(f, frequency_score=f.recent_commit_count / max_recent) for f in files]
