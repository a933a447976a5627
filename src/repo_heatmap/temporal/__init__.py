"""Temporal analysis: git history, per-file activity, and co-change."""

from .activity import calculate_frequency_scores, count_commits_by_file, select_top_files
from .cochange import build_cochange_links
from .git_extractor import GitLogFetcher, LogFetcher, parse_log
from .models import CommitRecord, FileCommitData, GraphLink, TimeRangeConfig, TimeRangePreset
from .time_range import parse_time_range_preset, resolve_time_range

__all__ = [
    "CommitRecord",
    "FileCommitData",
    "GraphLink",
    "TimeRangeConfig",
    "TimeRangePreset",
    "GitLogFetcher",
    "LogFetcher",
    "parse_log",
    "count_commits_by_file",
    "select_top_files",
    "calculate_frequency_scores",
    "build_cochange_links",
    "parse_time_range_preset",
    "resolve_time_range",
]
