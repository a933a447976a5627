"""Exception hierarchy for Repo Heatmap."""

from .analysis import AnalysisError, InvariantViolationError, LogParseError
from .base import RepoHeatmapError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
    InvalidTimeRangeError,
)
from .vcs import GitCommandError, GitNotFoundError, NotAGitRepositoryError, VcsError

__all__ = [
    "RepoHeatmapError",
    "AnalysisError",
    "LogParseError",
    "InvariantViolationError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "InvalidTimeRangeError",
    "VcsError",
    "GitNotFoundError",
    "NotAGitRepositoryError",
    "GitCommandError",
]
