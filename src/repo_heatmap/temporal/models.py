"""Data models for temporal (git-based) analysis."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ..exceptions import InvariantViolationError


class TimeRangePreset(str, Enum):
    """Coarse analysis windows offered to users."""

    TWO_WEEKS = "2w"
    ONE_MONTH = "1m"
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    ONE_YEAR = "1y"


@dataclass(frozen=True)
class TimeRangeConfig:
    start_date: datetime
    end_date: datetime
    midpoint: datetime  # commits at or after this count as "recent"
    label: str
    preset: TimeRangePreset

    def __post_init__(self) -> None:
        if not self.start_date <= self.midpoint <= self.end_date:
            raise InvariantViolationError(
                "start_date <= midpoint <= end_date",
                f"{self.start_date.isoformat()} / {self.midpoint.isoformat()} / "
                f"{self.end_date.isoformat()}",
            )


@dataclass(frozen=True)
class CommitRecord:
    sha: str
    date: datetime  # author date, timezone-aware
    files: tuple[str, ...]  # relative paths changed, in log order


@dataclass(frozen=True)
class FileCommitData:
    file_path: str
    total_commit_count: int
    recent_commit_count: int
    frequency_score: float = 0.0  # filled in by calculate_frequency_scores

    def __post_init__(self) -> None:
        if self.recent_commit_count > self.total_commit_count:
            raise InvariantViolationError(
                "recent_commit_count <= total_commit_count",
                f"{self.file_path}: {self.recent_commit_count} > {self.total_commit_count}",
            )


@dataclass(frozen=True)
class GraphLink:
    source: str
    target: str
    value: int  # commits touching both files
