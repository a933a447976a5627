"""Shared test fixtures for Repo Heatmap tests."""

from datetime import datetime, timezone

import pytest

from repo_heatmap.temporal.models import CommitRecord, FileCommitData, TimeRangeConfig, TimeRangePreset

# Fixed clock used across the suite so windows are reproducible.
NOW = datetime(2026, 1, 31, 23, 59, 59, tzinfo=timezone.utc)


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def utc(text: str) -> datetime:
    return datetime.fromisoformat(text).replace(tzinfo=timezone.utc)


def make_file(path: str, total: int, recent: int = 0, score: float = 0.0) -> FileCommitData:
    return FileCommitData(
        file_path=path,
        total_commit_count=total,
        recent_commit_count=recent,
        frequency_score=score,
    )


class FakeFetcher:
    """Stands in for GitLogFetcher; records every call."""

    def __init__(self, output: str = ""):
        self.output = output
        self.calls: list[tuple[str, str, str]] = []

    def __call__(self, repo_path: str, since: str, until: str) -> str:
        self.calls.append((repo_path, since, until))
        return self.output


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def two_week_range():
    """The window used by most aggregation tests (midpoint Jan 23 noon)."""
    return TimeRangeConfig(
        start_date=utc("2026-01-15T00:00:00"),
        end_date=utc("2026-01-31T23:59:59"),
        midpoint=utc("2026-01-23T12:00:00"),
        label="Last 2 weeks",
        preset=TimeRangePreset.TWO_WEEKS,
    )


@pytest.fixture
def sample_commits():
    """Three commits straddling the two_week_range midpoint."""
    return [
        CommitRecord("abc123", utc("2026-01-20T10:00:00"), ("src/App.tsx", "src/utils.ts")),
        CommitRecord("def456", utc("2026-01-25T10:00:00"), ("src/App.tsx",)),
        CommitRecord("ghi789", utc("2026-01-26T10:00:00"), ("src/Button.tsx",)),
    ]


@pytest.fixture
def sample_log():
    """Raw git log text in the format GitLogFetcher requests.

    All dates fall inside the two weeks before NOW; the midpoint of that
    window is 2026-01-24T23:59:59Z.
    """
    return (
        "c3c3c3|2026-01-30T09:00:00+00:00\n"
        "src/App.tsx\n"
        "src/components/Button.tsx\n"
        "\n"
        "b2b2b2|2026-01-27T09:00:00+00:00\n"
        "src/App.tsx\n"
        "\n"
        "a1a1a1|2026-01-20T09:00:00+00:00\n"
        "src/App.tsx\n"
        "README.md\n"
        "app/models/user.rb\n"
    )


@pytest.fixture
def fake_fetcher(sample_log):
    return FakeFetcher(sample_log)
