"""Tests for git log parsing and the git subprocess wrapper."""

import os
import shutil
import subprocess
import sys
import time
from datetime import datetime, timedelta, timezone

import pytest

from repo_heatmap.config import AnalysisConfig
from repo_heatmap.exceptions import (
    GitCommandError,
    GitNotFoundError,
    LogParseError,
    NotAGitRepositoryError,
)
from repo_heatmap.temporal.git_extractor import GitLogFetcher, parse_log
from repo_heatmap.temporal.models import CommitRecord

from conftest import utc


class TestParseLog:
    def test_parses_headers_and_files(self):
        raw = (
            "abc123|2026-01-20T10:00:00.000Z\nsrc/App.tsx\nsrc/utils.ts\n\n"
            "def456|2026-01-25T10:00:00.000Z\nsrc/App.tsx"
        )
        result = parse_log(raw)

        assert result == [
            CommitRecord("abc123", utc("2026-01-20T10:00:00"), ("src/App.tsx", "src/utils.ts")),
            CommitRecord("def456", utc("2026-01-25T10:00:00"), ("src/App.tsx",)),
        ]

    def test_preserves_input_order(self, sample_log):
        shas = [c.sha for c in parse_log(sample_log)]
        assert shas == ["c3c3c3", "b2b2b2", "a1a1a1"]

    def test_k_commits_yield_k_records(self):
        blocks = [
            f"{i:040x}|2026-01-{10 + i:02d}T08:00:00+02:00\nfile_{i}.py\nshared.py\n"
            for i in range(7)
        ]
        result = parse_log("\n".join(blocks))
        assert len(result) == 7
        assert all(c.files[-1] == "shared.py" for c in result)

    def test_single_commit_without_trailing_newline(self):
        result = parse_log("4e5f6a|2026-01-20T10:00:00.000Z\nfile.txt")
        assert len(result) == 1
        assert result[0].sha == "4e5f6a"
        assert result[0].files == ("file.txt",)

    def test_empty_input(self):
        assert parse_log("") == []
        assert parse_log("\n\n") == []

    def test_commit_without_files_is_kept(self):
        raw = (
            "aaaa1111|2026-01-20T10:00:00Z\n"
            "bbbb2222|2026-01-21T10:00:00Z\n"
            "x.py\n"
        )
        result = parse_log(raw)
        assert [c.sha for c in result] == ["aaaa1111", "bbbb2222"]
        assert result[0].files == ()
        assert result[1].files == ("x.py",)

    def test_timezone_offset_is_kept(self):
        result = parse_log("abcd|2026-01-20T10:00:00+05:30\na.py\n")
        assert result[0].date == datetime(2026, 1, 20, 4, 30, tzinfo=timezone.utc)

    def test_file_paths_with_pipes_and_spaces(self):
        result = parse_log("abcd|2026-01-20T10:00:00Z\ndocs/a|b.md\nmy file.txt\n")
        assert result[0].files == ("docs/a|b.md", "my file.txt")

    def test_windows_line_endings(self):
        result = parse_log("abcd|2026-01-20T10:00:00Z\r\na.py\r\n\r\n")
        assert result[0].files == ("a.py",)

    def test_file_before_header_raises(self):
        with pytest.raises(LogParseError) as exc_info:
            parse_log("orphan.py\nabcd|2026-01-20T10:00:00Z\n")
        assert exc_info.value.line_number == 1

    def test_bad_date_raises(self):
        with pytest.raises(LogParseError):
            parse_log("abcd|2026-13-45T99:00:00Z\na.py\n")

    def test_only_hex_shas_start_a_commit(self):
        raw = (
            "abcd1234|2026-01-20T10:00:00Z\n"
            "notes|2026-01-21T10:00:00Z\n"
            "docs/x|2026-01-22T10:00:00Z\n"
            "ABCD1234|2026-01-23T10:00:00Z\n"
        )
        [commit] = parse_log(raw)
        assert commit.files == (
            "notes|2026-01-21T10:00:00Z",
            "docs/x|2026-01-22T10:00:00Z",
            "ABCD1234|2026-01-23T10:00:00Z",
        )

    def test_short_sha_is_not_a_header(self):
        with pytest.raises(LogParseError):
            parse_log("abc|2026-01-20T10:00:00Z\na.py\n")


class TestGitLogFetcher:
    def test_command_shape(self, tmp_path):
        fetcher = GitLogFetcher()
        cmd = fetcher.build_command(
            str(tmp_path), "2026-01-15T00:00:00+00:00", "2026-01-31T00:00:00+00:00"
        )
        assert cmd[0] == "git"
        assert cmd[1:3] == ["-C", str(tmp_path.resolve())]
        assert cmd[3:] == [
            "log",
            "--name-only",
            "--since=2026-01-15T00:00:00+00:00",
            "--until=2026-01-31T00:00:00+00:00",
            "--pretty=format:%H|%aI",
        ]

    def test_missing_git_executable(self, tmp_path):
        fetcher = GitLogFetcher(AnalysisConfig(git_executable="definitely-not-git-9f2c"))
        with pytest.raises(GitNotFoundError):
            fetcher.fetch(str(tmp_path), "2026-01-01T00:00:00Z", "2026-01-31T00:00:00Z")

    @pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
    def test_not_a_repository(self, tmp_path):
        with pytest.raises(NotAGitRepositoryError):
            GitLogFetcher().fetch(str(tmp_path), "2026-01-01T00:00:00Z", "2026-01-31T00:00:00Z")


def _fake_git(tmp_path, body):
    script = tmp_path / "fake-git"
    script.write_text("#!/bin/sh\n" + body + "\n")
    script.chmod(0o755)
    return str(script)


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell")
class TestGitLogFetcherSubprocess:
    def test_returns_stdout(self, tmp_path):
        git = _fake_git(tmp_path, "printf 'abcd1234|2026-01-20T10:00:00Z\\nsrc/a.py\\n'")
        raw = GitLogFetcher(AnalysisConfig(git_executable=git)).fetch(
            str(tmp_path), "2026-01-01T00:00:00Z", "2026-01-31T00:00:00Z"
        )
        assert [c.files for c in parse_log(raw)] == [("src/a.py",)]

    def test_hung_git_is_killed_after_timeout(self, tmp_path):
        git = _fake_git(tmp_path, "exec sleep 10")
        fetcher = GitLogFetcher(AnalysisConfig(git_executable=git, git_timeout_seconds=1))

        started = time.monotonic()
        with pytest.raises(GitCommandError) as exc_info:
            fetcher.fetch(str(tmp_path), "2026-01-01T00:00:00Z", "2026-01-31T00:00:00Z")

        assert time.monotonic() - started < 5
        assert "timed out after 1s" in str(exc_info.value)

    def test_large_stderr_does_not_block(self, tmp_path):
        # Far more than a pipe buffer, written before stdout is closed.
        git = _fake_git(tmp_path, "yes warning | head -c 500000 >&2\nexit 3")
        fetcher = GitLogFetcher(AnalysisConfig(git_executable=git, git_timeout_seconds=10))

        with pytest.raises(GitCommandError) as exc_info:
            fetcher.fetch(str(tmp_path), "2026-01-01T00:00:00Z", "2026-01-31T00:00:00Z")

        assert exc_info.value.returncode == 3
        assert exc_info.value.stderr.startswith("warning")

    def test_output_over_limit(self, tmp_path):
        git = _fake_git(tmp_path, "yes src/a.py | head -c 5000")
        fetcher = GitLogFetcher(AnalysisConfig(git_executable=git, max_log_bytes=1024))

        with pytest.raises(GitCommandError, match="exceeded"):
            fetcher.fetch(str(tmp_path), "2026-01-01T00:00:00Z", "2026-01-31T00:00:00Z")

    def test_not_a_repository_from_stderr(self, tmp_path):
        git = _fake_git(
            tmp_path, "echo 'fatal: not a git repository (or any parent)' >&2\nexit 128"
        )
        fetcher = GitLogFetcher(AnalysisConfig(git_executable=git))

        with pytest.raises(NotAGitRepositoryError):
            fetcher.fetch(str(tmp_path), "2026-01-01T00:00:00Z", "2026-01-31T00:00:00Z")


def _git(repo, *args, date=None):
    env = {
        "GIT_AUTHOR_NAME": "Test",
        "GIT_AUTHOR_EMAIL": "test@example.com",
        "GIT_COMMITTER_NAME": "Test",
        "GIT_COMMITTER_EMAIL": "test@example.com",
        "HOME": str(repo),
        "PATH": os.environ.get("PATH", ""),
    }
    if date:
        env["GIT_AUTHOR_DATE"] = date
        env["GIT_COMMITTER_DATE"] = date
    subprocess.run(["git", "-C", str(repo), *args], check=True, capture_output=True, env=env)


@pytest.mark.slow
@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestGitLogFetcherIntegration:
    def test_round_trip_through_real_git(self, tmp_path):
        _git(tmp_path, "init", "-q")
        now = datetime.now(timezone.utc).replace(microsecond=0)
        for i, name in enumerate(["a.py", "b.py", "a.py"]):
            (tmp_path / name).write_text(f"v{i}\n")
            when = (now - timedelta(days=3 - i)).isoformat()
            _git(tmp_path, "add", name)
            _git(tmp_path, "commit", "-q", "-m", f"c{i}", date=when)

        raw = GitLogFetcher().fetch(
            str(tmp_path),
            (now - timedelta(days=14)).isoformat(),
            (now + timedelta(minutes=1)).isoformat(),
        )
        commits = parse_log(raw)

        assert len(commits) == 3
        assert [c.files for c in commits] == [("a.py",), ("b.py",), ("a.py",)]
        assert commits[0].date > commits[-1].date
