"""Extract git history via subprocess and parse it into commit records."""

import re
import subprocess
import threading
from datetime import timezone
from pathlib import Path
from typing import Callable, Optional

from dateutil.parser import isoparse

from ..config import AnalysisConfig
from ..exceptions import GitCommandError, GitNotFoundError, LogParseError, NotAGitRepositoryError
from ..logging_config import get_logger
from .models import CommitRecord

logger = get_logger(__name__)

# (repo_path, since_iso, until_iso) -> raw ``git log`` text
LogFetcher = Callable[[str, str, str], str]

LOG_FORMAT = "%H|%aI"

# Matches: <hex sha> | <ISO 8601 author date>
_HEADER_RE = re.compile(r"^(?P<sha>[0-9a-f]{4,64})\|(?P<date>\d{4}-\d{2}-\d{2}T[^\s|]+)$")

_NOT_A_REPO_MARKERS = ("not a git repository", "cannot change to")

_CHUNK_SIZE = 1024 * 1024

# How long to wait for the pipe readers once git itself has exited or been killed.
_READER_GRACE_SECONDS = 2.0


class GitLogFetcher:
    """Run ``git log`` for a time window and return its raw output."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

    def __call__(self, repo_path: str, since: str, until: str) -> str:
        return self.fetch(repo_path, since, until)

    def build_command(self, repo_path: str, since: str, until: str) -> list[str]:
        return [
            self.config.git_executable,
            "-C",
            str(Path(repo_path).resolve()),
            "log",
            "--name-only",
            f"--since={since}",
            f"--until={until}",
            f"--pretty=format:{LOG_FORMAT}",
        ]

    def fetch(self, repo_path: str, since: str, until: str) -> str:
        """Return the raw log text for commits between *since* and *until*.

        Raises:
            GitNotFoundError: git is not installed
            NotAGitRepositoryError: *repo_path* is not a repository
            GitCommandError: any other failure, including oversized output
        """
        cmd = self.build_command(repo_path, since, until)
        logger.debug("Running %s", " ".join(cmd))

        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError:
            logger.warning("git executable %r not found", self.config.git_executable)
            raise GitNotFoundError(self.config.git_executable) from None

        stdout, stderr = self._collect_output(proc)

        if proc.returncode != 0:
            stderr = stderr.strip()
            logger.warning("git log failed: %s", stderr)
            if any(marker in stderr.lower() for marker in _NOT_A_REPO_MARKERS):
                raise NotAGitRepositoryError(repo_path, stderr)
            raise GitCommandError("non-zero exit status", proc.returncode, stderr)

        return stdout

    def _collect_output(self, proc: subprocess.Popen) -> tuple[str, str]:
        """Drain both pipes concurrently while git runs under a deadline.

        stdout is read in chunks and git is killed once it passes
        ``max_log_bytes``. stderr gets its own reader so a chatty git can
        never block on a full pipe.
        """
        limit = self.config.max_log_bytes
        out_chunks: list[str] = []
        err_chunks: list[str] = []
        overflow = threading.Event()

        def drain_stdout() -> None:
            total_size = 0
            for chunk in iter(lambda: proc.stdout.read(_CHUNK_SIZE), ""):
                total_size += len(chunk)
                if total_size > limit:
                    overflow.set()
                    proc.kill()
                    return
                out_chunks.append(chunk)

        def drain_stderr() -> None:
            for chunk in iter(lambda: proc.stderr.read(_CHUNK_SIZE), ""):
                err_chunks.append(chunk)

        readers = [
            threading.Thread(target=drain_stdout, name="git-stdout", daemon=True),
            threading.Thread(target=drain_stderr, name="git-stderr", daemon=True),
        ]
        for reader in readers:
            reader.start()

        try:
            proc.wait(timeout=self.config.git_timeout_seconds)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()
            logger.warning("git log killed after %ss", self.config.git_timeout_seconds)
            raise GitCommandError(f"timed out after {self.config.git_timeout_seconds}s")
        finally:
            # Children of git may still hold the pipes open after a kill.
            for reader in readers:
                reader.join(timeout=_READER_GRACE_SECONDS)

        if any(reader.is_alive() for reader in readers):
            raise GitCommandError("output pipes still open after git exited")

        proc.stdout.close()
        proc.stderr.close()
        if overflow.is_set():
            raise GitCommandError(
                f"output exceeded {self.config.max_log_megabytes}MB limit; "
                "choose a shorter time range"
            )
        return "".join(out_chunks), "".join(err_chunks)


def parse_log(raw: str) -> list[CommitRecord]:
    """Parse ``git log --name-only --pretty=format:%H|%aI`` output.

    Header lines are detected by pattern rather than by blank-line
    separation, so merge commits with no files and a final commit without
    a trailing newline are both handled. Records keep log order.

    Raises:
        LogParseError: on a file line before the first header, or a header
            whose date cannot be parsed
    """
    commits: list[CommitRecord] = []
    current_sha: Optional[str] = None
    current_date = None
    current_files: list[str] = []

    for line_number, line in enumerate(raw.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue

        match = _HEADER_RE.match(line)
        if match:
            if current_sha is not None:
                commits.append(CommitRecord(current_sha, current_date, tuple(current_files)))

            current_sha = match.group("sha")
            try:
                current_date = isoparse(match.group("date"))
            except ValueError:
                raise LogParseError("unparseable commit date", line, line_number) from None
            if current_date.tzinfo is None:
                current_date = current_date.replace(tzinfo=timezone.utc)
            current_files = []
        elif current_sha is not None:
            current_files.append(line)
        else:
            raise LogParseError("file path before any commit header", line, line_number)

    if current_sha is not None:
        commits.append(CommitRecord(current_sha, current_date, tuple(current_files)))

    logger.debug("Parsed %d commits from git log", len(commits))
    return commits
