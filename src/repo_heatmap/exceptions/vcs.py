"""Version-control collaborator exceptions: git missing, not a repo, failed runs."""

from typing import Optional

from .base import RepoHeatmapError


class VcsError(RepoHeatmapError):
    """Base class for failures while fetching history from git."""

    pass


class GitNotFoundError(VcsError):
    """Raised when the git executable cannot be found on PATH."""

    def __init__(self, executable: str = "git"):
        super().__init__(
            "Git is not installed or not on PATH. Install git and try again.",
            details={"executable": executable},
        )
        self.executable = executable


class NotAGitRepositoryError(VcsError):
    """Raised when git reports that the path is not inside a repository."""

    def __init__(self, repo_path: str, stderr: str = ""):
        details = {"repo_path": repo_path}
        if stderr:
            details["stderr"] = stderr
        super().__init__(f"Not a git repository: {repo_path}", details=details)
        self.repo_path = repo_path
        self.stderr = stderr


class GitCommandError(VcsError):
    """Raised when a git invocation fails for any other reason."""

    def __init__(self, reason: str, returncode: Optional[int] = None, stderr: str = ""):
        details = {"reason": reason}
        if returncode is not None:
            details["returncode"] = str(returncode)
        if stderr:
            details["stderr"] = stderr
        super().__init__(f"git log failed: {reason}", details=details)
        self.reason = reason
        self.returncode = returncode
        self.stderr = stderr
