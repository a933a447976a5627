"""Analysis-related exceptions: unparseable log output, broken invariants."""

from typing import Optional

from .base import RepoHeatmapError


class AnalysisError(RepoHeatmapError):
    """Base class for analysis-related errors."""
    pass


class LogParseError(AnalysisError):
    """Raised when git log output does not follow the expected format."""

    def __init__(self, reason: str, line: Optional[str] = None, line_number: Optional[int] = None):
        details = {"reason": reason}
        if line is not None:
            details["line"] = line
        if line_number is not None:
            details["line_number"] = str(line_number)

        super().__init__("Failed to parse git log output", details=details)
        self.reason = reason
        self.line = line
        self.line_number = line_number


class InvariantViolationError(AnalysisError):
    """Raised when computed data breaks an internal consistency rule.

    This always indicates a bug in the pipeline, never bad user input.
    """

    def __init__(self, invariant: str, reason: str):
        super().__init__(
            f"Internal consistency failure: {invariant}",
            details={"invariant": invariant, "reason": reason},
        )
        self.invariant = invariant
        self.reason = reason
