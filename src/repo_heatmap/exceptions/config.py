"""Configuration and input exceptions: paths, settings, time ranges."""

from pathlib import Path
from typing import Any, Iterable

from .base import RepoHeatmapError


class ConfigurationError(RepoHeatmapError):
    """Base class for configuration-related errors."""

    pass


class InvalidPathError(ConfigurationError):
    """Raised when a provided path is invalid."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid path: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidTimeRangeError(ConfigurationError):
    """Raised when a time range preset is not one of the supported values."""

    def __init__(self, value: Any, supported: Iterable[str]):
        supported = list(supported)
        super().__init__(
            f"Invalid time range: {value}",
            details={"value": str(value), "supported": ", ".join(supported)},
        )
        self.value = value
        self.supported = supported
