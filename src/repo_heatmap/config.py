"""Configuration loading and management for Repo Heatmap.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.repo-heatmap.toml)
    3. Project config (./repo-heatmap.toml)
    4. Explicit config file
    5. Environment variables (REPO_HEATMAP_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(max_files=100)
    >>> config.max_files
    100
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "REPO_HEATMAP_"

# Hard cap on displayed files; larger treemaps stop being readable.
TOP_FILES_LIMIT = 500

_VALID_PRESETS = ("2w", "1m", "3m", "6m", "1y")

_INT_FIELDS = (
    "max_files",
    "git_timeout_seconds",
    "max_log_bytes",
    "cochange_max_files_per_commit",
)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for analysis execution.

    Attributes:
        Selection:
            max_files: Number of most-committed files kept for display
            default_time_range: Preset used when none is given

        Git integration:
            git_executable: Name or path of the git binary
            git_timeout_seconds: Timeout for a single ``git log`` run
            max_log_bytes: Upper bound on ``git log`` output size

        Force graph:
            cochange_max_files_per_commit: Commits touching more displayed
                files than this are ignored when counting co-changes

        Output control:
            verbosity: Logging verbosity level
    """

    # Selection
    max_files: int = TOP_FILES_LIMIT
    default_time_range: str = "2w"

    # Git integration
    git_executable: str = "git"
    git_timeout_seconds: int = 60
    max_log_bytes: int = 50 * 1024 * 1024

    # Force graph
    cochange_max_files_per_commit: int = 50

    # Output control
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization.

        Raises:
            InvalidConfigError: naming the first field that fails
        """
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidConfigError(name, value, "must be an integer")

        if self.max_files < 1:
            raise InvalidConfigError("max_files", self.max_files, "must be at least 1")
        if self.default_time_range not in _VALID_PRESETS:
            raise InvalidConfigError(
                "default_time_range",
                self.default_time_range,
                f"must be one of {', '.join(_VALID_PRESETS)}",
            )
        if not isinstance(self.git_executable, str) or not self.git_executable:
            raise InvalidConfigError(
                "git_executable", self.git_executable, "must be a non-empty string"
            )
        if self.git_timeout_seconds < 1:
            raise InvalidConfigError(
                "git_timeout_seconds", self.git_timeout_seconds, "must be at least 1"
            )
        if self.max_log_bytes < 1024:
            raise InvalidConfigError("max_log_bytes", self.max_log_bytes, "must be at least 1024")
        if self.cochange_max_files_per_commit < 2:
            raise InvalidConfigError(
                "cochange_max_files_per_commit",
                self.cochange_max_files_per_commit,
                "must be at least 2",
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "must be quiet, normal or verbose"
            )

    @property
    def max_log_megabytes(self) -> int:
        """Get the log size limit in whole megabytes."""
        return self.max_log_bytes // (1024 * 1024)


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options don't mask lower layers.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a setting is unknown or its value fails
            validation
    """
    merged: dict = {}

    global_config = Path.home() / ".repo-heatmap.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "repo-heatmap.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    for key in merged:
        if key not in AnalysisConfig.__dataclass_fields__:
            raise InvalidConfigError(key, merged[key], "unknown setting")

    return AnalysisConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from REPO_HEATMAP_* environment variables.

    Supported environment variables:
        REPO_HEATMAP_MAX_FILES: int
        REPO_HEATMAP_DEFAULT_TIME_RANGE: 2w/1m/3m/6m/1y
        REPO_HEATMAP_GIT_EXECUTABLE: str
        REPO_HEATMAP_GIT_TIMEOUT_SECONDS: int
        REPO_HEATMAP_MAX_LOG_BYTES: int
        REPO_HEATMAP_COCHANGE_MAX_FILES_PER_COMMIT: int
        REPO_HEATMAP_VERBOSITY: quiet/normal/verbose
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        return tomllib.load(f)
