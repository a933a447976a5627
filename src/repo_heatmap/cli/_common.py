"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    top: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build settings from CLI options."""
    return load_config(config_file=config, max_files=top, verbose=verbose, quiet=quiet)


def activity_bar(score: float, width: int = 10) -> str:
    """Render a [0,1] score as a block bar, e.g. ``██████░░░░``."""
    filled = int(round(max(0.0, min(1.0, score)) * width))
    return "█" * filled + "░" * (width - filled)
