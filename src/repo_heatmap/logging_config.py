"""
Logging setup for Repo Heatmap.

Records go to stderr through a Rich handler because ``analyze --format json``
owns stdout. The level comes from ``AnalysisConfig.verbosity``, so
``REPO_HEATMAP_VERBOSITY`` and the TOML files work the same as ``-v``/``-q``.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import Verbosity

PACKAGE_LOGGER = "repo_heatmap"

LEVELS: dict[str, int] = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    verbosity: Verbosity = "normal", log_file: Optional[str] = None
) -> logging.Logger:
    """Install the stderr handler (and optionally a plain file handler).

    Replaces any handlers already on the root logger, so calling it twice in
    one process (tests, ``serve`` after ``analyze``) does not duplicate output.
    Verbose mode adds source locations and tracebacks with locals.

    Returns:
        The package logger, ``repo_heatmap``
    """
    level = LEVELS[verbosity]
    verbose = verbosity == "verbose"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # file paths can contain "[", which rich would read as markup
            markup=False,
            show_path=verbose,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return *name* under the ``repo_heatmap`` namespace (``__name__`` works as is)."""
    if name is None:
        return logging.getLogger(PACKAGE_LOGGER)
    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
