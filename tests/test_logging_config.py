"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from repo_heatmap.logging_config import get_logger, setup_logging


@pytest.mark.parametrize(
    "verbosity, level",
    [("quiet", logging.ERROR), ("normal", logging.WARNING), ("verbose", logging.DEBUG)],
)
def test_levels(verbosity, level):
    assert setup_logging(verbosity).level == level
    assert logging.getLogger().level == level


def test_single_rich_handler_after_repeated_setup():
    setup_logging()
    setup_logging("verbose")
    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], RichHandler)


def test_log_file(tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging("verbose", log_file=str(log_file))
    get_logger("api").debug("parsed 3 commits")
    for handler in logging.getLogger().handlers:
        handler.flush()

    line = log_file.read_text().strip()
    assert line.endswith("repo_heatmap.api: parsed 3 commits")
    assert "DEBUG" in line


def test_get_logger_namespacing():
    assert get_logger().name == "repo_heatmap"
    assert get_logger("server").name == "repo_heatmap.server"
    assert get_logger("repo_heatmap.api").name == "repo_heatmap.api"
