"""Starlette ASGI application exposing the analysis pipeline."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from ..api import AnalysisResult, analyze_repository
from ..config import AnalysisConfig
from ..exceptions import GitNotFoundError, RepoHeatmapError, VcsError
from ..temporal.git_extractor import LogFetcher
from ..temporal.models import TimeRangePreset
from ..visualization.graph import build_force_graph
from ..visualization.serializers import (
    force_graph_to_dict,
    metadata_to_dict,
    time_range_to_dict,
    tree_to_dict,
)

logger = logging.getLogger(__name__)

_VALID_PRESETS = {p.value for p in TimeRangePreset}


class _RequestError(Exception):
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"success": False, "error": message}, status_code=status_code)


async def _parse_request(request: Request) -> tuple[str, str]:
    """Validate the JSON body and the repository location."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise _RequestError("Invalid request body", 400)
    if not isinstance(body, dict):
        raise _RequestError("Invalid request body", 400)

    repo_path = body.get("repoPath")
    time_range = body.get("timeRange")

    if not repo_path or not isinstance(repo_path, str):
        raise _RequestError("Repository path is required", 400)
    if not isinstance(time_range, str) or time_range not in _VALID_PRESETS:
        raise _RequestError("Invalid time range", 400)

    root = Path(repo_path)
    if not root.exists():
        raise _RequestError("Repository path does not exist", 404)
    if not (root / ".git").exists():
        raise _RequestError("The selected folder is not a git repository", 400)

    return repo_path, time_range


def create_app(
    config: Optional[AnalysisConfig] = None, fetch_log: Optional[LogFetcher] = None
) -> Starlette:
    """Build the Starlette application.

    Args:
        config: Analysis settings shared by every request
        fetch_log: Optional replacement for the git subprocess (tests)
    """
    config = config or AnalysisConfig()

    async def _run(request: Request) -> tuple[Optional[AnalysisResult], Optional[JSONResponse]]:
        try:
            repo_path, time_range = await _parse_request(request)
        except _RequestError as exc:
            return None, _error(exc.message, exc.status_code)

        try:
            # git runs in a subprocess; keep it off the event loop
            result = await run_in_threadpool(
                analyze_repository, repo_path, time_range, fetch_log=fetch_log, config=config
            )
        except GitNotFoundError:
            return None, _error(
                "Git is not installed. Please install git to analyze repositories.", 500
            )
        except VcsError as exc:
            logger.warning("Git analysis failed for %s: %s", repo_path, exc)
            return None, _error("Failed to analyze repository", 500)
        except RepoHeatmapError as exc:
            logger.error("Analysis error for %s: %s", repo_path, exc)
            return None, _error("Failed to analyze repository", 500)
        return result, None

    def _metadata(result: AnalysisResult) -> dict[str, Any]:
        meta = metadata_to_dict(result.metadata)
        meta["window"] = time_range_to_dict(result.time_range)
        return meta

    async def git_analysis(request: Request) -> JSONResponse:
        """POST /api/git-analysis: colored activity tree."""
        result, error = await _run(request)
        if error is not None:
            return error
        return JSONResponse(
            {
                "success": True,
                "data": tree_to_dict(result.tree),
                "metadata": _metadata(result),
            }
        )

    async def force_graph(request: Request) -> JSONResponse:
        """POST /api/force-graph: file bubbles and co-change links."""
        result, error = await _run(request)
        if error is not None:
            return error
        graph = build_force_graph(
            result.tree,
            result.commits,
            max_files_per_commit=config.cochange_max_files_per_commit,
        )
        return JSONResponse(
            {
                "success": True,
                "data": force_graph_to_dict(graph),
                "metadata": _metadata(result),
            }
        )

    async def health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    routes = [
        Route("/api/git-analysis", git_analysis, methods=["POST"]),
        Route("/api/force-graph", force_graph, methods=["POST"]),
        Route("/api/health", health),
    ]

    return Starlette(routes=routes)
