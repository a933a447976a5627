"""``repo-heatmap serve``: run the JSON API."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import RepoHeatmapError
from ..logging_config import setup_logging
from . import app
from ._common import console, resolve_config


@app.command()
def serve(
    port: int = typer.Option(8765, help="Port to listen on"),
    host: str = typer.Option("127.0.0.1", help="Host to bind to"),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
) -> None:
    """Serve the analysis API over HTTP."""
    try:
        from ..server import _check_deps

        _check_deps()
    except ImportError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    import uvicorn

    from ..server.app import create_app

    try:
        settings = resolve_config(config=config, verbose=verbose)
    except RepoHeatmapError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)
    setup_logging(settings.verbosity)

    url = f"http://{host}:{port}"
    console.print(f"[bold]API[/bold] → [link={url}]{url}[/link]")
    console.print("[dim]POST /api/git-analysis, POST /api/force-graph. Ctrl+C to stop[/dim]")

    try:
        uvicorn.run(
            create_app(settings),
            host=host,
            port=port,
            log_level="info" if settings.verbosity == "verbose" else "warning",
        )
    except KeyboardInterrupt:
        pass
    finally:
        console.print("\n[dim]Stopped.[/dim]")
