"""``repo-heatmap analyze``: print the hottest files or the raw JSON."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..api import AnalysisResult, analyze_repository
from ..exceptions import GitNotFoundError, InvalidPathError, RepoHeatmapError
from ..logging_config import setup_logging
from ..visualization.graph import build_force_graph
from ..visualization.serializers import force_graph_to_dict, metadata_to_dict, tree_to_dict
from ..visualization.tree import iter_files
from . import app
from ._common import activity_bar, console, resolve_config


def _check_repo(path: Path) -> None:
    if not path.exists():
        raise InvalidPathError(path, "does not exist")
    if not (path / ".git").exists():
        raise InvalidPathError(path, "not a git repository")


def _print_table(result: AnalysisResult, limit: int) -> None:
    meta = result.metadata
    files = sorted(
        iter_files(result.tree),
        key=lambda f: (-f.file_data.total_commit_count, f.path),
    )

    table = Table(title=f"Most active files ({meta.time_range_label})", title_justify="left")
    table.add_column("#", justify="right", style="dim")
    table.add_column("File", style="bold")
    table.add_column("Commits", justify="right")
    table.add_column("Recent", justify="right")
    table.add_column("Activity")

    for i, f in enumerate(files[:limit], start=1):
        data = f.file_data
        table.add_row(
            str(i),
            escape(f.path),
            str(data.total_commit_count),
            str(data.recent_commit_count),
            f"[{f.color}]{activity_bar(data.frequency_score)}[/]",
        )

    if files:
        console.print(table)
    else:
        console.print(f"[yellow]No commits found in {meta.time_range_label.lower()}.[/yellow]")

    console.print(
        f"[dim]{meta.total_commits} commits, "
        f"{meta.files_displayed}/{meta.total_files_analyzed} files displayed, "
        f"{meta.analysis_duration_ms}ms[/dim]"
    )


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the git repository",
        exists=False,
        file_okay=False,
        resolve_path=True,
    ),
    time_range: Optional[str] = typer.Option(
        None,
        "--range",
        "-r",
        help="Time window: 2w, 1m, 3m, 6m or 1y",
    ),
    output_format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table or json",
    ),
    graph: bool = typer.Option(
        False, "--graph", help="Emit force-graph nodes and links instead of the tree (json)"
    ),
    top: Optional[int] = typer.Option(
        None, "--top", "-n", help="Maximum files to keep in the tree", min=1
    ),
    rows: int = typer.Option(20, "--rows", help="Rows to show in table output", min=1),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only log errors"),
) -> None:
    """
    Analyze a repository's commit activity.

    [bold cyan]Examples:[/bold cyan]

      repo-heatmap analyze .

      repo-heatmap analyze ~/code/app --range 3m

      repo-heatmap analyze . --format json --graph
    """
    if output_format not in ("table", "json"):
        console.print(f"[red]Unknown format:[/red] {output_format} (use table or json)")
        raise typer.Exit(2)

    try:
        settings = resolve_config(config=config, top=top, verbose=verbose, quiet=quiet)
    except RepoHeatmapError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1)
    setup_logging(settings.verbosity)

    try:
        _check_repo(path)
        result = analyze_repository(
            str(path), time_range or settings.default_time_range, config=settings
        )
    except GitNotFoundError:
        console.print("[red]Git is not installed.[/red] Install git and try again.")
        raise typer.Exit(1)
    except RepoHeatmapError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1)

    if output_format == "table":
        _print_table(result, rows)
        return

    if graph:
        force_graph = build_force_graph(
            result.tree,
            result.commits,
            max_files_per_commit=settings.cochange_max_files_per_commit,
        )
        data = force_graph_to_dict(force_graph)
    else:
        data = tree_to_dict(result.tree)

    payload = {"data": data, "metadata": metadata_to_dict(result.metadata)}
    typer.echo(json.dumps(payload, indent=2))
