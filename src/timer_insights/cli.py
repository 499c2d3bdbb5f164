"""CLI interface for timer-insights."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.table import Table

from timer_insights.config import InsightsConfig, load_config, merge_cli_overrides
from timer_insights.core import clear_insights_cache, generate_ai_insights, get_ai_insights
from timer_insights.errors import HistoryLoadError
from timer_insights.formatters.report import format_insights_markdown
from timer_insights.history import load_history, load_history_file
from timer_insights.models import TimerSessionData
from timer_insights.scoring import calculate_productivity_score

app = typer.Typer(
    name="timer-insights",
    help="Productivity insights from focus-timer session history.",
)

console = Console()
_stderr_console = Console(stderr=True)

DirOption = Annotated[
    Optional[Path],
    typer.Option(
        "--dir",
        "-d",
        help="Directory holding the timer history JSON files.",
        file_okay=False,
        dir_okay=True,
    ),
]
FileOption = Annotated[
    Optional[list[Path]],
    typer.Option(
        "--file",
        "-f",
        help="History file to load (repeatable). Overrides --dir.",
        exists=True,
        dir_okay=False,
    ),
]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to a .timer-insights.toml file."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", help="Log cache and loader activity to stderr."),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from timer_insights import __version__

        console.print(f"timer-insights {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Timer Insights - analyze focus-timer sessions."""
    pass


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=_stderr_console, show_path=False)],
    )


def _resolve_config(config_path: Path | None, **overrides: object) -> InsightsConfig:
    return merge_cli_overrides(load_config(config_path), **overrides)


def _load_sessions(config: InsightsConfig, files: list[Path] | None) -> list[TimerSessionData]:
    """Load sessions from explicit files, or from the configured history directory."""
    try:
        if files:
            sessions: list[TimerSessionData] = []
            for path in files:
                sessions.extend(load_history_file(path))
            return sessions
        return load_history(Path(config.history.directory), config.history.files)
    except HistoryLoadError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


@app.command(name="insights")
def insights_cmd(
    directory: DirOption = None,
    files: FileOption = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the insights as JSON instead of a report."),
    ] = False,
    use_cache: Annotated[
        bool,
        typer.Option("--cache/--no-cache", help="Reuse cached insights when still fresh."),
    ] = True,
    cache_dir: Annotated[
        Optional[Path],
        typer.Option("--cache-dir", help="Directory for the insights cache."),
    ] = None,
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Analyze timer history and print insights and recommendations."""
    _configure_logging(verbose)
    config = _resolve_config(
        config_path,
        history_dir=str(directory) if directory else None,
        cache_dir=str(cache_dir) if cache_dir else None,
    )
    sessions = _load_sessions(config, files)

    if use_cache:
        insights = get_ai_insights(sessions, cache=config.to_cache_store())
    else:
        insights = generate_ai_insights(sessions)

    if as_json:
        print(insights.model_dump_json(indent=2))
        return

    console.print(Markdown(format_insights_markdown(insights)))


@app.command(name="score")
def score_cmd(
    directory: DirOption = None,
    files: FileOption = None,
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the productivity score breakdown."""
    _configure_logging(verbose)
    config = _resolve_config(config_path, history_dir=str(directory) if directory else None)
    sessions = _load_sessions(config, files)
    score = calculate_productivity_score(sessions)

    table = Table(title=f"Productivity Score: {score.overall} ({score.grade.value})")
    table.add_column("Component")
    table.add_column("Score", justify="right")
    for name, value in score.breakdown.model_dump().items():
        table.add_row(name.capitalize(), str(value))
    console.print(table)
    console.print(f"Sessions analyzed: {len(sessions)}")


@app.command(name="clear-cache")
def clear_cache_cmd(
    cache_dir: Annotated[
        Optional[Path],
        typer.Option("--cache-dir", help="Directory for the insights cache."),
    ] = None,
    config_path: ConfigOption = None,
) -> None:
    """Delete the cached insights."""
    config = _resolve_config(config_path, cache_dir=str(cache_dir) if cache_dir else None)
    clear_insights_cache(config.to_cache_store())
    console.print("[green]Insights cache cleared.[/green]")
