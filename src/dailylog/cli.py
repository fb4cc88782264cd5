"""CLI interface for dailylog."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, timedelta
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from dailylog.config import DailylogConfig, load_config, merge_cli_overrides
from dailylog.display import print_log, print_summary
from dailylog.editor import EditorTextSource, TextSource
from dailylog.errors import DailylogError
from dailylog.git import GitRepository, VersionControl, auto_sync_if_enabled, git_sync
from dailylog.journal import (
    EditOutcome,
    append_to_log,
    edit_log,
    previous_day_log_path,
    read_log,
    summarize_logs,
    today_log_path,
)

app = typer.Typer(
    name="dailylog",
    help="A minimal journaling tool. Run without a command to write today's entry.",
)

console = Console(soft_wrap=True)
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from dailylog import __version__

        console.print(f"dailylog {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Turn dailylog and filesystem errors into a red message and exit code 1."""
    try:
        yield
    except (DailylogError, OSError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc


def _text_source() -> TextSource:
    return EditorTextSource()


def _version_control(config: DailylogConfig) -> VersionControl:
    return GitRepository(config.log_path)


def _auto_sync(config: DailylogConfig) -> None:
    if auto_sync_if_enabled(config, _version_control(config)):
        console.print("[green]Logs synced.[/green]")


def _write_entry(config: DailylogConfig, path: Path) -> None:
    """Collect an entry from the editor and append it to ``path``."""
    entry = _text_source().read()
    if not entry.strip():
        console.print("No content written. Aborted.")
        return

    append_to_log(path, entry)
    console.print(f"Log saved to {path}")
    _auto_sync(config)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
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
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Config file to use instead of ~/.dailylog.toml.",
            dir_okay=False,
        ),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--log-dir",
            help="Directory holding the daily log files.",
            file_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Enable debug logging."),
    ] = False,
) -> None:
    """Dailylog - write, review and sync a markdown log per day."""
    _configure_logging(verbose)

    with _handle_errors():
        config = merge_cli_overrides(load_config(config_path), log_dir=log_dir)
        config.log_path.mkdir(parents=True, exist_ok=True)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        with _handle_errors():
            _write_entry(config, today_log_path(config.log_path))


@app.command()
def edit(ctx: typer.Context) -> None:
    """Edit today's log file in place."""
    config: DailylogConfig = ctx.obj
    path = today_log_path(config.log_path)

    with _handle_errors():
        outcome = edit_log(path, _text_source())

        if outcome is EditOutcome.WRITTEN:
            console.print(f"Log saved to {path}")
        elif outcome is EditOutcome.REMOVED:
            console.print("Log file removed (content was empty)")
        else:
            console.print("No changes made.")
            return

        _auto_sync(config)


@app.command()
def previous(ctx: typer.Context) -> None:
    """View the previous day's log entry."""
    config: DailylogConfig = ctx.obj
    path = previous_day_log_path(config.log_path)

    with _handle_errors():
        content = read_log(path)

    if content is None:
        console.print(f"No log entry found for previous day: {path}")
        return
    if not content.strip():
        console.print(f"Previous day's log is empty: {path}")
        return

    print_log(console, date.today() - timedelta(days=1), content)


@app.command()
def yesterday(ctx: typer.Context) -> None:
    """Add to the previous day's log entry."""
    config: DailylogConfig = ctx.obj
    day = date.today() - timedelta(days=1)
    path = previous_day_log_path(config.log_path)

    with _handle_errors():
        content = read_log(path)
        if content is not None and content.strip():
            console.print(f"Existing entry for {day.isoformat()}:")
            print_log(console, day, content, footer="End of existing entry")
            console.print("\nAppending to yesterday's log...")
        else:
            console.print(f"Creating new entry for yesterday ({day.isoformat()})")

        _write_entry(config, path)


@app.command()
def summary(
    ctx: typer.Context,
    days: Annotated[
        int,
        typer.Option(
            "--days",
            "-d",
            min=0,
            help="Number of days to include in summary.",
        ),
    ] = 7,
) -> None:
    """Summarize and review logs for the past N days."""
    config: DailylogConfig = ctx.obj

    with _handle_errors():
        result = summarize_logs(config.log_path, days, config)

    print_summary(console, result)


@app.command()
def sync(ctx: typer.Context) -> None:
    """Sync logs with the git repository (pull then push)."""
    config: DailylogConfig = ctx.obj
    vcs = _version_control(config)

    with _handle_errors():
        if config.git_repo and not vcs.is_repo():
            console.print(f"Initializing git repository in {config.log_path}")
        pushed = git_sync(config, vcs)

    if pushed:
        console.print("[green]Successfully synced logs.[/green]")
    else:
        console.print("Pulled latest logs. No changes to push.")


@app.command()
def pull(ctx: typer.Context) -> None:
    """Pull the latest logs from the git repository."""
    config: DailylogConfig = ctx.obj

    console.print("Pulling latest logs from git repository...")
    with _handle_errors():
        _version_control(config).pull(config.git_branch_name)
    console.print("[green]Successfully pulled latest logs.[/green]")


@app.command()
def push(ctx: typer.Context) -> None:
    """Push local logs to the git repository."""
    config: DailylogConfig = ctx.obj

    with _handle_errors():
        pushed = _version_control(config).push(config.git_branch_name)

    if pushed:
        console.print("[green]Successfully pushed logs.[/green]")
    else:
        console.print("No changes to push.")


if __name__ == "__main__":
    app()
