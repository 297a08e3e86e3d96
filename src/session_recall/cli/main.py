"""CLI entry point for session-recall.

Invoked as::

    session-recall [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m session_recall.cli.main

Commands
--------
- version  — Show version information
- config   — Show the effective plugin configuration
- decay    — Show the decay factor and age label for an age in days
- recall   — Run the full recall pipeline for a prompt
"""
from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

console = Console()

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_config(config_path: str | None) -> object:
    """Return the configuration from ``config_path``, or the defaults.

    Exits with status 1 when the file is invalid.
    """
    from session_recall.config import ConfigurationError, RecallConfig, load_config

    if config_path is None:
        return RecallConfig()
    try:
        return load_config(config_path)
    except ConfigurationError as exc:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="session-recall")
def cli() -> None:
    """Recency-weighted recall of past agent sessions"""


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from session_recall import __version__

    console.print(f"[bold]session-recall[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


@cli.command(name="config")
@click.option("--config", "config_path", default=None, help="YAML or JSON options file.")
def config_command(config_path: str | None) -> None:
    """Show the effective plugin configuration."""
    config = _load_config(config_path)

    table = Table(title="session-recall configuration", show_lines=False)
    table.add_column("Option", style="bold cyan")
    table.add_column("Value")
    for name, value in config.model_dump(by_alias=True).items():
        table.add_row(name, str(value))

    console.print(table)


# ---------------------------------------------------------------------------
# decay
# ---------------------------------------------------------------------------


@cli.command(name="decay")
@click.argument("age_days", type=float)
def decay_command(age_days: float) -> None:
    """Show the decay factor applied to content AGE_DAYS old."""
    from session_recall.context.decay import TieredDecay
    from session_recall.context.formatter import format_age

    decay = TieredDecay()
    factor = decay.factor(age_days)
    console.print(
        f"age={age_days:g}d ([cyan]{format_age(max(0.0, age_days))}[/cyan]) "
        f"factor=[bold]{factor:g}[/bold]"
    )


# ---------------------------------------------------------------------------
# recall
# ---------------------------------------------------------------------------


@cli.command(name="recall")
@click.argument("prompt")
@click.option("--config", "config_path", default=None, help="YAML or JSON options file.")
@click.option(
    "--results-file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Replay a saved search response instead of calling the search command.",
)
@click.option("--command", default="openclaw", show_default=True, help="Search executable.")
@click.option(
    "--timeout",
    default=10.0,
    show_default=True,
    type=float,
    help="Search timeout in seconds.",
)
@click.option("--table", "show_table", is_flag=True, help="Show ranked results as a table.")
@click.option("--verbose", "-v", is_flag=True, help="Log pipeline decisions to stderr.")
def recall_command(
    prompt: str,
    config_path: str | None,
    results_file: str | None,
    command: str,
    timeout: float,
    show_table: bool,
    verbose: bool,
) -> None:
    """Show the context block that would be injected for PROMPT."""
    from session_recall.middleware.gating import skip_reason
    from session_recall.middleware.recall_middleware import RecallMiddleware
    from session_recall.search.command import CommandSearchBackend
    from session_recall.search.memory import InMemorySearchBackend

    _configure_logging(verbose)
    config = _load_config(config_path)
    if not config.enabled:
        console.print("[yellow]session-recall is disabled by config.[/yellow]")
        return

    if results_file:
        try:
            backend = InMemorySearchBackend.from_file(results_file)
        except (OSError, UnicodeDecodeError) as exc:
            console.print(f"[red]Cannot read results file:[/red] {escape(str(exc))}")
            sys.exit(1)
    else:
        backend = CommandSearchBackend(command=command, timeout_seconds=timeout)

    middleware = RecallMiddleware(config, backend)

    reason = skip_reason(prompt, config)
    if reason is not None:
        console.print(f"[yellow]Prompt skipped ({reason}); nothing would be injected.[/yellow]")
        return

    results = middleware.search(prompt)
    if not results:
        console.print("[yellow]No relevant sessions found.[/yellow]")
        return

    if show_table:
        table = Table(title="Recalled sessions", show_lines=False)
        table.add_column("#", justify="right")
        table.add_column("Session", style="cyan")
        table.add_column("Raw", justify="right")
        table.add_column("Decay", justify="right")
        table.add_column("Score", justify="right", style="bold")
        table.add_column("Age (days)", justify="right")
        for rank, result in enumerate(results, start=1):
            table.add_row(
                str(rank),
                result.session_file,
                f"{result.raw_score:.2f}",
                f"{result.decay_factor:g}",
                f"{result.score:.2f}",
                f"{result.age_in_days:.1f}",
            )
        console.print(table)
        return

    from session_recall.context.formatter import format_context

    console.print(Panel(Text(format_context(results)), title="Injected Context", expand=True))


if __name__ == "__main__":
    cli()
