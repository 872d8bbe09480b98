"""Command line entry point: normalize agent output from stdin to stdout."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from .config import ParserConfigError, default_config_path, load_parser_config
from .emitter import run
from .parser import StreamParser

app = typer.Typer(
    name="mc-stream-parser",
    help="Normalize agent output into unified JSON events.",
    add_completion=False,
)

err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger("stream_parser")
    package_logger.handlers.clear()
    package_logger.addHandler(
        RichHandler(console=err_console, show_path=False, show_time=False)
    )
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


@app.command()
def main(
    agent_id: str | None = typer.Argument(
        None,
        help="Agent identity stamped on every event (default: 'unknown')",
    ),
    format_hint: str | None = typer.Argument(
        None,
        help="Input format: 'python' or 'claude'. Anything else auto-detects.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML config file (default: $MC_STREAM_PARSER_CONFIG or ~/.mission-control/stream-parser.yaml)",
    ),
    max_line_length: int | None = typer.Option(
        None,
        "--max-line-length",
        min=0,
        help="Truncate longer input lines; 0 disables the limit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
) -> None:
    """Read agent output lines from stdin and write one unified event per line to stdout."""
    _configure_logging(verbose)

    try:
        config = load_parser_config(config_file or default_config_path())
    except ParserConfigError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    config = config.merged(
        agent_id=agent_id,
        format_hint=format_hint,
        max_line_length=max_line_length,
    )
    parser = StreamParser(
        config.agent_id,
        config.format_hint,
        max_line_length=config.max_line_length,
    )
    run(parser, sys.stdin, sys.stdout)
