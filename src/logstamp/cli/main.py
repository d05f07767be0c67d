"""Main CLI entry point using rich-click."""

import logging
import sys
from pathlib import Path
from typing import Optional

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from logstamp.core.config import MAX_PRECISION, MIN_PRECISION, load_config
from logstamp.core.exceptions import LogstampError
from logstamp.core.stamper import Stamper, StampOptions

# Configure rich-click
click.rich_click.SHOW_ARGUMENTS = True

# Diagnostics go to stderr; stdout carries the stamped lines
console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    """Send debug logging to stderr when --verbose is given."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@click.command()
@click.argument("format", required=False)
@click.option(
    "--relative", "-r",
    is_flag=True,
    help="Convert timestamps found in the input to relative times, e.g. '15m ago'",
)
@click.option(
    "--incremental", "-i",
    is_flag=True,
    help="Show time elapsed since the previous line",
)
@click.option(
    "--since-start", "-s",
    is_flag=True,
    help="Show time elapsed since the program started",
)
@click.option(
    "--monotonic", "-m",
    is_flag=True,
    help="Use the monotonic clock",
)
@click.option(
    "--precision", "-p",
    type=click.IntRange(MIN_PRECISION, MAX_PRECISION),
    default=None,
    help="Number of time units shown in relative mode (default 2)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable debug logging on stderr",
)
@click.version_option(package_name="logstamp")
def cli(
    format: Optional[str],
    relative: bool,
    incremental: bool,
    since_start: bool,
    monotonic: bool,
    precision: Optional[int],
    config: Optional[Path],
    verbose: bool,
) -> None:
    """Timestamp standard input.

    Prefix each line with the current time, formatted with the strftime
    FORMAT (default "%b %d %H:%M:%S"). Use %.S, %.s or %.T for seconds with
    microseconds.

    With --relative, timestamps already in the input are rewritten as
    relative times instead.
    """
    _setup_logging(verbose)

    if incremental and since_start:
        raise click.UsageError("Options '-i' and '-s' cannot be used together.")

    try:
        settings = load_config(config)
        options = StampOptions(
            relative=relative or settings.relative,
            incremental=incremental,
            since_start=since_start,
            monotonic=monotonic or settings.monotonic,
            precision=precision if precision is not None else settings.precision,
            format=format if format is not None else settings.format,
            timezone=settings.get_timezone(),
        )
        stamper = Stamper(options)
    except LogstampError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    stamper.run(sys.stdin, sys.stdout)


def main() -> None:
    """Entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
