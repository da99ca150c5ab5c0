"""
Unified CLI entry point for git-remix using Click.

This module provides the main CLI group and shared options.
"""

import sys
from typing import Any, Callable, Optional, TypeVar

import click

from . import remix, serve
from .._version import __version__

F = TypeVar("F", bound=Callable[..., Any])


# ============================================================================
# Common Click Options - Reusable decorators for shared options
# ============================================================================


def debug_option() -> Callable[[F], F]:
    """Shared --debug option for verbosity control."""
    return click.option(
        "-d",
        "--debug",
        count=True,
        help="Increase verbosity (use -d for INFO, -dd for DEBUG, -ddd for DEBUG with HTTP logs)",
    )


# ============================================================================
# CLI Group
# ============================================================================


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="gitremix")
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to git-remix config file (default: ~/.config/gitremix/config.toml)",
)
@debug_option()
@click.option(
    "--max-workers",
    type=click.IntRange(1, 100),
    default=None,
    help="Maximum number of files copied concurrently (default: 4)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    debug: int,
    max_workers: Optional[int],
) -> None:
    """git-remix - Replace a GitHub repository's content with another repository's files."""
    # Store shared options in context for subcommands to access
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["debug"] = debug
    ctx.obj["max_workers"] = max_workers


# Register subcommands
cli.add_command(remix.remix)
cli.add_command(serve.serve)


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()  # pylint: disable=no-value-for-parameter  # Click handles parameters
    except KeyboardInterrupt:
        click.echo("\n\nOperation cancelled by user", err=True)
        sys.exit(130)


__all__ = ["cli", "main", "debug_option"]
