"""
Remix command for git-remix CLI.

This module provides the remix command, which replaces the content of the
destination repository's default branch with the files of the source
repository.
"""

import json
import logging
import sys
from typing import Optional

import click
from pydantic import ValidationError

from ..models.context import RemixContext
from ..models.results import LogEntry, RemixResult
from ..services import RemixService
from ..utils import CancellationToken, parse_github_url, setup_logging
from ..utils.constants import DEST_TOKEN_ENV, SEPARATOR_WIDTH, SOURCE_TOKEN_ENV
from ..utils.error_handling import log_and_exit
from .settings import load_cli_settings

# Terminal colour for each run log entry type
ENTRY_COLORS = {
    "info": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "red",
}


def echo_entry(entry: LogEntry) -> None:
    """Print one run log entry in the colour of its type."""
    click.secho(f"> {entry.message}", fg=ENTRY_COLORS[entry.type])


def echo_result(result: RemixResult) -> None:
    """Print the run log followed by a one-line outcome."""
    for entry in result.logs:
        echo_entry(entry)

    click.echo("=" * SEPARATOR_WIDTH)
    if result.success:
        summary = f"Remix succeeded: {result.blobs_transferred}/{result.files_found} files copied"
        if result.skipped_paths:
            summary += f", {len(result.skipped_paths)} skipped"
        click.secho(summary, fg="green", bold=True)
    else:
        click.secho(f"Remix failed: {result.error}", fg="red", bold=True, err=True)


@click.command()
@click.argument("source_url")
@click.argument("dest_url")
@click.option(
    "--source-token",
    envvar=SOURCE_TOKEN_ENV,
    show_envvar=True,
    help="Access token with read access to the source repository",
)
@click.option(
    "--dest-token",
    envvar=DEST_TOKEN_ENV,
    show_envvar=True,
    help="Access token with write access to the destination (default: the source token)",
)
@click.option(
    "--force/--no-force",
    default=None,
    help="Force-update the destination branch (default: force)",
)
@click.option(
    "--verify-tip/--no-verify-tip",
    default=None,
    help="Fail instead of overwriting if the destination branch moves during the run (default: verify)",
)
@click.option(
    "--deadline",
    type=click.FloatRange(min=0, min_open=True),
    help="Abort the run after this many seconds",
)
@click.option(
    "--api-url",
    help="Base URL of the GitHub REST API (default: https://api.github.com)",
)
@click.option("-y", "--yes", is_flag=True, help="Do not ask before overwriting the destination branch")
@click.option("--json", "as_json", is_flag=True, help="Print the response body as JSON instead of the colored log")
@click.pass_context
def remix(  # pylint: disable=too-many-positional-arguments,too-many-locals
    ctx: click.Context,
    source_url: str,
    dest_url: str,
    source_token: Optional[str],
    dest_token: Optional[str],
    force: Optional[bool],
    verify_tip: Optional[bool],
    deadline: Optional[float],
    api_url: Optional[str],
    yes: bool,
    as_json: bool,
) -> None:
    """Copy every file of SOURCE_URL onto the default branch of DEST_URL."""
    setup_logging(ctx.obj["debug"])

    # Validate repository URLs before any network call
    source = parse_github_url(source_url)
    if source is None:
        click.echo(f"Error: not a GitHub repository URL: {source_url}", err=True)
        sys.exit(1)
    destination = parse_github_url(dest_url)
    if destination is None:
        click.echo(f"Error: not a GitHub repository URL: {dest_url}", err=True)
        sys.exit(1)

    if not source_token:
        click.echo(f"Error: --source-token (or {SOURCE_TOKEN_ENV}) is required", err=True)
        sys.exit(1)
    if not dest_token:
        logging.info("No destination token given, using the source token for both repositories")
        dest_token = source_token

    settings = load_cli_settings(ctx)
    if api_url:
        settings["api_url"] = api_url
    if force is not None:
        settings["force"] = force
    if verify_tip is not None:
        settings["verify_tip"] = verify_tip

    try:
        context = RemixContext(
            source=source,
            destination=destination,
            source_token=source_token,
            dest_token=dest_token,
            deadline_seconds=deadline,
            **settings,
        )
    except ValidationError as e:
        log_and_exit(f"Error: invalid settings: {e}")

    if context.force and not yes:
        click.confirm(
            f"This replaces every file on the default branch of {destination} with the files of {source} "
            "and force-updates the branch. Continue?",
            abort=True,
        )

    cancel = CancellationToken(deadline_seconds=context.deadline_seconds)
    try:
        result = RemixService().remix(context, cancel)
    except KeyboardInterrupt:
        # Stop blob workers that have not started yet
        cancel.cancel()
        raise

    if as_json:
        click.echo(json.dumps(result.to_response(), indent=2))
    else:
        echo_result(result)

    sys.exit(0 if result.success else 1)


__all__ = ["remix", "echo_entry", "echo_result"]
