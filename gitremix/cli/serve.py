"""
Serve command for git-remix CLI.

Runs the HTTP remix endpoint under uvicorn.
"""

import logging

import click

from ..server import create_app
from ..utils import setup_logging
from .settings import load_cli_settings

LOG_LEVELS = ["critical", "error", "warning", "info", "debug", "trace"]

# Settings decided per request rather than per server
_REQUEST_SETTINGS = {"force"}


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind socket to this host")
@click.option("--port", type=click.IntRange(0, 65535), default=8000, show_default=True, help="Bind socket to this port")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS),
    default="info",
    show_default=True,
    help="uvicorn log level",
)
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, log_level: str) -> None:
    """Serve POST /github-remix over HTTP."""
    import uvicorn

    setup_logging(ctx.obj["debug"])

    settings = {key: value for key, value in load_cli_settings(ctx).items() if key not in _REQUEST_SETTINGS}
    app = create_app(settings=settings)

    logging.info("Starting git-remix server on %s:%d", host, port)
    click.echo(f"Starting git-remix server on {host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level=log_level)


__all__ = ["serve"]
