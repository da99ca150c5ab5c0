"""
Settings shared by the CLI commands.

Combines the optional configuration file with the group-level options.
"""

from typing import Any, Dict

import click

from ..utils.config_manager import load_remix_settings
from ..utils.error_handling import log_and_exit


def load_cli_settings(ctx: click.Context) -> Dict[str, Any]:
    """
    Load remix settings for a command.

    Configuration file values are overridden by ``--max-workers``. A broken
    or unreadable configuration file ends the command with exit status 1.

    Args:
        ctx: Click context carrying the group options

    Returns:
        Dictionary of RemixContext settings
    """
    try:
        settings = load_remix_settings(ctx.obj["config"])
    except (FileNotFoundError, ValueError) as e:
        log_and_exit(f"Error: {e}")

    if ctx.obj["max_workers"] is not None:
        settings["max_workers"] = ctx.obj["max_workers"]
    return settings


__all__ = ["load_cli_settings"]
