"""
Logging setup for git-remix.

Run narratives go through the standard ``logging`` module as well as the
per-run log returned to callers. Anything that reaches a handler installed
here passes through :class:`TokenRedactingFilter` first, so a credential that
slips into an exception message or an httpx debug line is masked.
"""

import logging
import re
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
REDACTED = "***"

# Classic and fine-grained GitHub tokens, plus anything sent as a bearer credential
TOKEN_PATTERNS = (
    re.compile(r"\b(?:ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9]{8,}"),
    re.compile(r"\bgithub_pat_[A-Za-z0-9_]{8,}"),
    re.compile(r"(?i)(bearer\s+)[^\s'\"]+"),
)


def redact_tokens(text: str) -> str:
    """Mask GitHub tokens and bearer credentials in ``text``."""
    for pattern in TOKEN_PATTERNS:
        if pattern.groups:
            text = pattern.sub(lambda match: match.group(1) + REDACTED, text)
        else:
            text = pattern.sub(REDACTED, text)
    return text


class TokenRedactingFilter(logging.Filter):
    """Rewrite records so formatted messages never carry a token."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_tokens(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(verbosity: int = 0, stream: Optional[TextIO] = None) -> None:
    """
    Configure the root logger for a CLI or server process.

    Args:
        verbosity: Count of ``-d`` flags
        stream: Destination of log lines (defaults to stderr)

    Verbosity Levels:
        0 (default): WARNING - Only warnings and errors
        1 (-d):      INFO - Step progress mirrored from the run log
        2 (-dd):     DEBUG - Per-request details
        3+ (-ddd):   DEBUG - Also httpx and httpcore wire logs
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(TokenRedactingFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # httpx logs every request at INFO, which would drown the step narrative
    wire_level = logging.DEBUG if verbosity >= 3 else logging.WARNING
    logging.getLogger("httpx").setLevel(wire_level)
    logging.getLogger("httpcore").setLevel(wire_level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


__all__ = [
    "TokenRedactingFilter",
    "redact_tokens",
    "setup_logging",
    "get_logger",
]
