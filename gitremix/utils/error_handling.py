"""
Error handling utilities for standardized error logging and handling.

This module provides reusable error handling patterns so the CLI and the
server report API failures with the same operator hints.
"""

import logging
import re
import sys
import traceback
from typing import Optional

import httpx

from ..exceptions import GitHubAPIError

_STATUS_PATTERN = re.compile(r"\b([45]\d\d)\b")


def _status_of(error: httpx.HTTPError) -> Optional[int]:
    """Best-effort HTTP status of an error."""
    if isinstance(error, GitHubAPIError):
        return error.status_code
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    match = _STATUS_PATTERN.search(str(error))
    return int(match.group(1)) if match else None


def handle_http_error(error: httpx.HTTPError, operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle HTTP errors with standardized logging.

    Args:
        error: The HTTP error to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    status = _status_of(error)

    if status == 401:
        logging.error(
            "Authentication failed during %s: Invalid credentials. "
            "Please check that the access token is correct and not expired.",
            operation,
        )
    elif status == 403:
        logging.error(
            "Authentication failed during %s: You don't have permission to access this resource. "
            "The token needs the 'repo' scope on this repository, or the rate limit was exceeded.",
            operation,
        )
    elif status == 404:
        logging.error(
            "Resource not found during %s: the repository does not exist or the token cannot see it: %s",
            operation,
            error,
        )
    elif status == 409:
        logging.error("Conflict during %s (is the repository empty?): %s", operation, error)
    elif status == 422:
        logging.error("Request rejected during %s: %s", operation, error)
    elif status is not None and status >= 500:
        logging.error("Server error during %s: %s", operation, error)
    else:
        logging.error("HTTP error during %s: %s", operation, error)

    if log_traceback:
        logging.debug("Traceback: %s", traceback.format_exc())


def handle_generic_error(error: Exception, operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle generic errors with standardized logging.

    Args:
        error: The exception to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    logging.error("Unexpected error during %s: %s", operation, error)

    if log_traceback:
        logging.error("Traceback: %s", traceback.format_exc())


def log_and_exit(message: str, exit_code: int = 1) -> None:
    """
    Log an error message and exit the program.

    Args:
        message: Error message to log
        exit_code: Exit code (default: 1)
    """
    logging.error(message)
    sys.exit(exit_code)


__all__ = [
    "handle_http_error",
    "handle_generic_error",
    "log_and_exit",
]
