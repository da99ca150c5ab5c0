"""
Operator-facing summaries of remix runs.

The run log returned to callers narrates each step; these helpers write a
condensed summary to operator logging once a run is over.
"""

import logging

from ..models.context import RemixContext
from ..models.results import RemixResult


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def _log_transfer_summary(result: RemixResult) -> None:
    """Log how many files made it into the new tree."""
    skipped = len(result.skipped_paths)
    if skipped > 0:
        logging.info(
            "Blobs: %d/%d transferred (%d skipped)", result.blobs_transferred, result.files_found, skipped
        )
        for path in result.skipped_paths:
            logging.debug("  - skipped %s", path)
    else:
        logging.info("Blobs: %s transferred", _plural(result.blobs_transferred, "file"))


def log_remix_summary(result: RemixResult, context: RemixContext) -> None:
    """
    Log a summary of a finished run.

    Args:
        result: Outcome of the run
        context: Context the run was started with
    """
    logging.debug("Source: %s", context.source)
    logging.debug("Destination: %s", context.destination)
    logging.debug("Max workers: %d", context.max_workers)

    if result.files_found:
        _log_transfer_summary(result)

    if result.success:
        logging.info(
            "Remix of %s into %s completed (commit %s)",
            context.source,
            context.destination,
            (result.commit_sha or "")[:7],
        )
    else:
        logging.warning(
            "Remix of %s into %s failed with status %d: %s",
            context.source,
            context.destination,
            result.status_code,
            result.error,
        )


__all__ = ["log_remix_summary"]
