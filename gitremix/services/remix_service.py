"""
Remix service for high-level remix operations.

This module provides the service layer that drives a remix run end to end:
resolving both repositories, duplicating every source blob into the
destination, creating a tree and a commit on top of the destination tip and
moving the destination branch to it.
"""

import logging
from typing import Callable, Optional

import httpx

from ..api.session_pair import SessionPair
from ..exceptions import RemixCancelledError, RemixStepError
from ..models.context import RemixContext
from ..models.results import RemixResult
from ..remix import (
    RunLog,
    create_destination_tree,
    create_remix_commit,
    duplicate_blobs_concurrently,
    list_source_blobs,
    log_remix_summary,
    resolve_branch_tip,
    resolve_destination_branch,
    resolve_source_branch,
    update_destination_branch,
    verify_branch_tip,
)
from ..utils.cancellation import CancellationToken
from ..utils.error_handling import handle_generic_error, handle_http_error

CANCELLED_MESSAGE = "remix cancelled"
INTERNAL_ERROR_STATUS = 500

SessionsFactory = Callable[[RemixContext], SessionPair]


class RemixService:
    """
    High-level service for remix operations.

    The service never raises for upstream failures: every outcome is a
    RemixResult carrying the run log accumulated up to that point.
    """

    def __init__(self, sessions_factory: Optional[SessionsFactory] = None) -> None:
        """
        Initialize the remix service.

        Args:
            sessions_factory: Builds the source/destination sessions for a
                context (defaults to SessionPair.from_context)
        """
        self._sessions_factory = sessions_factory or SessionPair.from_context

    def remix(self, context: RemixContext, cancel: Optional[CancellationToken] = None) -> RemixResult:
        """
        Replace the destination's default branch content with the source's.

        Args:
            context: Repositories, credentials and run options
            cancel: Optional cancellation token; one honouring
                ``context.deadline_seconds`` is created when omitted

        Returns:
            RemixResult with the complete run log
        """
        if cancel is None:
            cancel = CancellationToken(deadline_seconds=context.deadline_seconds)

        run_log = RunLog()
        result = RemixResult(success=False)
        logging.info("Starting remix of %s into %s", context.source, context.destination)

        try:
            with self._sessions_factory(context) as sessions:
                self._run(context, sessions, run_log, result, cancel)
            result.success = True
            result.status_code = 200
        except RemixStepError as e:
            if isinstance(e.cause, httpx.HTTPError):
                handle_http_error(e.cause, e.user_message, log_traceback=False)
            result.error = e.user_message
            result.status_code = e.status_code
        except RemixCancelledError as e:
            run_log.error(f"Remix cancelled: {e}")
            result.error = CANCELLED_MESSAGE
            result.status_code = INTERNAL_ERROR_STATUS
        except Exception as e:  # pylint: disable=broad-exception-caught
            handle_generic_error(e, f"remix of {context.source} into {context.destination}")
            run_log.error(f"Internal error: {e}")
            result.error = str(e)
            result.status_code = INTERNAL_ERROR_STATUS

        result.logs = run_log.entries
        log_remix_summary(result, context)
        return result

    def _run(
        self,
        context: RemixContext,
        sessions: SessionPair,
        run_log: RunLog,
        result: RemixResult,
        cancel: CancellationToken,
    ) -> None:
        """Run the pipeline steps in order; the first fatal failure raises."""
        source, destination = sessions.source, sessions.destination

        source_branch = resolve_source_branch(source, context.source, run_log, cancel)
        blobs = list_source_blobs(source, context.source, source_branch, run_log, cancel)
        result.files_found = len(blobs)

        dest_branch = resolve_destination_branch(destination, context.destination, run_log, cancel)
        tip = resolve_branch_tip(destination, context.destination, dest_branch, run_log, cancel)

        run_log.info("Transferring file blobs...")
        duplication = duplicate_blobs_concurrently(
            blobs,
            source,
            context.source,
            destination,
            context.destination,
            run_log,
            context.max_workers,
            cancel,
        )
        result.blobs_transferred = duplication.transferred
        result.skipped_paths = duplication.skipped
        run_log.success(f"{duplication.transferred} blobs transferred")

        tree_sha = create_destination_tree(destination, context.destination, duplication.entries, run_log, cancel)
        commit = create_remix_commit(
            destination, context.destination, context.source, tree_sha, tip, run_log, cancel
        )
        result.commit_sha = commit.sha

        if context.verify_tip:
            verify_branch_tip(destination, context.destination, dest_branch, tip, run_log, cancel)

        update_destination_branch(
            destination, context.destination, dest_branch, commit.sha, run_log, force=context.force, cancel=cancel
        )
        run_log.success("Remix complete!")


__all__ = ["RemixService", "CANCELLED_MESSAGE"]
