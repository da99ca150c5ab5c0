"""
Blob duplication between the source and destination stores.

Each source blob is read through the source session and re-created through
the destination session. Files that cannot be read or written are skipped
with a warning; the rest of the run carries on.
"""

import logging
import traceback
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor, as_completed
from typing import Iterable, List, Optional, Sequence

import httpx

from ..exceptions import MalformedResponseError, RemixCancelledError
from ..models.github_api import NewTreeEntry, TreeEntry
from ..models.repository import RepositoryRef
from ..models.results import DuplicationResult
from ..protocols import GitDataReader, GitDataWriter
from ..utils.cancellation import CancellationToken
from .run_log import RunLog

# Per-file failures that lead to a skip rather than an aborted run
SKIPPABLE_ERRORS = (httpx.HTTPError, MalformedResponseError)


def duplicate_blob(
    entry: TreeEntry,
    source: GitDataReader,
    source_repo: RepositoryRef,
    destination: GitDataWriter,
    dest_repo: RepositoryRef,
    run_log: RunLog,
    cancel: Optional[CancellationToken] = None,
) -> Optional[NewTreeEntry]:
    """Copy one blob and return the tree entry referencing the copy.

    Args:
        entry: Source tree entry of type blob
        source: Source session (read)
        source_repo: Source repository
        destination: Destination session (write)
        dest_repo: Destination repository
        run_log: Run log receiving per-file warnings
        cancel: Optional cancellation token

    Returns:
        NewTreeEntry with the original path and mode and the destination sha,
        or None if the file was skipped

    Raises:
        RemixCancelledError: If the run was cancelled
    """
    try:
        blob = source.get_blob(source_repo, entry.sha, cancel=cancel)
    except SKIPPABLE_ERRORS as e:
        run_log.warning(f"Warning: could not read {entry.path}")
        logging.debug("Reading %s failed: %s", entry.path, e)
        return None

    try:
        created = destination.create_blob(dest_repo, blob.content, encoding="base64", cancel=cancel)
    except SKIPPABLE_ERRORS as e:
        run_log.warning(f"Warning: could not create blob for {entry.path}")
        logging.debug("Creating blob for %s failed: %s", entry.path, e)
        return None

    return NewTreeEntry(path=entry.path, mode=entry.mode, sha=created.sha)


def _cancel_pending(futures: Iterable[Future]) -> None:
    for future in futures:
        future.cancel()


def duplicate_blobs_concurrently(
    entries: Sequence[TreeEntry],
    source: GitDataReader,
    source_repo: RepositoryRef,
    destination: GitDataWriter,
    dest_repo: RepositoryRef,
    run_log: RunLog,
    max_workers: int,
    cancel: Optional[CancellationToken] = None,
) -> DuplicationResult:
    """Duplicate all blobs using a thread pool.

    Every submitted file finishes (copied or skipped) before this returns,
    unless the run is cancelled or interrupted: files still queued are then
    dropped and the cancellation token is tripped for the ones in flight.
    The returned entries are sorted by path.

    Args:
        entries: Source blob entries
        source: Source session (read)
        source_repo: Source repository
        destination: Destination session (write)
        dest_repo: Destination repository
        run_log: Run log receiving per-file warnings
        max_workers: Maximum number of files in flight
        cancel: Optional cancellation token

    Returns:
        DuplicationResult with the new tree entries and the skipped paths

    Raises:
        RemixCancelledError: If the run was cancelled while duplicating
    """
    logging.debug("Duplicating %d blobs with %d workers", len(entries), max_workers)

    new_entries: List[NewTreeEntry] = []
    skipped: List[str] = []
    cancelled: Optional[RemixCancelledError] = None

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_path = {
            executor.submit(
                duplicate_blob, entry, source, source_repo, destination, dest_repo, run_log, cancel
            ): entry.path
            for entry in entries
        }

        try:
            for future in as_completed(future_to_path):
                path = future_to_path[future]
                try:
                    new_entry = future.result()
                except CancelledError:
                    continue
                except RemixCancelledError as e:
                    if cancelled is None:
                        cancelled = e
                        _cancel_pending(future_to_path)
                    continue
                except Exception:
                    logging.error("Unexpected failure while duplicating %s", path)
                    logging.debug("Traceback: %s", traceback.format_exc())
                    raise

                if new_entry is None:
                    skipped.append(path)
                else:
                    new_entries.append(new_entry)
        except BaseException:
            # Drop queued files; running ones stop at their next request
            _cancel_pending(future_to_path)
            if cancel is not None:
                cancel.cancel()
            raise

    if cancelled is not None:
        raise cancelled

    new_entries.sort(key=lambda item: item.path)
    skipped.sort()
    return DuplicationResult(entries=new_entries, skipped=skipped)


__all__ = ["duplicate_blob", "duplicate_blobs_concurrently", "SKIPPABLE_ERRORS"]
