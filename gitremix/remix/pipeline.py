"""
Pipeline steps of a remix run.

Each function performs one step of the sequence, narrates it in the run log
and converts API failures into RemixStepError carrying the message shown to
the caller. Per-file blob duplication lives in the duplicate module.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Sequence

import httpx

from ..exceptions import GitHubAPIError, MalformedResponseError, RemixStepError
from ..models.github_api import CommitResponse, NewTreeEntry, TreeEntry
from ..models.repository import RepositoryRef
from ..protocols import GitDataReader, GitDataWriter
from ..utils.cancellation import CancellationToken
from ..utils.constants import COMMIT_MESSAGE_TEMPLATE
from .run_log import RunLog

# ============================================================================
# Caller-facing failure messages
# ============================================================================

SOURCE_UNREACHABLE = "source repository unreachable"
TREE_UNAVAILABLE = "could not enumerate tree"
DESTINATION_UNREACHABLE = "destination repository unreachable"
REF_UNAVAILABLE = "could not resolve destination ref"
TREE_NOT_CREATED = "could not create tree"
COMMIT_NOT_CREATED = "could not create commit"
BRANCH_NOT_UPDATED = "could not update branch"
BRANCH_MOVED = "destination branch changed during remix"

# Status class of failures while resolving inputs vs. while writing objects
RESOLUTION_FAILURE_STATUS = 400
CREATION_FAILURE_STATUS = 500
CONFLICT_STATUS = 409


def describe_error(error: Exception) -> str:
    """Short diagnostic for the run log: status and detail when available."""
    if isinstance(error, GitHubAPIError):
        return f"{error.status_code} - {error.detail}" if error.detail else str(error.status_code)
    if isinstance(error, MalformedResponseError):
        return f"malformed response ({error})"
    return str(error)


@contextmanager
def fatal_step(
    run_log: RunLog,
    user_message: str,
    log_message: Callable[[Exception], str],
    status_code: int = RESOLUTION_FAILURE_STATUS,
) -> Iterator[None]:
    """Turn API failures inside the block into a RemixStepError.

    Cancellation and unexpected exceptions pass through untouched.

    Args:
        run_log: Run log receiving the error entry
        user_message: Message returned to the caller
        log_message: Builds the error entry from the underlying exception
        status_code: Status class reported for this failure
    """
    try:
        yield
    except (httpx.HTTPError, MalformedResponseError) as e:
        run_log.error(log_message(e))
        raise RemixStepError(user_message, status_code=status_code, cause=e) from e


def resolve_source_branch(
    source: GitDataReader, repo: RepositoryRef, run_log: RunLog, cancel: Optional[CancellationToken] = None
) -> str:
    """Step 1: default branch of the source repository."""
    run_log.info("Fetching source repository information...")
    with fatal_step(run_log, SOURCE_UNREACHABLE, lambda e: f"Error accessing source repository: {describe_error(e)}"):
        info = source.get_repository(repo, cancel=cancel)
    run_log.success(f"Source branch: {info.default_branch}")
    return info.default_branch


def list_source_blobs(
    source: GitDataReader,
    repo: RepositoryRef,
    branch: str,
    run_log: RunLog,
    cancel: Optional[CancellationToken] = None,
) -> List[TreeEntry]:
    """Step 2: blob entries of the recursive source tree.

    Subtrees and submodule entries are dropped; directories are rebuilt from
    the blob paths when the destination tree is created.
    """
    run_log.info("Downloading source file tree...")
    with fatal_step(run_log, TREE_UNAVAILABLE, lambda e: f"Error fetching file tree: {describe_error(e)}"):
        tree = source.get_tree(repo, branch, recursive=True, cancel=cancel)

    if tree.truncated:
        run_log.warning("Warning: the source tree listing was truncated by the API, some files are missing")

    blobs = tree.blobs
    run_log.success(f"{len(blobs)} files found")
    return blobs


def resolve_destination_branch(
    destination: GitDataWriter, repo: RepositoryRef, run_log: RunLog, cancel: Optional[CancellationToken] = None
) -> str:
    """Step 3: default branch of the destination repository."""
    run_log.info("Fetching destination repository information...")
    with fatal_step(
        run_log, DESTINATION_UNREACHABLE, lambda e: f"Error accessing destination repository: {describe_error(e)}"
    ):
        info = destination.get_repository(repo, cancel=cancel)
    run_log.success(f"Destination branch: {info.default_branch}")
    return info.default_branch


def resolve_branch_tip(
    destination: GitDataWriter,
    repo: RepositoryRef,
    branch: str,
    run_log: RunLog,
    cancel: Optional[CancellationToken] = None,
) -> str:
    """Step 4: commit sha the destination branch points to."""
    run_log.info("Fetching destination branch reference...")
    with fatal_step(run_log, REF_UNAVAILABLE, lambda e: f"Error fetching destination ref: {describe_error(e)}"):
        ref = destination.get_branch_ref(repo, branch, cancel=cancel)
    tip = ref.object.sha
    logging.debug("Destination %s tip is %s", branch, tip)
    return tip


def create_destination_tree(
    destination: GitDataWriter,
    repo: RepositoryRef,
    entries: Sequence[NewTreeEntry],
    run_log: RunLog,
    cancel: Optional[CancellationToken] = None,
) -> str:
    """Step 6: tree holding exactly the copied files.

    The tree is not based on the destination's previous tree, so files that
    only exist in the destination are not part of the new commit.
    """
    run_log.info("Creating new file tree...")
    with fatal_step(
        run_log,
        TREE_NOT_CREATED,
        lambda e: f"Error creating tree: {describe_error(e)}",
        status_code=CREATION_FAILURE_STATUS,
    ):
        tree = destination.create_tree(repo, entries, cancel=cancel)
    run_log.success("Tree created!")
    return tree.sha


def create_remix_commit(
    destination: GitDataWriter,
    repo: RepositoryRef,
    source_repo: RepositoryRef,
    tree_sha: str,
    parent_sha: str,
    run_log: RunLog,
    cancel: Optional[CancellationToken] = None,
) -> CommitResponse:
    """Step 7: commit of the new tree on top of the captured destination tip."""
    run_log.info("Creating commit...")
    message = COMMIT_MESSAGE_TEMPLATE.format(source=source_repo.full_name)
    with fatal_step(
        run_log,
        COMMIT_NOT_CREATED,
        lambda e: f"Error creating commit: {describe_error(e)}",
        status_code=CREATION_FAILURE_STATUS,
    ):
        commit = destination.create_commit(repo, message, tree_sha, [parent_sha], cancel=cancel)
    run_log.success(f"Commit created: {commit.short_sha}")
    return commit


def verify_branch_tip(
    destination: GitDataWriter,
    repo: RepositoryRef,
    branch: str,
    expected_sha: str,
    run_log: RunLog,
    cancel: Optional[CancellationToken] = None,
) -> None:
    """Fail if the destination branch moved since its tip was captured.

    Raises:
        RemixStepError: If the tip cannot be read or no longer matches
    """
    run_log.info("Checking that the destination branch has not moved...")
    with fatal_step(
        run_log,
        REF_UNAVAILABLE,
        lambda e: f"Error fetching destination ref: {describe_error(e)}",
        status_code=CREATION_FAILURE_STATUS,
    ):
        current = destination.get_branch_ref(repo, branch, cancel=cancel).object.sha

    if current != expected_sha:
        run_log.error(
            f"Destination branch {branch} moved from {expected_sha[:7]} to {current[:7]} during the remix; "
            "not overwriting"
        )
        raise RemixStepError(BRANCH_MOVED, status_code=CONFLICT_STATUS)


def update_destination_branch(
    destination: GitDataWriter,
    repo: RepositoryRef,
    branch: str,
    commit_sha: str,
    run_log: RunLog,
    *,
    force: bool = True,
    cancel: Optional[CancellationToken] = None,
) -> None:
    """Step 8: point the destination branch at the new commit."""
    run_log.info("Updating branch...")
    with fatal_step(
        run_log,
        BRANCH_NOT_UPDATED,
        lambda e: f"Error updating branch: {describe_error(e)}",
        status_code=CREATION_FAILURE_STATUS,
    ):
        destination.update_branch_ref(repo, branch, commit_sha, force=force, cancel=cancel)
    if force:
        run_log.success("Branch updated with force push!")
    else:
        run_log.success("Branch updated (fast-forward)")


__all__ = [
    "describe_error",
    "fatal_step",
    "resolve_source_branch",
    "list_source_blobs",
    "resolve_destination_branch",
    "resolve_branch_tip",
    "create_destination_tree",
    "create_remix_commit",
    "verify_branch_tip",
    "update_destination_branch",
    "SOURCE_UNREACHABLE",
    "TREE_UNAVAILABLE",
    "DESTINATION_UNREACHABLE",
    "REF_UNAVAILABLE",
    "TREE_NOT_CREATED",
    "COMMIT_NOT_CREATED",
    "BRANCH_NOT_UPDATED",
    "BRANCH_MOVED",
]
