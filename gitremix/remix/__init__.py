"""
Remix pipeline steps.

This package holds the building blocks the remix service strings together:
the run log, one function per fatal pipeline step, concurrent blob
duplication and the operator summary.

Modules:
    - run_log: Thread-safe accumulator of LogEntry values
    - pipeline: Fatal pipeline steps (metadata, tree, ref, commit, update)
    - duplicate: Per-file blob duplication on a thread pool
    - reporting: Operator-facing run summary
"""

from .duplicate import SKIPPABLE_ERRORS, duplicate_blob, duplicate_blobs_concurrently
from .pipeline import (
    BRANCH_MOVED,
    BRANCH_NOT_UPDATED,
    COMMIT_NOT_CREATED,
    DESTINATION_UNREACHABLE,
    REF_UNAVAILABLE,
    SOURCE_UNREACHABLE,
    TREE_NOT_CREATED,
    TREE_UNAVAILABLE,
    create_destination_tree,
    create_remix_commit,
    describe_error,
    fatal_step,
    list_source_blobs,
    resolve_branch_tip,
    resolve_destination_branch,
    resolve_source_branch,
    update_destination_branch,
    verify_branch_tip,
)
from .reporting import log_remix_summary
from .run_log import RunLog

__all__ = [
    "RunLog",
    "SKIPPABLE_ERRORS",
    "duplicate_blob",
    "duplicate_blobs_concurrently",
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
    "log_remix_summary",
    "SOURCE_UNREACHABLE",
    "TREE_UNAVAILABLE",
    "DESTINATION_UNREACHABLE",
    "REF_UNAVAILABLE",
    "TREE_NOT_CREATED",
    "COMMIT_NOT_CREATED",
    "BRANCH_NOT_UPDATED",
    "BRANCH_MOVED",
]
