"""
Git data protocols for type safety.

This module defines the read and write sides of the object store API.
The pipeline takes the source session as a GitDataReader and the
destination session as a GitDataWriter, which keeps writes off the source
credential at the type level.
"""

from typing import List, Optional, Protocol, Sequence

from ..models.github_api import (
    BlobResponse,
    CommitResponse,
    CreatedObjectResponse,
    NewTreeEntry,
    RefResponse,
    RepositoryResponse,
    TreeResponse,
)
from ..models.repository import RepositoryRef
from ..utils.cancellation import CancellationToken


class GitDataReader(Protocol):
    """
    Protocol for the source side of a remix.

    Only read operations are available.
    """

    def get_repository(self, repo: RepositoryRef, *, cancel: Optional[CancellationToken] = None) -> RepositoryResponse:
        """Fetch repository metadata."""
        ...

    def get_tree(
        self,
        repo: RepositoryRef,
        tree_ish: str,
        *,
        recursive: bool = True,
        cancel: Optional[CancellationToken] = None,
    ) -> TreeResponse:
        """Fetch a tree listing."""
        ...

    def get_blob(self, repo: RepositoryRef, sha: str, *, cancel: Optional[CancellationToken] = None) -> BlobResponse:
        """Fetch one blob."""
        ...


class GitDataWriter(Protocol):
    """
    Protocol for the destination side of a remix.

    Besides object creation, the destination is read for its metadata and
    branch tip.
    """

    def get_repository(self, repo: RepositoryRef, *, cancel: Optional[CancellationToken] = None) -> RepositoryResponse:
        """Fetch repository metadata."""
        ...

    def get_branch_ref(
        self, repo: RepositoryRef, branch: str, *, cancel: Optional[CancellationToken] = None
    ) -> RefResponse:
        """Fetch the ref of a branch."""
        ...

    def create_blob(
        self,
        repo: RepositoryRef,
        content: str,
        *,
        encoding: str = "base64",
        cancel: Optional[CancellationToken] = None,
    ) -> CreatedObjectResponse:
        """Create a blob."""
        ...

    def create_tree(
        self,
        repo: RepositoryRef,
        entries: Sequence[NewTreeEntry],
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> CreatedObjectResponse:
        """Create a tree from scratch."""
        ...

    def create_commit(
        self,
        repo: RepositoryRef,
        message: str,
        tree: str,
        parents: List[str],
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> CommitResponse:
        """Create a commit."""
        ...

    def update_branch_ref(
        self,
        repo: RepositoryRef,
        branch: str,
        sha: str,
        *,
        force: bool = False,
        cancel: Optional[CancellationToken] = None,
    ) -> RefResponse:
        """Move a branch."""
        ...


__all__ = ["GitDataReader", "GitDataWriter"]
