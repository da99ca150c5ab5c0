"""
Pydantic models for GitHub Git Data API payloads.

This module provides typed models for every API call the remix pipeline
makes, so malformed upstream responses fail validation at the boundary
instead of leaking missing values into later steps.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.constants import BLOB_TYPE


# ============================================================================
# Base Models
# ============================================================================


class GitHubBaseModel(BaseModel):
    """Base model for all GitHub API responses."""

    model_config = ConfigDict(extra="allow")  # Allow extra fields from API


class GitHubRequestModel(BaseModel):
    """Base model for request bodies sent to the API."""

    model_config = ConfigDict(extra="ignore")


# ============================================================================
# Repository Models
# ============================================================================


class RepositoryResponse(GitHubBaseModel):
    """Response for ``GET /repos/{owner}/{repo}``."""

    full_name: Optional[str] = None
    default_branch: str
    private: Optional[bool] = None

    @field_validator("default_branch")
    @classmethod
    def branch_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("default_branch is empty")
        return value


# ============================================================================
# Tree Models
# ============================================================================


class TreeEntry(GitHubBaseModel):
    """One entry of a tree listing."""

    path: str
    mode: str
    type: str  # blob, tree, commit (submodule)
    sha: str
    size: Optional[int] = None

    @property
    def is_blob(self) -> bool:
        """Check if the entry references file content."""
        return self.type == BLOB_TYPE


class TreeResponse(GitHubBaseModel):
    """Response for ``GET /repos/{owner}/{repo}/git/trees/{sha}``."""

    sha: str
    tree: List[TreeEntry]
    truncated: bool = False

    @property
    def blobs(self) -> List[TreeEntry]:
        """Entries of type blob, in listing order."""
        return [entry for entry in self.tree if entry.is_blob]


class NewTreeEntry(GitHubRequestModel):
    """Tree entry submitted when creating a tree in the destination."""

    path: str
    mode: str
    type: Literal["blob"] = "blob"
    sha: str


class TreeRequest(GitHubRequestModel):
    """Body for ``POST /repos/{owner}/{repo}/git/trees``.

    No ``base_tree`` is sent: the new tree holds exactly the given entries.
    """

    tree: List[NewTreeEntry]


# ============================================================================
# Blob Models
# ============================================================================


class BlobResponse(GitHubBaseModel):
    """Response for ``GET /repos/{owner}/{repo}/git/blobs/{sha}``."""

    sha: str
    content: str
    encoding: str = "base64"
    size: Optional[int] = None


class BlobRequest(GitHubRequestModel):
    """Body for ``POST /repos/{owner}/{repo}/git/blobs``."""

    content: str
    encoding: Literal["base64", "utf-8"] = "base64"


class CreatedObjectResponse(GitHubBaseModel):
    """Response carrying the sha of a newly created object (blob or tree)."""

    sha: str


# ============================================================================
# Commit Models
# ============================================================================


class CommitRequest(GitHubRequestModel):
    """Body for ``POST /repos/{owner}/{repo}/git/commits``."""

    message: str
    tree: str
    parents: List[str] = Field(min_length=1, max_length=1)


class CommitResponse(GitHubBaseModel):
    """Response for a created commit."""

    sha: str
    message: Optional[str] = None

    @property
    def short_sha(self) -> str:
        """Abbreviated sha as shown in progress messages."""
        return self.sha[:7]


# ============================================================================
# Ref Models
# ============================================================================


class RefObject(GitHubBaseModel):
    """Object a ref points to."""

    sha: str
    type: Optional[str] = None


class RefResponse(GitHubBaseModel):
    """Response for ``GET /repos/{owner}/{repo}/git/ref/heads/{branch}``."""

    ref: str
    object: RefObject


class UpdateRefRequest(GitHubRequestModel):
    """Body for ``PATCH /repos/{owner}/{repo}/git/refs/heads/{branch}``."""

    sha: str
    force: bool = False


__all__ = [
    "GitHubBaseModel",
    "GitHubRequestModel",
    "RepositoryResponse",
    "TreeEntry",
    "TreeResponse",
    "NewTreeEntry",
    "TreeRequest",
    "BlobResponse",
    "BlobRequest",
    "CreatedObjectResponse",
    "CommitRequest",
    "CommitResponse",
    "RefObject",
    "RefResponse",
    "UpdateRefRequest",
]
