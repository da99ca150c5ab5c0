"""
Pydantic models for git-remix.

This package contains all Pydantic models used in the application:
- github_api: Models for GitHub Git Data API requests and responses
- base, repository, context, request, results: Domain models
"""

# GitHub API Models
from .github_api import (
    GitHubBaseModel,
    RepositoryResponse,
    TreeEntry,
    TreeResponse,
    NewTreeEntry,
    BlobResponse,
    CreatedObjectResponse,
    CommitResponse,
    RefResponse,
)

# Domain Models
from .base import RemixBaseModel
from .repository import RepositoryRef
from .context import RemixContext
from .request import RemixRequest
from .results import LogEntry, LogType, DuplicationResult, RemixResult

__all__ = [
    # GitHub API Models
    "GitHubBaseModel",
    "RepositoryResponse",
    "TreeEntry",
    "TreeResponse",
    "NewTreeEntry",
    "BlobResponse",
    "CreatedObjectResponse",
    "CommitResponse",
    "RefResponse",
    # Domain Models
    "RemixBaseModel",
    "RepositoryRef",
    "RemixContext",
    "RemixRequest",
    "LogEntry",
    "LogType",
    "DuplicationResult",
    "RemixResult",
]
