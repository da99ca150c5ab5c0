"""
GitHub API client modules.

This package provides the clients used by a remix run:
- Bearer token authentication
- GitHubClient for the Git Data API (one credential per client)
- SessionPair holding the source and destination sessions
"""

from .auth import BearerTokenAuth
from .github_client import GitHubClient
from .session_pair import SessionPair

# Import GitHub API models for convenience
from ..models.github_api import (
    RepositoryResponse,
    TreeResponse,
    BlobResponse,
    CreatedObjectResponse,
    CommitResponse,
    RefResponse,
)

__all__ = [
    "BearerTokenAuth",
    "GitHubClient",
    "SessionPair",
    # API Models
    "RepositoryResponse",
    "TreeResponse",
    "BlobResponse",
    "CreatedObjectResponse",
    "CommitResponse",
    "RefResponse",
]
