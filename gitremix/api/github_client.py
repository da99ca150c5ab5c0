"""
GitHub Git Data API client.

This module provides the GitHubClient class, one authenticated session
against the low-level object store API (repositories, trees, blobs, commits,
refs). A remix run uses two of them, see SessionPair.

Key Features:
    - One bearer credential per client, applied by httpx.Auth
    - Typed request bodies and responses using Pydantic models
    - Cancellation token and deadline honoured by every call
    - Distinct errors for error statuses and malformed bodies
    - Proper resource cleanup with context managers
"""

# Standard library imports
import logging
import threading
from typing import Any, Dict, List, Optional, Sequence, Union

# Third-party imports
import httpx
from pydantic import SecretStr

# Local imports
from ..exceptions import RemixCancelledError
from ..models.github_api import (
    BlobRequest,
    BlobResponse,
    CommitRequest,
    CommitResponse,
    CreatedObjectResponse,
    NewTreeEntry,
    RefResponse,
    RepositoryResponse,
    TreeRequest,
    TreeResponse,
    UpdateRefRequest,
)
from ..models.repository import RepositoryRef
from ..utils.cancellation import CancellationToken
from ..utils.constants import DEFAULT_API_URL, DEFAULT_TIMEOUT, HEADS_PREFIX
from ..utils.response_utils import parse_model
from ..utils.session import create_session_with_retry
from .auth import BearerTokenAuth


# ============================================================================
# Request Metrics
# ============================================================================


class RequestMetrics:
    """Count API requests issued by one client; safe across worker threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.total_requests = 0
        self.failed_requests = 0

    def log_request(self, success: bool) -> None:
        """Record one request."""
        with self._lock:
            self.total_requests += 1
            if not success:
                self.failed_requests += 1

    def get_summary(self) -> Dict[str, int]:
        with self._lock:
            return {"total_requests": self.total_requests, "failed_requests": self.failed_requests}


# ============================================================================
# Main Client Class
# ============================================================================


class GitHubClient:
    """
    A client for the GitHub Git Data API bound to one credential.

    API documentation:
    - https://docs.github.com/en/rest/git

    Repository arguments are RepositoryRef values; branch arguments are bare
    branch names (``main``), never full ref names.
    """

    def __init__(
        self,
        auth: Union[BearerTokenAuth, str, SecretStr],
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        role: str = "session",
    ) -> None:
        """Initialize the client.

        Args:
            auth: Credential for this session (an existing BearerTokenAuth is shared, not copied)
            api_url: Base URL of the REST API
            timeout: Default per-request timeout in seconds
            role: Session name used in logs ("source" or "destination")
        """
        self.auth = auth if isinstance(auth, BearerTokenAuth) else BearerTokenAuth(auth, label=role)
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.role = role
        self.session = create_session_with_retry(base_url=self.api_url, auth=self.auth, timeout=timeout)
        self._metrics = RequestMetrics()

    def close(self) -> None:
        """Close the session and release all connections."""
        if self.session and not self.session.is_closed:
            self.session.close()
            summary = self._metrics.get_summary()
            logging.debug(
                "%s session closed (%d requests, %d failed)",
                self.role,
                summary["total_requests"],
                summary["failed_requests"],
            )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, exc_type: Optional[type], exc_val: Optional[BaseException], exc_tb: Optional[Any]) -> None:
        self.close()

    @property
    def metrics(self) -> Dict[str, int]:
        """Request counters for this session."""
        return self._metrics.get_summary()

    # ========================================================================
    # Request plumbing
    # ========================================================================

    def _request(
        self,
        method: str,
        path: str,
        operation: str,
        *,
        cancel: Optional[CancellationToken] = None,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Send one request through this session.

        Raises:
            RemixCancelledError: If the token is cancelled, or the deadline ran
                out before or during the request
            httpx.HTTPError: For transport failures
        """
        timeout = self.timeout
        if cancel is not None:
            cancel.raise_if_cancelled(operation)
            timeout = cancel.timeout_for(self.timeout)

        logging.debug("[%s] %s %s", self.role, method, path)
        try:
            response = self.session.request(method, path, json=json, params=params, timeout=timeout)
        except httpx.TimeoutException as e:
            if cancel is not None and cancel.cancelled:
                raise RemixCancelledError(f"Deadline exceeded during {operation}") from e
            self._metrics.log_request(success=False)
            raise

        self._metrics.log_request(success=response.is_success)
        return response

    @staticmethod
    def _repo_path(repo: RepositoryRef) -> str:
        return f"/repos/{repo.owner}/{repo.name}"

    # ========================================================================
    # Read operations
    # ========================================================================

    def get_repository(self, repo: RepositoryRef, *, cancel: Optional[CancellationToken] = None) -> RepositoryResponse:
        """Fetch repository metadata (including its default branch)."""
        operation = f"get repository {repo.full_name}"
        response = self._request("GET", self._repo_path(repo), operation, cancel=cancel)
        return parse_model(response, RepositoryResponse, operation)

    def get_tree(
        self,
        repo: RepositoryRef,
        tree_ish: str,
        *,
        recursive: bool = True,
        cancel: Optional[CancellationToken] = None,
    ) -> TreeResponse:
        """Fetch a tree listing for a branch name or tree sha.

        Args:
            repo: Repository to read
            tree_ish: Branch name or tree sha
            recursive: List every nested entry (full paths) instead of one level
            cancel: Optional cancellation token
        """
        operation = f"get tree {tree_ish} of {repo.full_name}"
        params = {"recursive": "1"} if recursive else None
        response = self._request(
            "GET", f"{self._repo_path(repo)}/git/trees/{tree_ish}", operation, cancel=cancel, params=params
        )
        return parse_model(response, TreeResponse, operation)

    def get_branch_ref(
        self, repo: RepositoryRef, branch: str, *, cancel: Optional[CancellationToken] = None
    ) -> RefResponse:
        """Fetch the ref of a branch; ``object.sha`` is the branch tip."""
        operation = f"get ref {HEADS_PREFIX}{branch} of {repo.full_name}"
        response = self._request(
            "GET", f"{self._repo_path(repo)}/git/ref/{HEADS_PREFIX}{branch}", operation, cancel=cancel
        )
        return parse_model(response, RefResponse, operation)

    def get_blob(self, repo: RepositoryRef, sha: str, *, cancel: Optional[CancellationToken] = None) -> BlobResponse:
        """Fetch one blob; content is base64 encoded."""
        operation = f"get blob {sha} of {repo.full_name}"
        response = self._request("GET", f"{self._repo_path(repo)}/git/blobs/{sha}", operation, cancel=cancel)
        return parse_model(response, BlobResponse, operation)

    # ========================================================================
    # Write operations
    # ========================================================================

    def create_blob(
        self,
        repo: RepositoryRef,
        content: str,
        *,
        encoding: str = "base64",
        cancel: Optional[CancellationToken] = None,
    ) -> CreatedObjectResponse:
        """Create a blob from already encoded content."""
        operation = f"create blob in {repo.full_name}"
        body = BlobRequest(content=content, encoding=encoding)  # type: ignore[arg-type]
        response = self._request(
            "POST", f"{self._repo_path(repo)}/git/blobs", operation, cancel=cancel, json=body.model_dump()
        )
        return parse_model(response, CreatedObjectResponse, operation)

    def create_tree(
        self,
        repo: RepositoryRef,
        entries: Sequence[NewTreeEntry],
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> CreatedObjectResponse:
        """Create a tree holding exactly ``entries`` (no base tree)."""
        operation = f"create tree in {repo.full_name}"
        body = TreeRequest(tree=list(entries))
        response = self._request(
            "POST", f"{self._repo_path(repo)}/git/trees", operation, cancel=cancel, json=body.model_dump()
        )
        return parse_model(response, CreatedObjectResponse, operation)

    def create_commit(
        self,
        repo: RepositoryRef,
        message: str,
        tree: str,
        parents: List[str],
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> CommitResponse:
        """Create a commit object with a single parent."""
        operation = f"create commit in {repo.full_name}"
        body = CommitRequest(message=message, tree=tree, parents=parents)
        response = self._request(
            "POST", f"{self._repo_path(repo)}/git/commits", operation, cancel=cancel, json=body.model_dump()
        )
        return parse_model(response, CommitResponse, operation)

    def update_branch_ref(
        self,
        repo: RepositoryRef,
        branch: str,
        sha: str,
        *,
        force: bool = False,
        cancel: Optional[CancellationToken] = None,
    ) -> RefResponse:
        """Point a branch at ``sha``; with ``force`` non fast-forward moves are accepted."""
        operation = f"update ref {HEADS_PREFIX}{branch} of {repo.full_name}"
        body = UpdateRefRequest(sha=sha, force=force)
        response = self._request(
            "PATCH",
            f"{self._repo_path(repo)}/git/refs/{HEADS_PREFIX}{branch}",
            operation,
            cancel=cancel,
            json=body.model_dump(),
        )
        return parse_model(response, RefResponse, operation)


__all__ = ["GitHubClient", "RequestMetrics"]
