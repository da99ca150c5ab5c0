"""
Source and destination sessions for one remix run.

The pair keeps the read role and the write role on separate clients, each
bound to its own credential. When both tokens are the same, one credential
object is shared by the two sessions.
"""

import logging
from typing import Any, Optional, Union

from pydantic import SecretStr

from ..models.context import RemixContext
from ..utils.constants import DEFAULT_API_URL, DEFAULT_TIMEOUT
from .auth import BearerTokenAuth
from .github_client import GitHubClient


class SessionPair:
    """
    Two independently authenticated GitHub sessions.

    Attributes:
        source: Session used for every read from the source repository
        destination: Session used for every read and write on the destination
    """

    def __init__(
        self,
        source_token: Union[str, SecretStr],
        dest_token: Union[str, SecretStr],
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Initialize both sessions.

        Args:
            source_token: Credential with read access to the source repository
            dest_token: Credential with write access to the destination repository
            api_url: Base URL of the REST API
            timeout: Default per-request timeout in seconds
        """
        source_auth = BearerTokenAuth(source_token, label="source")
        dest_auth = BearerTokenAuth(dest_token, label="destination")
        if source_auth.matches(dest_auth):
            logging.debug("Source and destination tokens are identical, sharing one credential")
            dest_auth = source_auth

        self.source = GitHubClient(source_auth, api_url=api_url, timeout=timeout, role="source")
        self.destination = GitHubClient(dest_auth, api_url=api_url, timeout=timeout, role="destination")

    @classmethod
    def from_context(cls, context: RemixContext) -> "SessionPair":
        """Create the sessions described by a remix context."""
        return cls(context.source_token, context.dest_token, api_url=context.api_url, timeout=context.timeout)

    @property
    def shares_credential(self) -> bool:
        """Check if both sessions use the same credential object."""
        return self.source.auth is self.destination.auth

    def close(self) -> None:
        """Close both sessions."""
        self.source.close()
        self.destination.close()

    def __enter__(self) -> "SessionPair":
        return self

    def __exit__(self, exc_type: Optional[type], exc_val: Optional[BaseException], exc_tb: Optional[Any]) -> None:
        self.close()


__all__ = ["SessionPair"]
