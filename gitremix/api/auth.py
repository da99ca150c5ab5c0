"""
Bearer token authentication for the GitHub API.

Each session owns exactly one BearerTokenAuth, so a request can only ever
carry the credential of the session that sends it.
"""

# Standard library imports
import logging
from typing import Generator, Union

# Third-party imports
import httpx
from pydantic import SecretStr


class BearerTokenAuth(httpx.Auth):
    """
    Static bearer token authentication flow.

    Personal access tokens cannot be refreshed, so a 401 is logged and
    returned to the caller as-is.
    """

    def __init__(self, token: Union[str, SecretStr], label: str = "session") -> None:
        """
        Initialize bearer authentication.

        Args:
            token: Access token, plain or wrapped in SecretStr
            label: Name of the session using this credential (for logging)
        """
        secret = token if isinstance(token, SecretStr) else SecretStr(token)
        if not secret.get_secret_value():
            raise ValueError("Access token must not be empty")
        self._token = secret
        self.label = label

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        """
        Execute the authentication flow for a request.

        Adds the Authorization header and reports rejected credentials.
        """
        request.headers["Authorization"] = f"Bearer {self._token.get_secret_value()}"

        response = yield request

        if response.status_code == 401:
            logging.debug("Credential for %s session was rejected (401) by %s", self.label, request.url.host)

    @property
    def token(self) -> SecretStr:
        """The wrapped token (never rendered in reprs)."""
        return self._token

    def matches(self, other: "BearerTokenAuth") -> bool:
        """Check if two credentials carry the same token."""
        return self._token.get_secret_value() == other.token.get_secret_value()

    def __repr__(self) -> str:
        return f"BearerTokenAuth(label={self.label!r}, token='**********')"


__all__ = ["BearerTokenAuth"]
