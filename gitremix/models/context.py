"""Context and configuration models for remix runs."""

from typing import Optional

from pydantic import Field, SecretStr, field_validator

from ..utils.constants import DEFAULT_API_URL, DEFAULT_MAX_WORKERS, DEFAULT_TIMEOUT
from .base import RemixBaseModel
from .repository import RepositoryRef


class RemixContext(RemixBaseModel):
    """
    Everything one remix run needs.

    Attributes:
        source: Repository whose files are copied
        destination: Repository whose default branch is replaced
        source_token: Credential used for every read from the source
        dest_token: Credential used for every read and write on the destination
        api_url: Base URL of the GitHub REST API
        max_workers: Maximum number of files duplicated concurrently
        timeout: Per-request timeout in seconds
        force: Force-update the destination branch (non fast-forward allowed)
        verify_tip: Re-read the destination tip before updating the branch and
            fail if it moved since the run started
        deadline_seconds: Optional wall-clock budget for the whole run
    """

    source: RepositoryRef
    destination: RepositoryRef
    source_token: SecretStr
    dest_token: SecretStr
    api_url: str = DEFAULT_API_URL
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, ge=1, le=100)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    force: bool = True
    verify_tip: bool = True
    deadline_seconds: Optional[float] = Field(default=None, gt=0)

    @field_validator("source_token", "dest_token")
    @classmethod
    def token_not_empty(cls, value: SecretStr) -> SecretStr:
        """Reject blank credentials."""
        if not value.get_secret_value().strip():
            raise ValueError("token must not be empty")
        return value

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def same_credential(self) -> bool:
        """Check if both sessions authenticate with the same token."""
        return self.source_token.get_secret_value() == self.dest_token.get_secret_value()


__all__ = ["RemixContext"]
