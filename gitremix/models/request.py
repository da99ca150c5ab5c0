"""Inbound request model for the remix endpoint."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RemixRequest(BaseModel):
    """
    JSON body accepted by the remix endpoint.

    Field names follow the wire format (camelCase aliases). A legacy single
    ``token`` is applied to whichever of ``sourceToken``/``destToken`` is
    missing.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    source_owner: Optional[str] = Field(default=None, alias="sourceOwner")
    source_repo: Optional[str] = Field(default=None, alias="sourceRepo")
    dest_owner: Optional[str] = Field(default=None, alias="destOwner")
    dest_repo: Optional[str] = Field(default=None, alias="destRepo")
    source_token: Optional[str] = Field(default=None, alias="sourceToken")
    dest_token: Optional[str] = Field(default=None, alias="destToken")
    token: Optional[str] = None
    force: bool = True

    @property
    def effective_source_token(self) -> Optional[str]:
        return self.source_token or self.token

    @property
    def effective_dest_token(self) -> Optional[str]:
        return self.dest_token or self.token

    @property
    def is_complete(self) -> bool:
        """Check if all six logical fields resolve to non-empty strings."""
        values = (
            self.source_owner,
            self.source_repo,
            self.dest_owner,
            self.dest_repo,
            self.effective_source_token,
            self.effective_dest_token,
        )
        return all(value and value.strip() for value in values)


__all__ = ["RemixRequest"]
