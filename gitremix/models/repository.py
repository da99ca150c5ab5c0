"""Repository-related models for git-remix."""

from pydantic import ConfigDict, field_validator

from .base import RemixBaseModel


class RepositoryRef(RemixBaseModel):
    """
    Identifies a repository on the remote API.

    Attributes:
        owner: Account or organization that owns the repository
        name: Repository name without any ``.git`` suffix
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    owner: str
    name: str

    @field_validator("owner", "name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        """Reject empty or whitespace-only identifiers."""
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @property
    def full_name(self) -> str:
        """Repository in ``owner/name`` form."""
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name


__all__ = ["RepositoryRef"]
