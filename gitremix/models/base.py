"""Base models for git-remix."""

from pydantic import BaseModel, ConfigDict


class RemixBaseModel(BaseModel):
    """Base model for all git-remix domain models."""

    model_config = ConfigDict(
        extra="forbid",  # Don't allow extra fields
        frozen=False,  # Allow modification (can be changed per model)
        validate_assignment=True,  # Validate on attribute assignment
    )


__all__ = ["RemixBaseModel"]
