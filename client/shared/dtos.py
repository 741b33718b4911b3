"""Shared DTOs for the STACBot client."""
from pydantic import BaseModel, ConfigDict


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PassthroughDTO(BaseDTO):
    """DTO for backend payloads we only display; unknown keys are kept."""

    model_config = ConfigDict(extra="allow")
