"""Shared base for board entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable pydantic base for comments, attachments and events.

    Changes go through `model_copy`, never in-place assignment.
    """

    model_config = ConfigDict(frozen=True)
