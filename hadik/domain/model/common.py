"""Base model for admission entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for ledger rows and profiles.

    Entities are frozen; state changes produce a copy via model_copy(update=...).
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,  # Email and InviteToken root values
    )
