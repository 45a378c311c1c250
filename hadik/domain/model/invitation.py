"""Invitation entity.

Invitations are admin-initiated, token-based, time-boxed access grants.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from hadik.domain.model.common import DomainModel
from hadik.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InviteToken,
    Role,
    UserId,
)
from hadik.util.clock import utc_now


class Invitation(DomainModel):
    """Invitation ledger entry - one per e-mail.

    Business rules:
    - token is unique, unguessable and single-use
    - accepted_at set means terminal, never re-accepted
    - past expires_at means terminal (expired) regardless of accepted_at
    - re-inviting an e-mail replaces its unaccepted invitation
    """

    id: InvitationId
    email: Email
    role: Role
    token: InviteToken
    invited_by: Optional[UserId] = None
    accepted_at: Optional[datetime] = None
    expires_at: datetime
    created_at: datetime = Field(default_factory=utc_now)

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def status_at(self, now: datetime) -> InvitationStatus:
        """Derived status for listings: accepted, else expired, else pending."""
        if self.accepted_at is not None:
            return InvitationStatus.ACCEPTED
        if self.is_expired(now):
            return InvitationStatus.EXPIRED
        return InvitationStatus.PENDING
