"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

from hadik.domain.model.invitation import Invitation
from hadik.domain.repository.invitation import InvitationRepository
from hadik.domain.value import Email, InvitationId, InviteToken


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self) -> None:
        self._invitations: dict[str, Invitation] = {}  # Keyed by e-mail

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        for invitation in self._invitations.values():
            if invitation.id == invitation_id:
                return invitation
        return None

    async def find_by_token(self, token: InviteToken) -> Optional[Invitation]:
        for invitation in self._invitations.values():
            if invitation.token == token:
                return invitation
        return None

    async def find_by_email(self, email: Email) -> Optional[Invitation]:
        return self._invitations.get(email.root)

    async def upsert_by_email(self, invitation: Invitation) -> Invitation:
        existing = self._invitations.get(invitation.email.root)
        if existing is not None:
            invitation = invitation.model_copy(update={"id": existing.id})
        self._invitations[invitation.email.root] = invitation
        return invitation

    async def mark_accepted(
        self, token: InviteToken, accepted_at: datetime
    ) -> Optional[Invitation]:
        invitation = await self.find_by_token(token)
        if (
            invitation is None
            or invitation.accepted_at is not None
            or invitation.is_expired(accepted_at)
        ):
            return None
        accepted = invitation.model_copy(update={"accepted_at": accepted_at})
        self._invitations[accepted.email.root] = accepted
        return accepted

    async def delete(self, invitation_id: InvitationId) -> bool:
        invitation = await self.find_by_id(invitation_id)
        if invitation is None:
            return False
        del self._invitations[invitation.email.root]
        return True

    async def find_all(self) -> list[Invitation]:
        return sorted(
            self._invitations.values(), key=lambda i: i.created_at, reverse=True
        )
