"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from hadik.domain.model.invitation import Invitation
from hadik.domain.value import Email, InvitationId, InviteToken


class InvitationRepository(ABC):
    """Repository for the invitation ledger (one invitation per e-mail)."""

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InviteToken) -> Invitation | None:
        """Find an invitation by token.

        Used when the invitee opens the accept link.

        Args:
            token: The invitation token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Invitation | None:
        """Find the invitation for an e-mail.

        Args:
            email: Normalized e-mail

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def upsert_by_email(self, invitation: Invitation) -> Invitation:
        """Create or replace the invitation for the invitation's e-mail.

        An existing row for the e-mail keeps its id; token, role, inviter,
        expiry and acceptance are replaced (latest invite wins).

        Args:
            invitation: Invitation to write

        Returns:
            The stored invitation
        """
        pass

    @abstractmethod
    async def mark_accepted(
        self, token: InviteToken, accepted_at: datetime
    ) -> Invitation | None:
        """Atomically mark an invitation accepted.

        The write only happens if, at call time, the invitation exists, has
        not been accepted and has not expired.

        Args:
            token: Invitation token
            accepted_at: Acceptance time, also used for the expiry check

        Returns:
            The accepted invitation, or None if the conditions did not hold
        """
        pass

    @abstractmethod
    async def delete(self, invitation_id: InvitationId) -> bool:
        """Delete an invitation.

        Args:
            invitation_id: Invitation to delete

        Returns:
            True if a row was removed
        """
        pass

    @abstractmethod
    async def find_all(self) -> list[Invitation]:
        """List all invitations, newest first.

        Returns:
            Invitations
        """
        pass
