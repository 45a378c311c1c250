"""Invitation domain service."""

import secrets
from datetime import timedelta
from uuid import uuid4

import logfire

from hadik.domain.error import NotFoundError
from hadik.domain.model.invitation import Invitation
from hadik.domain.repository import InvitationRepository
from hadik.domain.value import (
    Email,
    InvitationId,
    InvitationStep,
    InviteToken,
    Role,
    UserId,
)
from hadik.util.clock import Clock

from .base import Service


def generate_token() -> InviteToken:
    """Fresh unguessable URL-safe token (256 bits of entropy)."""
    return InviteToken(secrets.token_urlsafe(32))


class InvitationService(Service):
    """Domain service for time-boxed invitations."""

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        clock: Clock,
        ttl: timedelta = timedelta(days=7),
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            clock: Time source for expiry checks
            ttl: Lifetime of a newly issued invitation
        """
        self.invitation_repository = invitation_repository
        self.clock = clock
        self.ttl = ttl

    async def issue(
        self, email: Email, role: Role, invited_by: UserId | None
    ) -> Invitation:
        """Issue an invitation, replacing any previous one for the e-mail.

        Args:
            email: Invitee
            role: Role applied on acceptance
            invited_by: Inviting admin

        Returns:
            The stored invitation with a fresh token
        """
        with logfire.span(
            "invitation_service.issue", email=email.root, role=role.value
        ):
            now = self.clock.now()
            invitation = Invitation(
                id=InvitationId(uuid4()),
                email=email,
                role=role,
                token=generate_token(),
                invited_by=invited_by,
                accepted_at=None,
                expires_at=now + self.ttl,
                created_at=now,
            )
            saved = await self.invitation_repository.upsert_by_email(invitation)
            logfire.info(
                "Invitation issued",
                invitation_id=str(saved.id),
                email=email.root,
                token=saved.token.redacted(),
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def get_by_id(self, invitation_id: InvitationId) -> Invitation:
        """Get an invitation by ID.

        Raises:
            NotFoundError: If the invitation does not exist
        """
        invitation = await self.invitation_repository.find_by_id(invitation_id)
        if not invitation:
            raise NotFoundError("Invitation", str(invitation_id))
        return invitation

    async def get_by_token(self, token: InviteToken) -> Invitation | None:
        """Get invitation by token.

        Args:
            token: Invitation token

        Returns:
            Invitation if found, None otherwise
        """
        with logfire.span("invitation_service.get_by_token", token=token.redacted()):
            invitation = await self.invitation_repository.find_by_token(token)
            if invitation is None:
                logfire.warn("Invitation not found", token=token.redacted())
            return invitation

    def classify(self, invitation: Invitation | None) -> InvitationStep | None:
        """Check an invitation in validation order: lookup, expiry, acceptance.

        Returns:
            The terminal step that applies, or None if the invitation is usable
        """
        if invitation is None:
            return InvitationStep.INVALID_TOKEN
        if invitation.is_expired(self.clock.now()):
            return InvitationStep.EXPIRED
        if invitation.accepted_at is not None:
            return InvitationStep.ALREADY_ACCEPTED
        return None

    async def mark_accepted(self, token: InviteToken) -> Invitation | None:
        """Atomically accept an invitation that is still valid at call time.

        Returns:
            The accepted invitation, or None if it was missing, expired or
            already accepted when the write ran
        """
        with logfire.span("invitation_service.mark_accepted", token=token.redacted()):
            accepted = await self.invitation_repository.mark_accepted(
                token, self.clock.now()
            )
            if accepted is None:
                logfire.warn("Invitation could not be accepted", token=token.redacted())
            else:
                logfire.info(
                    "Invitation accepted",
                    invitation_id=str(accepted.id),
                    email=accepted.email.root,
                )
            return accepted

    async def cancel(self, invitation_id: InvitationId) -> bool:
        """Delete an invitation.

        Returns:
            True if a row was removed
        """
        with logfire.span("invitation_service.cancel", invitation_id=str(invitation_id)):
            removed = await self.invitation_repository.delete(invitation_id)
            logfire.info(
                "Invitation cancelled", invitation_id=str(invitation_id), removed=removed
            )
            return removed

    async def list_all(self) -> list[Invitation]:
        """All invitations, newest first."""
        return await self.invitation_repository.find_all()
