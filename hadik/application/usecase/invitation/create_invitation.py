"""Invite member use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from hadik.adapter.error import EmailDeliveryError
from hadik.application.usecase.base import BaseUseCase
from hadik.config import Settings
from hadik.domain.error import BusinessRuleViolationError, ValidationError
from hadik.domain.service import (
    AllowListService,
    AuditService,
    InvitationNotifier,
    InvitationService,
    ProfileService,
)
from hadik.domain.value import AuditAction, Email, Role, UserId


class CreateInvitationRequest(BaseModel):
    actor_id: UserId
    email: str
    role: Role


class CreateInvitationResponse(BaseModel):
    """Created invitation.

    email_sent is False when the invitation is stored but the notification
    could not be delivered; invite_url can then be shared by hand.
    """

    invitation_id: str
    email: str
    role: Role
    invite_url: str
    expires_at: datetime
    email_sent: bool
    message: str


class CreateInvitationUseCase(BaseUseCase):
    """Directly invite an e-mail with a role, bypassing join requests."""

    def __init__(
        self,
        profile_service: ProfileService,
        allow_list_service: AllowListService,
        invitation_service: InvitationService,
        notifier: InvitationNotifier,
        audit_service: AuditService,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            profile_service: Profile domain service (admin check)
            allow_list_service: Allow-list domain service
            invitation_service: Invitation domain service
            notifier: Invitation delivery port
            audit_service: Audit log domain service
            settings: Application settings
        """
        self.profile_service = profile_service
        self.allow_list_service = allow_list_service
        self.invitation_service = invitation_service
        self.notifier = notifier
        self.audit_service = audit_service
        self.settings = settings

    async def execute(self, request: CreateInvitationRequest) -> CreateInvitationResponse:
        """Allow-list the e-mail, issue an invitation and notify the invitee.

        A delivery failure does not undo the invite; it is reported through
        email_sent.

        Raises:
            NotAuthorizedError: If the actor is not an admin
            ValidationError: If the e-mail is malformed
            BusinessRuleViolationError: If the e-mail belongs to an ADMIN
        """
        actor = await self.profile_service.require_admin(
            request.actor_id, "invite members"
        )
        try:
            email = Email(request.email)
        except ValueError as e:
            raise ValidationError(f"Invalid email address: {request.email!r}") from e

        existing = await self.profile_service.get_by_email(email)
        if existing is not None and existing.is_admin:
            raise BusinessRuleViolationError("Admins cannot be invited to another role")

        with logfire.span(
            "create_invitation",
            email=email.root,
            role=request.role.value,
            actor_id=str(actor.id),
        ):
            await self.allow_list_service.grant(email, request.role)
            invitation = await self.invitation_service.issue(
                email, request.role, invited_by=actor.id
            )

            accept_url = self.settings.accept_invitation_url
            email_sent = True
            try:
                await self.notifier.send_invitation(
                    email, invitation.token, invitation.role, accept_url
                )
            except EmailDeliveryError as e:
                email_sent = False
                logfire.warn(
                    "Invitation e-mail not delivered",
                    invitation_id=str(invitation.id),
                    error=str(e),
                )

            await self.audit_service.record(
                AuditAction.MEMBER_INVITED,
                actor_id=actor.id,
                actor_email=actor.email.root if actor.email else None,
                resource=f"invitation:{invitation.id}",
                details={
                    "email": email.root,
                    "role": request.role.value,
                    "email_sent": email_sent,
                },
            )

            message = (
                f"Invitation sent to {email.root}."
                if email_sent
                else f"Invitation created for {email.root}, but the e-mail could not "
                "be delivered. Share the invitation link manually."
            )
            return CreateInvitationResponse(
                invitation_id=str(invitation.id),
                email=email.root,
                role=invitation.role,
                invite_url=f"{accept_url}?token={invitation.token.root}",
                expires_at=invitation.expires_at,
                email_sent=email_sent,
                message=message,
            )
