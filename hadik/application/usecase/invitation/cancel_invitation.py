"""Cancel invitation use case."""

import logfire
from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.domain.error import ValidationError
from hadik.domain.service import (
    AllowListService,
    AuditService,
    InvitationService,
    ProfileService,
)
from hadik.domain.value import AuditAction, Email, InvitationId, UserId


class CancelInvitationRequest(BaseModel):
    actor_id: UserId
    invitation_id: InvitationId
    email: str


class CancelInvitationResponse(BaseModel):
    invitation_removed: bool
    allow_list_removed: bool


class CancelInvitationUseCase(BaseUseCase):
    """Withdraw an invitation and the allow-list entry it created.

    An account already created through the invitation is left alone;
    cancelling only stops future admission through the link.
    """

    def __init__(
        self,
        profile_service: ProfileService,
        allow_list_service: AllowListService,
        invitation_service: InvitationService,
        audit_service: AuditService,
    ) -> None:
        self.profile_service = profile_service
        self.allow_list_service = allow_list_service
        self.invitation_service = invitation_service
        self.audit_service = audit_service

    async def execute(self, request: CancelInvitationRequest) -> CancelInvitationResponse:
        actor = await self.profile_service.require_admin(
            request.actor_id, "cancel invitations"
        )
        try:
            email = Email(request.email)
        except ValueError as e:
            raise ValidationError(f"Invalid email address: {request.email!r}") from e

        with logfire.span(
            "cancel_invitation",
            invitation_id=str(request.invitation_id),
            email=email.root,
        ):
            invitation_removed = await self.invitation_service.cancel(request.invitation_id)
            allow_list_removed = await self.allow_list_service.revoke(email)

            await self.audit_service.record(
                AuditAction.INVITATION_CANCELLED,
                actor_id=actor.id,
                actor_email=actor.email.root if actor.email else None,
                resource=f"invitation:{request.invitation_id}",
                details={"email": email.root},
            )
            return CancelInvitationResponse(
                invitation_removed=invitation_removed,
                allow_list_removed=allow_list_removed,
            )
