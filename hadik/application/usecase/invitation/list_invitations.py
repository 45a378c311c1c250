"""List invitations use case."""

from datetime import datetime

from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.domain.service import InvitationService, ProfileService
from hadik.domain.value import InvitationStatus, Role, UserId
from hadik.util.clock import Clock


class ListInvitationsRequest(BaseModel):
    actor_id: UserId


class InvitationItem(BaseModel):
    id: str
    email: str
    role: Role
    status: InvitationStatus
    expires_at: datetime
    accepted_at: datetime | None
    created_at: datetime


class ListInvitationsResponse(BaseModel):
    items: list[InvitationItem]


class ListInvitationsUseCase(BaseUseCase):
    """All invitations, newest first, with their derived status."""

    def __init__(
        self,
        profile_service: ProfileService,
        invitation_service: InvitationService,
        clock: Clock,
    ) -> None:
        self.profile_service = profile_service
        self.invitation_service = invitation_service
        self.clock = clock

    async def execute(self, request: ListInvitationsRequest) -> ListInvitationsResponse:
        await self.profile_service.require_admin(request.actor_id, "list invitations")
        now = self.clock.now()
        invitations = await self.invitation_service.list_all()
        return ListInvitationsResponse(
            items=[
                InvitationItem(
                    id=str(i.id),
                    email=i.email.root,
                    role=i.role,
                    status=i.status_at(now),
                    expires_at=i.expires_at,
                    accepted_at=i.accepted_at,
                    created_at=i.created_at,
                )
                for i in invitations
            ]
        )
