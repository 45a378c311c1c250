"""List pending join requests use case."""

from datetime import datetime

from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.domain.service import JoinRequestService, ProfileService
from hadik.domain.value import UserId


class ListPendingJoinRequestsRequest(BaseModel):
    actor_id: UserId


class JoinRequestItem(BaseModel):
    id: str
    email: str
    ip: str | None
    created_at: datetime


class ListPendingJoinRequestsResponse(BaseModel):
    items: list[JoinRequestItem]


class ListPendingJoinRequestsUseCase(BaseUseCase):
    """Pending join requests for the admin queue, oldest first."""

    def __init__(
        self, profile_service: ProfileService, join_request_service: JoinRequestService
    ) -> None:
        self.profile_service = profile_service
        self.join_request_service = join_request_service

    async def execute(
        self, request: ListPendingJoinRequestsRequest
    ) -> ListPendingJoinRequestsResponse:
        await self.profile_service.require_admin(request.actor_id, "list join requests")
        pending = await self.join_request_service.list_pending()
        return ListPendingJoinRequestsResponse(
            items=[
                JoinRequestItem(
                    id=str(r.id), email=r.email.root, ip=r.ip, created_at=r.created_at
                )
                for r in pending
            ]
        )
