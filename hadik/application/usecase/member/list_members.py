"""List members use case."""

from datetime import datetime, timedelta

from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.config import Settings
from hadik.domain.service import ProfileService
from hadik.domain.value import Role, UserId


class ListMembersRequest(BaseModel):
    actor_id: UserId


class MemberItem(BaseModel):
    id: str
    email: str | None
    full_name: str | None
    avatar_url: str | None
    role: Role
    last_seen_at: datetime | None
    online: bool


class ListMembersResponse(BaseModel):
    items: list[MemberItem]


class ListMembersUseCase(BaseUseCase):
    """Provisioned members ordered by name. Unprovisioned profiles are hidden."""

    def __init__(self, profile_service: ProfileService, settings: Settings) -> None:
        self.profile_service = profile_service
        self.settings = settings

    async def execute(self, request: ListMembersRequest) -> ListMembersResponse:
        await self.profile_service.require_admin(request.actor_id, "list members")
        window = timedelta(minutes=self.settings.admission.online_window_minutes)
        members = await self.profile_service.list_members(window)
        return ListMembersResponse(
            items=[
                MemberItem(
                    id=str(p.id),
                    email=p.email.root if p.email else None,
                    full_name=p.full_name,
                    avatar_url=p.avatar_url,
                    role=p.role,
                    last_seen_at=p.last_seen_at,
                    online=online,
                )
                for p, online in members
                if p.role is not None
            ]
        )
