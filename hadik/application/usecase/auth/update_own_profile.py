"""Self-service profile edit use case."""

from pydantic import BaseModel, Field

from hadik.application.usecase.base import BaseUseCase
from hadik.domain.model.profile import Profile
from hadik.domain.service import ProfileService
from hadik.domain.value import UserId


class UpdateOwnProfileRequest(BaseModel):
    """Display attributes a member may change about themselves.

    Role is deliberately absent.
    """

    user_id: UserId
    full_name: str | None = Field(default=None, max_length=120)
    avatar_url: str | None = Field(default=None, max_length=2048)


class UpdateOwnProfileResponse(BaseModel):
    profile: Profile


class UpdateOwnProfileUseCase(BaseUseCase):
    """Update the caller's own name and avatar."""

    def __init__(self, profile_service: ProfileService) -> None:
        self.profile_service = profile_service

    async def execute(self, request: UpdateOwnProfileRequest) -> UpdateOwnProfileResponse:
        profile = await self.profile_service.update_display(
            request.user_id,
            full_name=request.full_name,
            avatar_url=request.avatar_url,
        )
        return UpdateOwnProfileResponse(profile=profile)
