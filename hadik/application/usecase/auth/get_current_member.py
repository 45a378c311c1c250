"""Get current member use case."""

from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.config import Settings
from hadik.domain.model.profile import Profile
from hadik.domain.service import PermissionService, ProfileService
from hadik.domain.value import IdentitySession, Permission


class GetCurrentMemberRequest(BaseModel):
    session: IdentitySession


class GetCurrentMemberResponse(BaseModel):
    """The signed-in member with their resolved permissions."""

    profile: Profile
    permissions: list[Permission]


class GetCurrentMemberUseCase(BaseUseCase):
    """Resolve the signed-in account to its profile and permissions.

    The profile is backfilled if this is the first time the account is seen.
    """

    def __init__(
        self,
        profile_service: ProfileService,
        permission_service: PermissionService,
        settings: Settings,
    ) -> None:
        self.profile_service = profile_service
        self.permission_service = permission_service
        self.settings = settings

    async def execute(self, request: GetCurrentMemberRequest) -> GetCurrentMemberResponse:
        session = request.session
        profile, _ = await self.profile_service.ensure_profile(
            session.user_id, session.email, self.settings.admission.fallback_role
        )
        permissions: list[Permission] = []
        if profile.role is not None:
            resolved = await self.permission_service.resolve(profile.role)
            permissions = [p for p in Permission if p in resolved]
        return GetCurrentMemberResponse(profile=profile, permissions=permissions)
