"""Change member role use case."""

from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.domain.model.profile import Profile
from hadik.domain.service import AuditService, ProfileService
from hadik.domain.value import AuditAction, Role, UserId


class ChangeRoleRequest(BaseModel):
    actor_id: UserId
    user_id: UserId
    role: Role


class ChangeRoleResponse(BaseModel):
    profile: Profile
    previous_role: Role | None


class ChangeRoleUseCase(BaseUseCase):
    """Change a member's role. ADMIN members cannot be changed here."""

    def __init__(self, profile_service: ProfileService, audit_service: AuditService) -> None:
        self.profile_service = profile_service
        self.audit_service = audit_service

    async def execute(self, request: ChangeRoleRequest) -> ChangeRoleResponse:
        """Update the member's role.

        Raises:
            NotAuthorizedError: If the actor is not an admin
            NotFoundError: If the member does not exist
            BusinessRuleViolationError: If the member is an admin
        """
        actor = await self.profile_service.require_admin(request.actor_id, "change roles")
        profile, previous = await self.profile_service.change_role(
            request.user_id, request.role
        )
        await self.audit_service.record(
            AuditAction.ROLE_CHANGED,
            actor_id=actor.id,
            actor_email=actor.email.root if actor.email else None,
            resource=f"profile:{request.user_id}",
            details={
                "old_role": previous.value if previous else None,
                "new_role": request.role.value,
            },
        )
        return ChangeRoleResponse(profile=profile, previous_role=previous)
