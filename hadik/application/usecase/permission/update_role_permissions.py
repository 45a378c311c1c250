"""Update role permissions use case."""

from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.domain.error import ValidationError
from hadik.domain.service import AuditService, PermissionService, ProfileService
from hadik.domain.value import AuditAction, Permission, Role, UserId


class UpdateRolePermissionsRequest(BaseModel):
    actor_id: UserId
    role: Role
    enabled: list[Permission]


class UpdateRolePermissionsResponse(BaseModel):
    role: Role
    enabled: list[Permission]


class UpdateRolePermissionsUseCase(BaseUseCase):
    """Replace the permissions of one role.

    Every permission key is written, so the stored rows for the role always
    form a full set. ADMIN is not editable.
    """

    def __init__(
        self,
        profile_service: ProfileService,
        permission_service: PermissionService,
        audit_service: AuditService,
    ) -> None:
        self.profile_service = profile_service
        self.permission_service = permission_service
        self.audit_service = audit_service

    async def execute(
        self, request: UpdateRolePermissionsRequest
    ) -> UpdateRolePermissionsResponse:
        """Save the role's permissions.

        Raises:
            NotAuthorizedError: If the actor is not an admin
            ValidationError: If the role is ADMIN
        """
        actor = await self.profile_service.require_admin(
            request.actor_id, "edit permissions"
        )
        if request.role == Role.ADMIN:
            raise ValidationError("ADMIN permissions cannot be edited")

        enabled = await self.permission_service.update(
            request.role, set(request.enabled), updated_by=actor.id
        )
        ordered = [p for p in Permission if p in enabled]
        await self.audit_service.record(
            AuditAction.PERMISSIONS_SAVED,
            actor_id=actor.id,
            actor_email=actor.email.root if actor.email else None,
            resource=f"role:{request.role.value}",
            details={"enabled": [p.value for p in ordered]},
        )
        return UpdateRolePermissionsResponse(role=request.role, enabled=ordered)
