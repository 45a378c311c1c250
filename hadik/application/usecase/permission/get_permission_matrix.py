"""Permission matrix snapshot use case."""

from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.domain.service import PermissionService, ProfileService
from hadik.domain.value import PERMISSION_DESCRIPTIONS, Permission, Role, UserId


class GetPermissionMatrixRequest(BaseModel):
    actor_id: UserId


class PermissionCell(BaseModel):
    permission: Permission
    description: str
    enabled: bool


class RoleRow(BaseModel):
    role: Role
    editable: bool
    permissions: list[PermissionCell]


class GetPermissionMatrixResponse(BaseModel):
    roles: list[RoleRow]


class GetPermissionMatrixUseCase(BaseUseCase):
    """Resolved (role, permission) matrix for every role."""

    def __init__(
        self, profile_service: ProfileService, permission_service: PermissionService
    ) -> None:
        self.profile_service = profile_service
        self.permission_service = permission_service

    async def execute(
        self, request: GetPermissionMatrixRequest
    ) -> GetPermissionMatrixResponse:
        await self.profile_service.require_admin(
            request.actor_id, "view the permission matrix"
        )
        matrix = await self.permission_service.matrix()
        return GetPermissionMatrixResponse(
            roles=[
                RoleRow(
                    role=role,
                    editable=role != Role.ADMIN,
                    permissions=[
                        PermissionCell(
                            permission=p,
                            description=PERMISSION_DESCRIPTIONS[p],
                            enabled=p in enabled,
                        )
                        for p in Permission
                    ],
                )
                for role, enabled in matrix.items()
            ]
        )
