"""Role-permission matrix routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header
from pydantic import BaseModel

from hadik.application.usecase.permission import (
    GetPermissionMatrixUseCase,
    UpdateRolePermissionsUseCase,
)
from hadik.application.usecase.permission.get_permission_matrix import (
    GetPermissionMatrixRequest,
    GetPermissionMatrixResponse,
)
from hadik.application.usecase.permission.update_role_permissions import (
    UpdateRolePermissionsRequest,
    UpdateRolePermissionsResponse,
)
from hadik.domain.service import IdentityStore
from hadik.domain.value import Permission, Role
from hadik.interface.api.routes.session import require_session

router = APIRouter(prefix="/permissions", tags=["permissions"], route_class=DishkaRoute)


class UpdateRolePermissionsAPIRequest(BaseModel):
    """The complete set of enabled permissions for the role."""

    enabled: list[Permission]


@router.get("/", response_model=GetPermissionMatrixResponse)
async def get_matrix(
    get_matrix_use_case: FromDishka[GetPermissionMatrixUseCase],
    identity_store: FromDishka[IdentityStore],
    authorization: str | None = Header(default=None),
) -> GetPermissionMatrixResponse:
    """Resolved permissions for every role."""
    session = await require_session(identity_store, authorization)
    return await get_matrix_use_case.execute(
        GetPermissionMatrixRequest(actor_id=session.user_id)
    )


@router.put("/{role}", response_model=UpdateRolePermissionsResponse)
async def update_role_permissions(
    role: Role,
    body: UpdateRolePermissionsAPIRequest,
    update_use_case: FromDishka[UpdateRolePermissionsUseCase],
    identity_store: FromDishka[IdentityStore],
    authorization: str | None = Header(default=None),
) -> UpdateRolePermissionsResponse:
    """Replace a role's permissions. ADMIN is rejected."""
    session = await require_session(identity_store, authorization)
    return await update_use_case.execute(
        UpdateRolePermissionsRequest(
            actor_id=session.user_id, role=role, enabled=body.enabled
        )
    )
