"""Member administration routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query
from pydantic import BaseModel

from hadik.application.usecase.member import (
    ChangeRoleUseCase,
    DeleteMemberUseCase,
    ListMembersUseCase,
)
from hadik.application.usecase.member.change_role import (
    ChangeRoleRequest,
    ChangeRoleResponse,
)
from hadik.application.usecase.member.delete_member import (
    DeleteMemberRequest,
    DeleteMemberResponse,
)
from hadik.application.usecase.member.list_members import (
    ListMembersRequest,
    ListMembersResponse,
)
from hadik.domain.service import IdentityStore
from hadik.domain.value import Role, UserId
from hadik.interface.api.routes.session import require_session

router = APIRouter(prefix="/members", tags=["members"], route_class=DishkaRoute)


class ChangeRoleAPIRequest(BaseModel):
    role: Role


@router.get("/", response_model=ListMembersResponse)
async def list_members(
    list_members_use_case: FromDishka[ListMembersUseCase],
    identity_store: FromDishka[IdentityStore],
    authorization: str | None = Header(default=None),
) -> ListMembersResponse:
    """Provisioned members with online status."""
    session = await require_session(identity_store, authorization)
    return await list_members_use_case.execute(
        ListMembersRequest(actor_id=session.user_id)
    )


@router.put("/{user_id}/role", response_model=ChangeRoleResponse)
async def change_role(
    user_id: UserId,
    body: ChangeRoleAPIRequest,
    change_role_use_case: FromDishka[ChangeRoleUseCase],
    identity_store: FromDishka[IdentityStore],
    authorization: str | None = Header(default=None),
) -> ChangeRoleResponse:
    """Change a member's role. Admins cannot be changed."""
    session = await require_session(identity_store, authorization)
    return await change_role_use_case.execute(
        ChangeRoleRequest(actor_id=session.user_id, user_id=user_id, role=body.role)
    )


@router.delete("/{user_id}", response_model=DeleteMemberResponse)
async def delete_member(
    user_id: UserId,
    delete_member_use_case: FromDishka[DeleteMemberUseCase],
    identity_store: FromDishka[IdentityStore],
    email: str = Query(...),
    authorization: str | None = Header(default=None),
) -> DeleteMemberResponse:
    """Remove a member's profile and allow-list entry. Idempotent."""
    session = await require_session(identity_store, authorization)
    return await delete_member_use_case.execute(
        DeleteMemberRequest(actor_id=session.user_id, user_id=user_id, email=email)
    )
