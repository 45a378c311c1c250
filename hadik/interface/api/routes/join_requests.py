"""Join request administration routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header
from pydantic import BaseModel

from hadik.application.usecase.join_request import (
    AcceptJoinRequestUseCase,
    DenyJoinRequestUseCase,
    ListPendingJoinRequestsUseCase,
)
from hadik.application.usecase.join_request.accept_join_request import (
    AcceptJoinRequestRequest,
    AcceptJoinRequestResponse,
)
from hadik.application.usecase.join_request.deny_join_request import (
    DenyJoinRequestRequest,
    DenyJoinRequestResponse,
)
from hadik.application.usecase.join_request.list_pending_join_requests import (
    ListPendingJoinRequestsRequest,
    ListPendingJoinRequestsResponse,
)
from hadik.domain.service import IdentityStore
from hadik.domain.value import JoinRequestId, Role
from hadik.interface.api.routes.session import require_session

router = APIRouter(
    prefix="/join-requests", tags=["join-requests"], route_class=DishkaRoute
)


class AcceptJoinRequestAPIRequest(BaseModel):
    """Role granted to the requester."""

    role: Role


@router.get("/", response_model=ListPendingJoinRequestsResponse)
async def list_pending(
    list_pending_use_case: FromDishka[ListPendingJoinRequestsUseCase],
    identity_store: FromDishka[IdentityStore],
    authorization: str | None = Header(default=None),
) -> ListPendingJoinRequestsResponse:
    """Pending join requests, oldest first."""
    session = await require_session(identity_store, authorization)
    return await list_pending_use_case.execute(
        ListPendingJoinRequestsRequest(actor_id=session.user_id)
    )


@router.post("/{request_id}/accept", response_model=AcceptJoinRequestResponse)
async def accept(
    request_id: JoinRequestId,
    body: AcceptJoinRequestAPIRequest,
    accept_use_case: FromDishka[AcceptJoinRequestUseCase],
    identity_store: FromDishka[IdentityStore],
    authorization: str | None = Header(default=None),
) -> AcceptJoinRequestResponse:
    """Accept a pending request with the chosen role.

    A request that was already decided returns applied=false with the winning
    decision.
    """
    session = await require_session(identity_store, authorization)
    return await accept_use_case.execute(
        AcceptJoinRequestRequest(
            actor_id=session.user_id, request_id=request_id, role=body.role
        )
    )


@router.post("/{request_id}/deny", response_model=DenyJoinRequestResponse)
async def deny(
    request_id: JoinRequestId,
    deny_use_case: FromDishka[DenyJoinRequestUseCase],
    identity_store: FromDishka[IdentityStore],
    authorization: str | None = Header(default=None),
) -> DenyJoinRequestResponse:
    """Deny a pending request."""
    session = await require_session(identity_store, authorization)
    return await deny_use_case.execute(
        DenyJoinRequestRequest(actor_id=session.user_id, request_id=request_id)
    )
