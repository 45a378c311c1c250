"""Invitation routes.

Listing, creating and cancelling require an admin session. Validation and
acceptance are public: the invitation token is the credential.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, Request, status
from pydantic import BaseModel

from hadik.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    CreateInvitationUseCase,
    ListInvitationsUseCase,
    ValidateInvitationUseCase,
)
from hadik.application.usecase.invitation.accept_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
)
from hadik.application.usecase.invitation.cancel_invitation import (
    CancelInvitationRequest,
    CancelInvitationResponse,
)
from hadik.application.usecase.invitation.create_invitation import (
    CreateInvitationRequest,
    CreateInvitationResponse,
)
from hadik.application.usecase.invitation.list_invitations import (
    ListInvitationsRequest,
    ListInvitationsResponse,
)
from hadik.application.usecase.invitation.validate_invitation import (
    ValidateInvitationRequest,
    ValidateInvitationResponse,
)
from hadik.config import Settings
from hadik.domain.service import IdentityStore
from hadik.domain.value import InvitationId, Role
from hadik.interface.api.routes.session import (
    bearer_token,
    client_ip,
    require_session,
)

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


class CreateInvitationAPIRequest(BaseModel):
    """Invitee and the role they will receive."""

    email: str
    role: Role


class AcceptInvitationAPIRequest(BaseModel):
    """Acceptance; signup fields are required when no session is present."""

    token: str
    full_name: str | None = None
    avatar_url: str | None = None
    password: str | None = None


@router.get("/", response_model=ListInvitationsResponse)
async def list_invitations(
    list_invitations_use_case: FromDishka[ListInvitationsUseCase],
    identity_store: FromDishka[IdentityStore],
    authorization: str | None = Header(default=None),
) -> ListInvitationsResponse:
    """All invitations, newest first, with derived status."""
    session = await require_session(identity_store, authorization)
    return await list_invitations_use_case.execute(
        ListInvitationsRequest(actor_id=session.user_id)
    )


@router.post(
    "/", response_model=CreateInvitationResponse, status_code=status.HTTP_201_CREATED
)
async def create_invitation(
    body: CreateInvitationAPIRequest,
    create_invitation_use_case: FromDishka[CreateInvitationUseCase],
    identity_store: FromDishka[IdentityStore],
    authorization: str | None = Header(default=None),
) -> CreateInvitationResponse:
    """Allow-list an e-mail and send it an invitation.

    Examples:
        POST /invitations/
        {"email": "bob@example.com", "role": "ANNOTATOR"}
    """
    session = await require_session(identity_store, authorization)
    return await create_invitation_use_case.execute(
        CreateInvitationRequest(
            actor_id=session.user_id, email=body.email, role=body.role
        )
    )


@router.delete("/{invitation_id}", response_model=CancelInvitationResponse)
async def cancel_invitation(
    invitation_id: InvitationId,
    cancel_invitation_use_case: FromDishka[CancelInvitationUseCase],
    identity_store: FromDishka[IdentityStore],
    email: str = Query(...),
    authorization: str | None = Header(default=None),
) -> CancelInvitationResponse:
    """Delete an invitation and its allow-list entry."""
    session = await require_session(identity_store, authorization)
    return await cancel_invitation_use_case.execute(
        CancelInvitationRequest(
            actor_id=session.user_id, invitation_id=invitation_id, email=email
        )
    )


@router.get("/validate", response_model=ValidateInvitationResponse)
async def validate_invitation(
    validate_invitation_use_case: FromDishka[ValidateInvitationUseCase],
    token: str = Query(...),
    authorization: str | None = Header(default=None),
) -> ValidateInvitationResponse:
    """First step of the acceptance page: which step to show for this token."""
    return await validate_invitation_use_case.execute(
        ValidateInvitationRequest(token=token, access_token=bearer_token(authorization))
    )


@router.post("/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    body: AcceptInvitationAPIRequest,
    request: Request,
    accept_invitation_use_case: FromDishka[AcceptInvitationUseCase],
    settings: FromDishka[Settings],
    authorization: str | None = Header(default=None),
) -> AcceptInvitationResponse:
    """Accept an invitation, signing up first if there is no session."""
    return await accept_invitation_use_case.execute(
        AcceptInvitationRequest(
            token=body.token,
            access_token=bearer_token(authorization),
            full_name=body.full_name,
            avatar_url=body.avatar_url,
            password=body.password,
            client_ip=client_ip(request, settings.trusted_proxy_networks),
        )
    )
