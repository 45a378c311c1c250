"""Sign-in, password and self-service routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Request, Response, status
from pydantic import BaseModel, Field

from hadik.application.usecase.auth import (
    GetCurrentMemberUseCase,
    LoginUseCase,
    SetPasswordUseCase,
    TouchLastSeenUseCase,
    UpdateOwnProfileUseCase,
)
from hadik.application.usecase.auth.get_current_member import (
    GetCurrentMemberRequest,
    GetCurrentMemberResponse,
)
from hadik.application.usecase.auth.login import LoginRequest, LoginResponse
from hadik.application.usecase.auth.set_password import (
    SetPasswordRequest,
    SetPasswordResponse,
)
from hadik.application.usecase.auth.touch_last_seen import (
    TouchLastSeenRequest,
    TouchLastSeenResponse,
)
from hadik.application.usecase.auth.update_own_profile import (
    UpdateOwnProfileRequest,
    UpdateOwnProfileResponse,
)
from hadik.config import Settings
from hadik.domain.service import IdentityStore, LoginThrottle
from hadik.domain.value import LoginOutcome
from hadik.interface.api.routes.session import client_ip, require_session
from hadik.util.clock import Clock

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class LoginAPIRequest(BaseModel):
    """Credentials submitted by the sign-in form."""

    email: str
    password: str


class SetPasswordAPIRequest(BaseModel):
    """New password with its confirmation."""

    password: str
    confirmation: str


class UpdateProfileAPIRequest(BaseModel):
    """Display attributes; omitted fields are left unchanged."""

    full_name: str | None = Field(default=None, max_length=120)
    avatar_url: str | None = Field(default=None, max_length=2048)


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginAPIRequest,
    request: Request,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    throttle: FromDishka[LoginThrottle],
    clock: FromDishka[Clock],
    settings: FromDishka[Settings],
) -> LoginResponse:
    """Sign in, create an allow-listed account, or file a join request.

    Every outcome is a 200 with an `outcome` field, except RATE_LIMITED (429
    with Retry-After) and ERROR (503).

    Examples:
        POST /auth/login
        {"email": "new@example.com", "password": "secret1"}

        Response:
        {"outcome": "join_request_submitted", "message": "...", ...}
    """
    ip = client_ip(request, settings.trusted_proxy_networks)
    attempts = throttle.tracker_for(ip, clock.now())
    result = await login_use_case.execute(
        LoginRequest(email=body.email, password=body.password, client_ip=ip),
        attempts,
    )

    if result.outcome == LoginOutcome.RATE_LIMITED:
        response.status_code = status.HTTP_429_TOO_MANY_REQUESTS
        response.headers["Retry-After"] = str(result.retry_after_seconds or 1)
    elif result.outcome == LoginOutcome.ERROR:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return result


@router.post("/password", response_model=SetPasswordResponse)
async def set_password(
    body: SetPasswordAPIRequest,
    request: Request,
    set_password_use_case: FromDishka[SetPasswordUseCase],
    identity_store: FromDishka[IdentityStore],
    settings: FromDishka[Settings],
    authorization: str | None = Header(default=None),
) -> SetPasswordResponse:
    """Establish a password for the signed-in account.

    Used after following the password link sent to an accepted join request.
    """
    session = await require_session(identity_store, authorization)
    return await set_password_use_case.execute(
        SetPasswordRequest(
            session=session,
            password=body.password,
            confirmation=body.confirmation,
            client_ip=client_ip(request, settings.trusted_proxy_networks),
        )
    )


@router.get("/me", response_model=GetCurrentMemberResponse)
async def get_me(
    get_current_member_use_case: FromDishka[GetCurrentMemberUseCase],
    identity_store: FromDishka[IdentityStore],
    authorization: str | None = Header(default=None),
) -> GetCurrentMemberResponse:
    """Current member's profile and resolved permissions."""
    session = await require_session(identity_store, authorization)
    return await get_current_member_use_case.execute(
        GetCurrentMemberRequest(session=session)
    )


@router.patch("/me", response_model=UpdateOwnProfileResponse)
async def update_me(
    body: UpdateProfileAPIRequest,
    update_own_profile_use_case: FromDishka[UpdateOwnProfileUseCase],
    identity_store: FromDishka[IdentityStore],
    authorization: str | None = Header(default=None),
) -> UpdateOwnProfileResponse:
    """Edit the current member's name or avatar."""
    session = await require_session(identity_store, authorization)
    return await update_own_profile_use_case.execute(
        UpdateOwnProfileRequest(
            user_id=session.user_id,
            full_name=body.full_name,
            avatar_url=body.avatar_url,
        )
    )


@router.post("/heartbeat", response_model=TouchLastSeenResponse)
async def heartbeat(
    touch_last_seen_use_case: FromDishka[TouchLastSeenUseCase],
    identity_store: FromDishka[IdentityStore],
    authorization: str | None = Header(default=None),
) -> TouchLastSeenResponse:
    """Record activity for online status."""
    session = await require_session(identity_store, authorization)
    return await touch_last_seen_use_case.execute(
        TouchLastSeenRequest(user_id=session.user_id)
    )
