"""Login/signup decision use case."""

import logfire
from pydantic import BaseModel

from hadik.adapter.error import (
    IdentityErrorKind,
    IdentityStoreError,
    IdentityStoreUnavailableError,
)
from hadik.application.usecase.base import BaseUseCase
from hadik.config import Settings
from hadik.domain.error import ConflictError
from hadik.domain.service import (
    AllowListService,
    AuditService,
    IdentityStore,
    JoinRequestService,
    LoginAttemptTracker,
    ProfileService,
)
from hadik.domain.value import (
    AuditAction,
    Email,
    IdentitySession,
    JoinRequestStatus,
    LoginOutcome,
)
from hadik.util.clock import Clock

MESSAGES: dict[LoginOutcome, str] = {
    LoginOutcome.AUTHENTICATED: "Signed in.",
    LoginOutcome.ACCOUNT_CREATED: "Your account has been created and you are signed in.",
    LoginOutcome.JOIN_REQUEST_SUBMITTED: (
        "You are not a member of this workspace yet. "
        "Your request to join has been sent to the admins."
    ),
    LoginOutcome.ALREADY_PENDING: (
        "Your request to join is still waiting for an admin decision."
    ),
    LoginOutcome.ALREADY_ACCEPTED_AWAITING_PASSWORD: (
        "You have been granted access but have not set a password yet. "
        "Check your e-mail for a link to set one."
    ),
    LoginOutcome.DENIED: "Access denied.",
    LoginOutcome.RATE_LIMITED: "Too many failed attempts. Try again in {seconds} seconds.",
    LoginOutcome.INVALID_INPUT: "Enter a valid e-mail address and a password.",
    LoginOutcome.ERROR: "Something went wrong on our side. Please try again.",
}

ACCOUNT_EXISTS_MESSAGE = "An account already exists for this e-mail. Check your password."
REQUEST_DECLINED_MESSAGE = "Your request to join this workspace was declined."


class LoginRequest(BaseModel):
    """Sign-in attempt with ambient request metadata."""

    email: str
    password: str
    client_ip: str | None = None


class LoginResponse(BaseModel):
    """Outcome of a sign-in attempt.

    Every outcome carries its own message; session fields are only set for
    AUTHENTICATED and ACCOUNT_CREATED.
    """

    outcome: LoginOutcome
    message: str
    session: IdentitySession | None = None
    retry_after_seconds: int | None = None
    join_request_id: str | None = None


def _respond(outcome: LoginOutcome, message: str | None = None, **fields) -> LoginResponse:
    return LoginResponse(outcome=outcome, message=message or MESSAGES[outcome], **fields)


class LoginUseCase(BaseUseCase):
    """Decide what happens when someone signs in with e-mail and password.

    Outcomes are returned, never raised. Identity Store and data store
    failures become LoginOutcome.ERROR and are never reported as a denial.
    """

    def __init__(
        self,
        identity_store: IdentityStore,
        allow_list_service: AllowListService,
        join_request_service: JoinRequestService,
        profile_service: ProfileService,
        audit_service: AuditService,
        clock: Clock,
        settings: Settings,
    ) -> None:
        """Initialize login use case.

        Args:
            identity_store: Identity Store port
            allow_list_service: Allow-list domain service
            join_request_service: Join request domain service
            profile_service: Profile domain service
            audit_service: Audit log domain service
            clock: Time source for the rate limiter
            settings: Application settings
        """
        self.identity_store = identity_store
        self.allow_list_service = allow_list_service
        self.join_request_service = join_request_service
        self.profile_service = profile_service
        self.audit_service = audit_service
        self.clock = clock
        self.settings = settings

    async def execute(
        self, request: LoginRequest, attempts: LoginAttemptTracker
    ) -> LoginResponse:
        """Execute the login decision.

        Steps, each short-circuiting:
        1. Rate limit check against the client's tracker (no I/O)
        2. E-mail validation (no side effects)
        3. Direct authentication
        4. On invalid credentials only: record the failure, then create the
           account if allow-listed, otherwise go through the join request path
        5. Any other Identity Store rejection is a denial with its message

        Args:
            request: Login request
            attempts: Failed-attempt tracker owned by the calling client

        Returns:
            Login response with outcome and message
        """
        remaining = attempts.lockout_remaining(self.clock.now())
        if remaining:
            logfire.warn("Login rate limited", retry_after_seconds=remaining)
            return _respond(
                LoginOutcome.RATE_LIMITED,
                MESSAGES[LoginOutcome.RATE_LIMITED].format(seconds=remaining),
                retry_after_seconds=remaining,
            )

        try:
            email = Email(request.email)
        except ValueError:
            return _respond(LoginOutcome.INVALID_INPUT)
        if not request.password:
            return _respond(LoginOutcome.INVALID_INPUT)

        with logfire.span("login", email=email.root):
            try:
                return await self._decide(email, request, attempts)
            except IdentityStoreUnavailableError as e:
                logfire.error("Identity Store unavailable during login", error=str(e))
                return _respond(LoginOutcome.ERROR)
            except IdentityStoreError as e:
                logfire.error(
                    "Identity Store rejected a follow-up call during login",
                    kind=e.kind.value,
                    error=e.message,
                )
                return _respond(LoginOutcome.ERROR)
            except Exception as e:
                logfire.error(
                    "Unexpected error during login",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return _respond(LoginOutcome.ERROR)

    async def _decide(
        self, email: Email, request: LoginRequest, attempts: LoginAttemptTracker
    ) -> LoginResponse:
        try:
            session = await self.identity_store.authenticate(email, request.password)
        except IdentityStoreError as e:
            if e.kind != IdentityErrorKind.INVALID_CREDENTIALS:
                logfire.warn("Login rejected by Identity Store", kind=e.kind.value)
                return _respond(LoginOutcome.DENIED, e.message)

            attempts.record_failure(self.clock.now())
            logfire.info("Invalid credentials", email=email.root)
            return await self._after_invalid_credentials(email, request)

        attempts.clear()
        await self._on_signed_in(session, request.client_ip)
        logfire.info("Member signed in", user_id=str(session.user_id))
        return _respond(LoginOutcome.AUTHENTICATED, session=session)

    async def _after_invalid_credentials(
        self, email: Email, request: LoginRequest
    ) -> LoginResponse:
        entry = await self.allow_list_service.get(email)
        if entry is not None:
            return await self._create_account(email, request)
        return await self._submit_join_request(email, request.client_ip)

    async def _create_account(self, email: Email, request: LoginRequest) -> LoginResponse:
        try:
            session = await self.identity_store.create_account(email, request.password)
        except IdentityStoreError as e:
            if e.kind == IdentityErrorKind.ALREADY_EXISTS:
                # Account came in through a token flow and has no password yet
                await self.identity_store.send_password_establish_link(
                    email, self.settings.set_password_url
                )
                logfire.info("Password establish link sent", email=email.root)
                return _respond(LoginOutcome.ALREADY_ACCEPTED_AWAITING_PASSWORD)

            logfire.warn("Account creation rejected", kind=e.kind.value, email=email.root)
            return _respond(LoginOutcome.DENIED, e.message)

        await self._on_signed_in(session, request.client_ip)
        await self.audit_service.record(
            AuditAction.ACCOUNT_CREATED,
            actor_id=session.user_id,
            actor_email=email.root,
            resource=f"profile:{session.user_id}",
            ip_address=request.client_ip,
        )
        logfire.info("Account created", user_id=str(session.user_id), email=email.root)
        return _respond(LoginOutcome.ACCOUNT_CREATED, session=session)

    async def _submit_join_request(
        self, email: Email, client_ip: str | None
    ) -> LoginResponse:
        latest = await self.join_request_service.find_latest(email)
        if latest is not None and latest.is_pending:
            return _respond(LoginOutcome.ALREADY_PENDING)
        if latest is not None and latest.status == JoinRequestStatus.ACCEPTED:
            return _respond(LoginOutcome.ALREADY_ACCEPTED_AWAITING_PASSWORD)

        if await self.profile_service.get_by_email(email) is not None:
            return _respond(LoginOutcome.DENIED, ACCOUNT_EXISTS_MESSAGE)

        if latest is not None and latest.status == JoinRequestStatus.DENIED:
            return _respond(LoginOutcome.DENIED, REQUEST_DECLINED_MESSAGE)

        try:
            join_request = await self.join_request_service.submit(email, client_ip)
        except ConflictError:
            # A concurrent attempt opened the pending slot first
            return _respond(LoginOutcome.ALREADY_PENDING)

        await self.audit_service.record(
            AuditAction.JOIN_REQUEST_SUBMITTED,
            actor_email=email.root,
            resource=f"join_request:{join_request.id}",
            ip_address=client_ip,
        )
        return _respond(
            LoginOutcome.JOIN_REQUEST_SUBMITTED, join_request_id=str(join_request.id)
        )

    async def _on_signed_in(self, session: IdentitySession, client_ip: str | None) -> None:
        _, created = await self.profile_service.ensure_profile(
            session.user_id, session.email, self.settings.admission.fallback_role
        )
        if created:
            await self.audit_service.record(
                AuditAction.PROFILE_BACKFILLED,
                actor_id=session.user_id,
                actor_email=session.email.root,
                resource=f"profile:{session.user_id}",
            )
        await self.profile_service.record_ip(session.user_id, client_ip)
