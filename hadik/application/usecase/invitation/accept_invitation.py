"""Accept invitation use case."""

import logfire
from pydantic import BaseModel

from hadik.adapter.error import IdentityErrorKind, IdentityStoreError
from hadik.application.usecase.base import BaseUseCase
from hadik.config import Settings
from hadik.domain.error import BusinessRuleViolationError, ValidationError
from hadik.domain.model.invitation import Invitation
from hadik.domain.service import (
    AuditService,
    IdentityStore,
    InvitationService,
    ProfileService,
)
from hadik.domain.value import (
    AVATARS,
    AuditAction,
    IdentitySession,
    InvitationStep,
    InviteToken,
    Role,
)

from .validate_invitation import STEP_MESSAGES

ACCOUNT_EXISTS_MESSAGE = (
    "An account already exists for this e-mail. Sign in, then open the "
    "invitation link again."
)
WRONG_ACCOUNT_MESSAGE = "This invitation was sent to a different e-mail address."


class AcceptInvitationRequest(BaseModel):
    """Server-side acceptance.

    Either access_token (returning browser with a session) or the signup
    fields (full_name, avatar_url, password) must be provided.
    """

    token: str
    access_token: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    password: str | None = None
    client_ip: str | None = None


class AcceptInvitationResponse(BaseModel):
    step: InvitationStep
    message: str
    role: Role | None = None
    session: IdentitySession | None = None


class AcceptInvitationUseCase(BaseUseCase):
    """Complete an invitation: optional signup, then one atomic accept.

    The accept re-validates the invitation at write time, marks it accepted
    and applies its role to the invitee's profile within the same unit of
    work. IP capture and audit afterwards are best-effort.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        profile_service: ProfileService,
        identity_store: IdentityStore,
        audit_service: AuditService,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
            profile_service: Profile domain service
            identity_store: Identity Store port
            audit_service: Audit log domain service
            settings: Application settings
        """
        self.invitation_service = invitation_service
        self.profile_service = profile_service
        self.identity_store = identity_store
        self.audit_service = audit_service
        self.settings = settings

    async def execute(self, request: AcceptInvitationRequest) -> AcceptInvitationResponse:
        """Accept an invitation.

        Returns:
            DONE on success, or the terminal step that applies

        Raises:
            ValidationError: If signup details are missing or invalid
            BusinessRuleViolationError: If the signed-in account is an ADMIN
        """
        try:
            token = InviteToken(request.token)
        except ValueError:
            return _respond(InvitationStep.INVALID_TOKEN)

        with logfire.span("accept_invitation", token=token.redacted()):
            invitation = await self.invitation_service.get_by_token(token)
            terminal = self.invitation_service.classify(invitation)
            if terminal is not None or invitation is None:
                return _respond(terminal or InvitationStep.INVALID_TOKEN)

            session = None
            if request.access_token:
                session = await self.identity_store.get_current_session(
                    request.access_token
                )

            created_session = None
            if session is None:
                self._validate_signup(request)
                try:
                    session = await self.identity_store.create_account(
                        invitation.email,
                        request.password or "",
                        full_name=request.full_name,
                        avatar_url=request.avatar_url,
                    )
                except IdentityStoreError as e:
                    if e.kind == IdentityErrorKind.ALREADY_EXISTS:
                        return _respond(InvitationStep.SIGNUP_FORM, ACCOUNT_EXISTS_MESSAGE)
                    logfire.warn("Invitation signup rejected", kind=e.kind.value)
                    return _respond(InvitationStep.SIGNUP_FORM, e.message)
                created_session = session
            elif session.email != invitation.email:
                logfire.warn(
                    "Invitation opened by a different account",
                    invitation_id=str(invitation.id),
                    user_id=str(session.user_id),
                )
                return _respond(InvitationStep.INVALID_TOKEN, WRONG_ACCOUNT_MESSAGE)
            else:
                existing = await self.profile_service.get_by_id(session.user_id)
                if existing is not None and existing.is_admin:
                    logfire.warn(
                        "Invitation opened by an admin account",
                        invitation_id=str(invitation.id),
                        user_id=str(session.user_id),
                    )
                    raise BusinessRuleViolationError(
                        "Admin accounts cannot accept invitations"
                    )

            accepted = await self.invitation_service.mark_accepted(token)
            if accepted is None:
                # Lost the race with another acceptance or the expiry
                current = await self.invitation_service.get_by_token(token)
                return _respond(
                    self.invitation_service.classify(current)
                    or InvitationStep.ALREADY_ACCEPTED
                )

            await self.profile_service.apply_role(
                session.user_id, session.email, accepted.role
            )
            if created_session is not None:
                await self.profile_service.update_display(
                    session.user_id,
                    full_name=request.full_name,
                    avatar_url=request.avatar_url,
                )

            await self._bookkeeping(accepted, session, request.client_ip)
            return AcceptInvitationResponse(
                step=InvitationStep.DONE,
                message=STEP_MESSAGES[InvitationStep.DONE],
                role=accepted.role,
                session=created_session,
            )

    def _validate_signup(self, request: AcceptInvitationRequest) -> None:
        if not request.full_name or not request.full_name.strip():
            raise ValidationError("Full name is required")
        if request.avatar_url not in AVATARS:
            raise ValidationError("Choose one of the offered avatars")
        min_length = self.settings.admission.min_password_length
        if not request.password or len(request.password) < min_length:
            raise ValidationError(
                f"Password must be at least {min_length} characters long"
            )

    async def _bookkeeping(
        self, invitation: Invitation, session: IdentitySession, client_ip: str | None
    ) -> None:
        await self.profile_service.record_ip(session.user_id, client_ip)
        await self.audit_service.record(
            AuditAction.INVITATION_ACCEPTED,
            actor_id=session.user_id,
            actor_email=session.email.root,
            resource=f"invitation:{invitation.id}",
            details={"role": invitation.role.value},
            ip_address=client_ip,
        )


def _respond(step: InvitationStep, message: str | None = None) -> AcceptInvitationResponse:
    return AcceptInvitationResponse(step=step, message=message or STEP_MESSAGES[step])
