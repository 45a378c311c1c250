"""Password establishment use case."""

import logfire
from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.config import Settings
from hadik.domain.error import ValidationError
from hadik.domain.service import AuditService, IdentityStore, ProfileService
from hadik.domain.value import AuditAction, IdentitySession


class SetPasswordRequest(BaseModel):
    """Request to set the password of the signed-in account."""

    session: IdentitySession
    password: str
    confirmation: str
    client_ip: str | None = None


class SetPasswordResponse(BaseModel):
    message: str


class SetPasswordUseCase(BaseUseCase):
    """Let an account that arrived through a token link choose its password."""

    def __init__(
        self,
        identity_store: IdentityStore,
        profile_service: ProfileService,
        audit_service: AuditService,
        settings: Settings,
    ) -> None:
        self.identity_store = identity_store
        self.profile_service = profile_service
        self.audit_service = audit_service
        self.settings = settings

    async def execute(self, request: SetPasswordRequest) -> SetPasswordResponse:
        """Validate and store the new password.

        Raises:
            ValidationError: If the password is too short or does not match
        """
        min_length = self.settings.admission.min_password_length
        if len(request.password) < min_length:
            raise ValidationError(
                f"Password must be at least {min_length} characters long"
            )
        if request.password != request.confirmation:
            raise ValidationError("Passwords do not match")

        session = request.session
        with logfire.span("set_password", user_id=str(session.user_id)):
            await self.identity_store.set_password(session.access_token, request.password)
            await self.profile_service.ensure_profile(
                session.user_id, session.email, self.settings.admission.fallback_role
            )
            await self.audit_service.record(
                AuditAction.PASSWORD_SET,
                actor_id=session.user_id,
                actor_email=session.email.root,
                resource=f"profile:{session.user_id}",
                ip_address=request.client_ip,
            )
            logfire.info("Password set", user_id=str(session.user_id))
            return SetPasswordResponse(message="Your password has been set.")
