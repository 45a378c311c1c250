"""Validate invitation use case."""

from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.domain.service import IdentityStore, InvitationService
from hadik.domain.value import AVATARS, InvitationStep, InviteToken, Role

STEP_MESSAGES: dict[InvitationStep, str] = {
    InvitationStep.AVATAR_SELECTION: "Choose an avatar to get started.",
    InvitationStep.SIGNUP_FORM: "Enter your name and choose a password.",
    InvitationStep.ACCEPTING: "Accepting your invitation...",
    InvitationStep.DONE: "Welcome aboard! Your invitation has been accepted.",
    InvitationStep.INVALID_TOKEN: "This invitation link is invalid.",
    InvitationStep.EXPIRED: "This invitation has expired. Ask an admin for a new one.",
    InvitationStep.ALREADY_ACCEPTED: "This invitation has already been used.",
}


class ValidateInvitationRequest(BaseModel):
    token: str
    access_token: str | None = None  # Session of a returning browser, if any


class ValidateInvitationResponse(BaseModel):
    """Where the invitee goes next."""

    step: InvitationStep
    message: str
    email: str | None = None
    role: Role | None = None
    avatars: list[str] = []


class ValidateInvitationUseCase(BaseUseCase):
    """Check an invitation token when the accept link is opened.

    Checks run in order: lookup, expiry, acceptance. A caller that already
    holds a session skips avatar selection and signup.
    """

    def __init__(
        self, invitation_service: InvitationService, identity_store: IdentityStore
    ) -> None:
        self.invitation_service = invitation_service
        self.identity_store = identity_store

    async def execute(self, request: ValidateInvitationRequest) -> ValidateInvitationResponse:
        try:
            token = InviteToken(request.token)
        except ValueError:
            return _respond(InvitationStep.INVALID_TOKEN)

        invitation = await self.invitation_service.get_by_token(token)
        terminal = self.invitation_service.classify(invitation)
        if terminal is not None or invitation is None:
            return _respond(terminal or InvitationStep.INVALID_TOKEN)

        session = None
        if request.access_token:
            session = await self.identity_store.get_current_session(request.access_token)

        if session is not None:
            return _respond(
                InvitationStep.ACCEPTING, email=invitation.email.root, role=invitation.role
            )
        return _respond(
            InvitationStep.AVATAR_SELECTION,
            email=invitation.email.root,
            role=invitation.role,
            avatars=list(AVATARS),
        )


def _respond(step: InvitationStep, **fields) -> ValidateInvitationResponse:
    return ValidateInvitationResponse(step=step, message=STEP_MESSAGES[step], **fields)
