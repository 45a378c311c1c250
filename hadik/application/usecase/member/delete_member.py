"""Delete member use case."""

import logfire
from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.domain.error import ValidationError
from hadik.domain.service import AllowListService, AuditService, ProfileService
from hadik.domain.value import AuditAction, Email, UserId


class DeleteMemberRequest(BaseModel):
    actor_id: UserId
    user_id: UserId
    email: str


class DeleteMemberResponse(BaseModel):
    profile_removed: bool
    allow_list_removed: bool


class DeleteMemberUseCase(BaseUseCase):
    """Remove a member from the workspace.

    Idempotent: deleting a member that no longer exists succeeds. The
    Identity Store account itself is not deleted.
    """

    def __init__(
        self,
        profile_service: ProfileService,
        allow_list_service: AllowListService,
        audit_service: AuditService,
    ) -> None:
        self.profile_service = profile_service
        self.allow_list_service = allow_list_service
        self.audit_service = audit_service

    async def execute(self, request: DeleteMemberRequest) -> DeleteMemberResponse:
        """Remove profile, address record and allow-list entry.

        Raises:
            NotAuthorizedError: If the actor is not an admin
            BusinessRuleViolationError: If the member is an admin
            ValidationError: If the e-mail is malformed
        """
        actor = await self.profile_service.require_admin(request.actor_id, "delete members")
        try:
            email = Email(request.email)
        except ValueError as e:
            raise ValidationError(f"Invalid email address: {request.email!r}") from e

        with logfire.span("delete_member", user_id=str(request.user_id), email=email.root):
            profile_removed = await self.profile_service.remove(request.user_id)
            allow_list_removed = await self.allow_list_service.revoke(email)

            await self.audit_service.record(
                AuditAction.USER_DELETED,
                actor_id=actor.id,
                actor_email=actor.email.root if actor.email else None,
                resource=f"profile:{request.user_id}",
                details={"email": email.root},
            )
            return DeleteMemberResponse(
                profile_removed=profile_removed, allow_list_removed=allow_list_removed
            )
