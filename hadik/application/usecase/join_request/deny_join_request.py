"""Deny join request use case."""

import logfire
from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.domain.service import AuditService, JoinRequestService, ProfileService
from hadik.domain.value import AuditAction, JoinRequestId, JoinRequestStatus, UserId


class DenyJoinRequestRequest(BaseModel):
    actor_id: UserId
    request_id: JoinRequestId


class DenyJoinRequestResponse(BaseModel):
    applied: bool
    status: JoinRequestStatus


class DenyJoinRequestUseCase(BaseUseCase):
    """Decline a pending join request. Never touches the allow-list."""

    def __init__(
        self,
        profile_service: ProfileService,
        join_request_service: JoinRequestService,
        audit_service: AuditService,
    ) -> None:
        self.profile_service = profile_service
        self.join_request_service = join_request_service
        self.audit_service = audit_service

    async def execute(self, request: DenyJoinRequestRequest) -> DenyJoinRequestResponse:
        actor = await self.profile_service.require_admin(
            request.actor_id, "deny join requests"
        )

        with logfire.span(
            "deny_join_request", request_id=str(request.request_id), actor_id=str(actor.id)
        ):
            join_request = await self.join_request_service.get_by_id(request.request_id)
            if not join_request.is_pending:
                return DenyJoinRequestResponse(applied=False, status=join_request.status)

            decided = await self.join_request_service.decide(
                join_request.id, JoinRequestStatus.DENIED, decided_by=actor.id
            )
            if decided is None:
                winner = await self.join_request_service.get_by_id(join_request.id)
                return DenyJoinRequestResponse(applied=False, status=winner.status)

            await self.audit_service.record(
                AuditAction.JOIN_REQUEST_DENIED,
                actor_id=actor.id,
                actor_email=actor.email.root if actor.email else None,
                resource=f"join_request:{join_request.id}",
                details={"email": join_request.email.root},
            )
            return DenyJoinRequestResponse(applied=True, status=decided.status)
