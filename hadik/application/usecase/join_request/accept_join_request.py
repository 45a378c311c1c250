"""Accept join request use case."""

import logfire
from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.domain.error import PartialFailureError
from hadik.domain.service import (
    AllowListService,
    AuditService,
    JoinRequestService,
    ProfileService,
)
from hadik.domain.value import (
    AuditAction,
    JoinRequestId,
    JoinRequestStatus,
    Role,
    UserId,
)


class AcceptJoinRequestRequest(BaseModel):
    actor_id: UserId
    request_id: JoinRequestId
    role: Role


class AcceptJoinRequestResponse(BaseModel):
    """Result of an accept.

    applied is False when the request had already been decided, in which case
    status reflects the decision that won.
    """

    applied: bool
    status: JoinRequestStatus
    decided_role: Role | None = None


class AcceptJoinRequestUseCase(BaseUseCase):
    """Admit the e-mail of a pending join request with a role."""

    def __init__(
        self,
        profile_service: ProfileService,
        join_request_service: JoinRequestService,
        allow_list_service: AllowListService,
        audit_service: AuditService,
    ) -> None:
        self.profile_service = profile_service
        self.join_request_service = join_request_service
        self.allow_list_service = allow_list_service
        self.audit_service = audit_service

    async def execute(self, request: AcceptJoinRequestRequest) -> AcceptJoinRequestResponse:
        """Accept a join request.

        Both writes share the request transaction. A ledger failure rolls the
        grant back with it and leaves the request pending; the grant is
        idempotent, so retrying the whole operation is safe. The ledger
        transition is conditional on the request still being pending; the
        loser of a race repairs the allow-list to the winning decision and
        reports a no-op.

        Raises:
            NotAuthorizedError: If the actor is not an admin
            NotFoundError: If the request does not exist
            PartialFailureError: If the ledger write fails after the allow-list write
        """
        actor = await self.profile_service.require_admin(
            request.actor_id, "accept join requests"
        )

        with logfire.span(
            "accept_join_request",
            request_id=str(request.request_id),
            role=request.role.value,
            actor_id=str(actor.id),
        ):
            join_request = await self.join_request_service.get_by_id(request.request_id)
            if not join_request.is_pending:
                logfire.info(
                    "Join request already decided",
                    request_id=str(join_request.id),
                    status=join_request.status.value,
                )
                return AcceptJoinRequestResponse(
                    applied=False,
                    status=join_request.status,
                    decided_role=join_request.decided_role,
                )

            await self.allow_list_service.grant(join_request.email, request.role)

            try:
                decided = await self.join_request_service.decide(
                    join_request.id,
                    JoinRequestStatus.ACCEPTED,
                    decided_by=actor.id,
                    decided_role=request.role,
                )
            except Exception as e:
                logfire.error(
                    "Join request ledger write failed after allow-list write",
                    request_id=str(join_request.id),
                    error=str(e),
                )
                raise PartialFailureError(
                    "accept join request", "allow-list write", e
                ) from e

            if decided is None:
                return await self._repair_after_lost_race(join_request.id)

            await self.audit_service.record(
                AuditAction.JOIN_REQUEST_ACCEPTED,
                actor_id=actor.id,
                actor_email=actor.email.root if actor.email else None,
                resource=f"join_request:{join_request.id}",
                details={"email": join_request.email.root, "role": request.role.value},
            )
            return AcceptJoinRequestResponse(
                applied=True, status=decided.status, decided_role=decided.decided_role
            )

    async def _repair_after_lost_race(
        self, request_id: JoinRequestId
    ) -> AcceptJoinRequestResponse:
        winner = await self.join_request_service.get_by_id(request_id)
        if winner.status == JoinRequestStatus.ACCEPTED and winner.decided_role:
            await self.allow_list_service.grant(winner.email, winner.decided_role)
        elif winner.status == JoinRequestStatus.DENIED:
            await self.allow_list_service.revoke(winner.email)

        logfire.warn(
            "Lost accept race, allow-list aligned with winning decision",
            request_id=str(request_id),
            status=winner.status.value,
        )
        return AcceptJoinRequestResponse(
            applied=False, status=winner.status, decided_role=winner.decided_role
        )
