"""Join request domain service."""

from uuid import uuid4

import logfire

from hadik.domain.error import NotFoundError
from hadik.domain.model.join_request import JoinRequest
from hadik.domain.repository import JoinRequestRepository
from hadik.domain.value import Email, JoinRequestId, JoinRequestStatus, Role, UserId
from hadik.util.clock import Clock

from .base import Service


class JoinRequestService(Service):
    """Domain service for the join request ledger."""

    def __init__(
        self, join_request_repository: JoinRequestRepository, clock: Clock
    ) -> None:
        """Initialize join request service.

        Args:
            join_request_repository: Join request repository
            clock: Time source for created_at and decided_at
        """
        self.join_request_repository = join_request_repository
        self.clock = clock

    async def get_by_id(self, request_id: JoinRequestId) -> JoinRequest:
        """Get a join request by ID.

        Raises:
            NotFoundError: If the request does not exist
        """
        request = await self.join_request_repository.find_by_id(request_id)
        if not request:
            raise NotFoundError("Join request", str(request_id))
        return request

    async def find_latest(self, email: Email) -> JoinRequest | None:
        """Most recent request for an e-mail, whatever its status."""
        return await self.join_request_repository.find_latest_by_email(email)

    async def submit(self, email: Email, ip: str | None) -> JoinRequest:
        """Open a pending join request.

        Args:
            email: Normalized e-mail
            ip: Best-effort client address

        Returns:
            The new pending request

        Raises:
            ConflictError: If a pending request already exists for the e-mail
        """
        with logfire.span("join_request_service.submit", email=email.root):
            request = JoinRequest(
                id=JoinRequestId(uuid4()),
                email=email,
                ip=ip,
                status=JoinRequestStatus.PENDING,
                created_at=self.clock.now(),
            )
            saved = await self.join_request_repository.insert(request)
            logfire.info(
                "Join request submitted", request_id=str(saved.id), email=email.root
            )
            return saved

    async def decide(
        self,
        request_id: JoinRequestId,
        status: JoinRequestStatus,
        decided_by: UserId,
        decided_role: Role | None = None,
    ) -> JoinRequest | None:
        """Move a pending request to ACCEPTED or DENIED.

        Args:
            request_id: Request to decide
            status: ACCEPTED or DENIED
            decided_by: Deciding admin
            decided_role: Granted role, required for ACCEPTED

        Returns:
            The decided request, or None if another decision got there first

        Raises:
            ValueError: If the transition or role is malformed
        """
        if status == JoinRequestStatus.PENDING:
            raise ValueError("A decision must leave the pending state")
        if (status == JoinRequestStatus.ACCEPTED) != (decided_role is not None):
            raise ValueError("decided_role is set only on acceptance")

        with logfire.span(
            "join_request_service.decide",
            request_id=str(request_id),
            status=status.value,
            decided_by=str(decided_by),
        ):
            decided = await self.join_request_repository.update_status(
                request_id,
                status,
                decided_by=decided_by,
                decided_at=self.clock.now(),
                decided_role=decided_role,
            )
            if decided is None:
                logfire.warn(
                    "Join request no longer pending", request_id=str(request_id)
                )
                return None

            logfire.info(
                "Join request decided",
                request_id=str(request_id),
                status=status.value,
                decided_role=decided_role.value if decided_role else None,
            )
            return decided

    async def list_pending(self) -> list[JoinRequest]:
        """Pending requests, oldest first."""
        return await self.join_request_repository.find_pending()
