"""Join request repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from hadik.domain.model.join_request import JoinRequest
from hadik.domain.value import Email, JoinRequestId, JoinRequestStatus, Role, UserId


class JoinRequestRepository(ABC):
    """Repository for the join request ledger.

    The ledger is append-only for decisions and holds at most one pending
    request per e-mail.
    """

    @abstractmethod
    async def find_by_id(self, request_id: JoinRequestId) -> JoinRequest | None:
        """Find a join request by ID.

        Args:
            request_id: The request's unique identifier

        Returns:
            The request if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_latest_by_email(self, email: Email) -> JoinRequest | None:
        """Find the most recent join request for an e-mail.

        Args:
            email: Normalized e-mail

        Returns:
            The newest request if any exists, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, request: JoinRequest) -> JoinRequest:
        """Append a new pending join request.

        Args:
            request: Request to insert

        Returns:
            The stored request

        Raises:
            ConflictError: If a pending request already exists for the e-mail
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        request_id: JoinRequestId,
        status: JoinRequestStatus,
        decided_by: UserId,
        decided_at: datetime,
        decided_role: Role | None = None,
    ) -> JoinRequest | None:
        """Transition a request out of pending.

        The update is conditional on the stored status still being pending,
        so of two concurrent deciders only the first succeeds.

        Args:
            request_id: Request to transition
            status: ACCEPTED or DENIED
            decided_by: Deciding admin
            decided_at: Decision time
            decided_role: Granted role, only for ACCEPTED

        Returns:
            The updated request, or None if it was missing or no longer pending
        """
        pass

    @abstractmethod
    async def find_pending(self) -> list[JoinRequest]:
        """List pending requests, oldest first.

        Returns:
            Pending join requests
        """
        pass
