"""In-memory join request repository for testing."""

from datetime import datetime
from typing import Optional

from hadik.domain.error import ConflictError
from hadik.domain.model.join_request import JoinRequest
from hadik.domain.repository.join_request import JoinRequestRepository
from hadik.domain.value import Email, JoinRequestId, JoinRequestStatus, Role, UserId


class InMemoryJoinRequestRepository(JoinRequestRepository):
    """In-memory implementation of JoinRequestRepository for testing."""

    def __init__(self) -> None:
        self._requests: list[JoinRequest] = []

    async def find_by_id(self, request_id: JoinRequestId) -> Optional[JoinRequest]:
        for request in self._requests:
            if request.id == request_id:
                return request
        return None

    async def find_latest_by_email(self, email: Email) -> Optional[JoinRequest]:
        matching = [r for r in self._requests if r.email == email]
        if not matching:
            return None
        return max(matching, key=lambda r: r.created_at)

    async def insert(self, request: JoinRequest) -> JoinRequest:
        """Insert a pending request.

        Raises:
            ConflictError: If a pending request already exists for the e-mail
        """
        for existing in self._requests:
            if existing.email == request.email and existing.is_pending:
                raise ConflictError("Pending join request", request.email.root)
        self._requests.append(request)
        return request

    async def update_status(
        self,
        request_id: JoinRequestId,
        status: JoinRequestStatus,
        decided_by: UserId,
        decided_at: datetime,
        decided_role: Role | None = None,
    ) -> Optional[JoinRequest]:
        for i, existing in enumerate(self._requests):
            if existing.id == request_id:
                if not existing.is_pending:
                    return None
                updated = existing.model_copy(
                    update={
                        "status": status,
                        "decided_by": decided_by,
                        "decided_role": decided_role,
                        "decided_at": decided_at,
                    }
                )
                self._requests[i] = updated
                return updated
        return None

    async def find_pending(self) -> list[JoinRequest]:
        pending = [r for r in self._requests if r.is_pending]
        return sorted(pending, key=lambda r: r.created_at)
