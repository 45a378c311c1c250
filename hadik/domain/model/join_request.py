"""Join request entity.

A self-service request for access from an e-mail that is not allow-listed.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from hadik.domain.model.common import DomainModel
from hadik.domain.value import Email, JoinRequestId, JoinRequestStatus, Role, UserId
from hadik.util.clock import utc_now


class JoinRequest(DomainModel):
    """Join request ledger entry.

    Business rules:
    - At most one pending request per e-mail
    - Status only moves pending -> accepted or pending -> denied
    - decided_role is set only on acceptance and becomes the allow-list role
    - Never deleted (historical record)
    """

    id: JoinRequestId
    email: Email
    ip: Optional[str] = None  # Best-effort client address at submission
    status: JoinRequestStatus = JoinRequestStatus.PENDING
    decided_by: Optional[UserId] = None
    decided_role: Optional[Role] = None
    decided_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def is_pending(self) -> bool:
        return self.status == JoinRequestStatus.PENDING
