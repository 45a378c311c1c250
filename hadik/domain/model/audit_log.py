"""Audit log entry and per-user IP record."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from hadik.domain.model.common import DomainModel
from hadik.domain.value import AuditLogId, UserId
from hadik.util.clock import utc_now


class AuditLogEntry(DomainModel):
    """Append-only record written by every admission state transition."""

    id: AuditLogId
    user_id: Optional[UserId] = None
    user_email: Optional[str] = None  # Actor e-mail, or "anonymous"
    action: str
    resource: Optional[str] = None
    details: Optional[dict[str, Any]] = None
    ip_address: Optional[str] = None
    timestamp: datetime = Field(default_factory=utc_now)


class UserIp(DomainModel):
    """Last known client address of a member (one row per user)."""

    user_id: UserId
    ip_address: str
    last_seen: datetime = Field(default_factory=utc_now)
