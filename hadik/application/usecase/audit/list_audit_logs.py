"""List audit log use case."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from hadik.application.usecase.base import BaseUseCase
from hadik.domain.service import AuditService, ProfileService
from hadik.domain.value import UserId


class ListAuditLogsRequest(BaseModel):
    actor_id: UserId
    limit: int = Field(default=50, ge=1, le=500)


class AuditLogItem(BaseModel):
    id: str
    user_email: str | None
    action: str
    resource: str | None
    details: dict[str, Any] | None
    ip_address: str | None
    timestamp: datetime


class ListAuditLogsResponse(BaseModel):
    items: list[AuditLogItem]


class ListAuditLogsUseCase(BaseUseCase):
    """Newest audit entries."""

    def __init__(self, profile_service: ProfileService, audit_service: AuditService) -> None:
        self.profile_service = profile_service
        self.audit_service = audit_service

    async def execute(self, request: ListAuditLogsRequest) -> ListAuditLogsResponse:
        await self.profile_service.require_admin(request.actor_id, "view audit logs")
        entries = await self.audit_service.list_recent(request.limit)
        return ListAuditLogsResponse(
            items=[
                AuditLogItem(
                    id=str(e.id),
                    user_email=e.user_email,
                    action=e.action,
                    resource=e.resource,
                    details=e.details,
                    ip_address=e.ip_address,
                    timestamp=e.timestamp,
                )
                for e in entries
            ]
        )
