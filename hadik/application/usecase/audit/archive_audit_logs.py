"""Archive audit log use case."""

from datetime import timedelta

from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.config import Settings
from hadik.domain.service import AuditService, ProfileService
from hadik.domain.value import AuditAction, UserId


class ArchiveAuditLogsRequest(BaseModel):
    actor_id: UserId


class ArchiveAuditLogsResponse(BaseModel):
    """Archived entries rendered as a downloadable text file."""

    archived: int
    filename: str
    content: str


class ArchiveAuditLogsUseCase(BaseUseCase):
    """Move entries past the retention window out of the audit log."""

    def __init__(
        self,
        profile_service: ProfileService,
        audit_service: AuditService,
        settings: Settings,
    ) -> None:
        self.profile_service = profile_service
        self.audit_service = audit_service
        self.settings = settings

    async def execute(self, request: ArchiveAuditLogsRequest) -> ArchiveAuditLogsResponse:
        actor = await self.profile_service.require_admin(
            request.actor_id, "archive audit logs"
        )
        retention = timedelta(days=self.settings.admission.audit_retention_days)
        archive = await self.audit_service.archive(retention)

        await self.audit_service.record(
            AuditAction.AUDIT_ARCHIVED,
            actor_id=actor.id,
            actor_email=actor.email.root if actor.email else None,
            resource="audit_logs",
            details={"archived": archive.count, "cutoff": archive.cutoff.isoformat()},
        )
        return ArchiveAuditLogsResponse(
            archived=archive.count, filename=archive.filename, content=archive.render()
        )
