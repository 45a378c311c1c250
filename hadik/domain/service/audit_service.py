"""Audit log domain service."""

from datetime import datetime, timedelta
from typing import Any
from uuid import uuid4

import logfire

from hadik.domain.model.audit_log import AuditLogEntry
from hadik.domain.repository import AuditLogRepository
from hadik.domain.value import AuditAction, AuditLogId, UserId
from hadik.util.clock import Clock

from .base import Service


class AuditArchive:
    """Plain-text rendering of archived audit entries."""

    def __init__(self, cutoff: datetime, entries: list[AuditLogEntry]) -> None:
        self.cutoff = cutoff
        self.entries = entries

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def filename(self) -> str:
        return f"audit-archive-{self.cutoff.date().isoformat()}.txt"

    def render(self) -> str:
        lines = [f"Audit log archive - entries before {self.cutoff.isoformat()}", ""]
        for entry in self.entries:
            line = (
                f"[{entry.timestamp.isoformat()}] {entry.action} "
                f"by {entry.user_email or 'anonymous'}"
            )
            if entry.resource:
                line += f" on {entry.resource}"
            if entry.details:
                line += f" {entry.details}"
            if entry.ip_address:
                line += f" (ip {entry.ip_address})"
            lines.append(line)
        return "\n".join(lines) + "\n"


class AuditService(Service):
    """Domain service for the append-only audit log."""

    def __init__(self, audit_log_repository: AuditLogRepository, clock: Clock) -> None:
        self.audit_log_repository = audit_log_repository
        self.clock = clock

    async def record(
        self,
        action: AuditAction,
        actor_id: UserId | None = None,
        actor_email: str | None = None,
        resource: str | None = None,
        details: dict[str, Any] | None = None,
        ip_address: str | None = None,
    ) -> None:
        """Append an audit entry.

        Fire-and-forget: a failed write is logged and never raised, so audit
        trouble cannot interrupt the operation being audited.
        """
        entry = AuditLogEntry(
            id=AuditLogId(uuid4()),
            user_id=actor_id,
            user_email=actor_email or "anonymous",
            action=action.value,
            resource=resource,
            details=details,
            ip_address=ip_address,
            timestamp=self.clock.now(),
        )
        try:
            await self.audit_log_repository.append(entry)
        except Exception as e:
            logfire.warn(
                "Audit write failed", action=action.value, resource=resource, error=str(e)
            )

    async def list_recent(self, limit: int = 50) -> list[AuditLogEntry]:
        return await self.audit_log_repository.find_recent(limit)

    async def archive(self, retention: timedelta) -> AuditArchive:
        """Collect entries older than the retention window and delete them.

        Args:
            retention: Entries older than now - retention are archived

        Returns:
            The archive of removed entries
        """
        cutoff = self.clock.now() - retention
        with logfire.span("audit_service.archive", cutoff=cutoff.isoformat()):
            entries = await self.audit_log_repository.find_before(cutoff)
            archive = AuditArchive(cutoff, entries)
            if entries:
                deleted = await self.audit_log_repository.delete_before(cutoff)
                logfire.info("Audit entries archived", archived=archive.count, deleted=deleted)
            return archive
