"""Audit log use cases."""

from .archive_audit_logs import ArchiveAuditLogsUseCase
from .list_audit_logs import ListAuditLogsUseCase

__all__ = ["ArchiveAuditLogsUseCase", "ListAuditLogsUseCase"]
