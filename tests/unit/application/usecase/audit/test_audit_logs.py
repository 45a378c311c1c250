"""Unit tests for audit log listing and archival."""

import pytest

from hadik.application.usecase.audit import ArchiveAuditLogsUseCase, ListAuditLogsUseCase
from hadik.application.usecase.audit.archive_audit_logs import ArchiveAuditLogsRequest
from hadik.application.usecase.audit.list_audit_logs import ListAuditLogsRequest
from hadik.domain.service import AuditService
from hadik.domain.value import AuditAction
from hadik.util.clock import Clock
from tests.conftest import seed_admin
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestListAuditLogs:
    @pytest.mark.asyncio
    async def test_newest_first_with_limit(self, unit_env):
        use_case = await unit_env.get(ListAuditLogsUseCase)
        audit = await unit_env.get(AuditService)
        clock = await unit_env.get(Clock)
        admin = await seed_admin(unit_env)
        for action in (
            AuditAction.MEMBER_INVITED,
            AuditAction.ROLE_CHANGED,
            AuditAction.USER_DELETED,
        ):
            await audit.record(action, actor_email="admin@x.com")
            clock.advance(minutes=1)

        response = await use_case.execute(
            ListAuditLogsRequest(actor_id=admin.user_id, limit=2)
        )

        assert [item.action for item in response.items] == ["USER_DELETED", "ROLE_CHANGED"]


class TestArchiveAuditLogs:
    @pytest.mark.asyncio
    async def test_archive_moves_old_entries(self, unit_env):
        """Entries past retention are rendered and removed; the archive itself is logged."""
        # Arrange
        use_case = await unit_env.get(ArchiveAuditLogsUseCase)
        list_logs = await unit_env.get(ListAuditLogsUseCase)
        audit = await unit_env.get(AuditService)
        clock = await unit_env.get(Clock)
        admin = await seed_admin(unit_env)
        await audit.record(
            AuditAction.MEMBER_INVITED,
            actor_email="admin@x.com",
            resource="invitation:1",
            ip_address="192.0.2.1",
        )
        clock.advance(days=40)
        await audit.record(AuditAction.ROLE_CHANGED, actor_email="admin@x.com")

        # Act
        response = await use_case.execute(ArchiveAuditLogsRequest(actor_id=admin.user_id))
        remaining = await list_logs.execute(ListAuditLogsRequest(actor_id=admin.user_id))

        # Assert
        assert response.archived == 1
        assert response.filename == "audit-archive-2026-01-15.txt"
        assert "MEMBER_INVITED by admin@x.com on invitation:1" in response.content
        assert "(ip 192.0.2.1)" in response.content
        assert {i.action for i in remaining.items} == {"AUDIT_ARCHIVED", "ROLE_CHANGED"}
