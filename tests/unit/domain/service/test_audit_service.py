"""Unit tests for AuditService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from hadik.domain.model import AuditLogEntry
from hadik.domain.repository import AuditLogRepository
from hadik.domain.service import AuditService
from hadik.domain.value import AuditAction, AuditLogId
from tests.di import T0
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _entry(days_ago: int, action: AuditAction) -> AuditLogEntry:
    return AuditLogEntry(
        id=AuditLogId(uuid4()),
        user_email="admin@x.com",
        action=action.value,
        resource="invitation:1",
        timestamp=T0 - timedelta(days=days_ago),
    )


class TestAuditService:
    """Tests for recording and archiving audit entries."""

    @pytest.mark.asyncio
    async def test_record_defaults_to_anonymous(self, unit_env):
        service = await unit_env.get(AuditService)
        repo = await unit_env.get(AuditLogRepository)

        await service.record(
            AuditAction.JOIN_REQUEST_SUBMITTED,
            resource="join_request:1",
            ip_address="192.0.2.1",
        )

        [entry] = repo.entries
        assert entry.user_email == "anonymous"
        assert entry.action == "JOIN_REQUEST_SUBMITTED"
        assert entry.timestamp == T0

    @pytest.mark.asyncio
    async def test_record_never_raises(self, unit_env):
        """A broken audit store must not interrupt the audited operation."""
        service = await unit_env.get(AuditService)
        repo = await unit_env.get(AuditLogRepository)
        repo.fail = True

        await service.record(AuditAction.ROLE_CHANGED, resource="profile:1")

        assert repo.entries == []

    @pytest.mark.asyncio
    async def test_archive_removes_entries_past_retention(self, unit_env):
        service = await unit_env.get(AuditService)
        repo = await unit_env.get(AuditLogRepository)
        for entry in (
            _entry(40, AuditAction.MEMBER_INVITED),
            _entry(31, AuditAction.ROLE_CHANGED),
            _entry(1, AuditAction.USER_DELETED),
        ):
            await repo.append(entry)

        archive = await service.archive(timedelta(days=30))

        assert archive.count == 2
        assert archive.filename == "audit-archive-2025-12-06.txt"
        content = archive.render()
        assert "MEMBER_INVITED by admin@x.com on invitation:1" in content
        assert "ROLE_CHANGED" in content
        assert "USER_DELETED" not in content
        assert [e.action for e in repo.entries] == ["USER_DELETED"]

    @pytest.mark.asyncio
    async def test_archive_with_nothing_old(self, unit_env):
        service = await unit_env.get(AuditService)

        archive = await service.archive(timedelta(days=30))

        assert archive.count == 0
        assert archive.render().startswith("Audit log archive")
