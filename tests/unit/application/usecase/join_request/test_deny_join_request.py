"""Unit tests for denying join requests."""

import asyncio

import pytest

from hadik.application.usecase.join_request import (
    AcceptJoinRequestUseCase,
    DenyJoinRequestUseCase,
)
from hadik.application.usecase.join_request.accept_join_request import (
    AcceptJoinRequestRequest,
)
from hadik.application.usecase.join_request.deny_join_request import (
    DenyJoinRequestRequest,
)
from hadik.domain.repository import AuditLogRepository
from hadik.domain.service import AllowListService, JoinRequestService
from hadik.domain.value import Email, JoinRequestStatus, Role
from tests.conftest import seed_admin
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestDenyJoinRequest:
    """Tests for DenyJoinRequestUseCase."""

    @pytest.mark.asyncio
    async def test_deny_records_decision(self, unit_env):
        deny = await unit_env.get(DenyJoinRequestUseCase)
        service = await unit_env.get(JoinRequestService)
        allow_list = await unit_env.get(AllowListService)
        audit = await unit_env.get(AuditLogRepository)
        admin = await seed_admin(unit_env)
        pending = await service.submit(Email("no@x.com"), None)

        response = await deny.execute(
            DenyJoinRequestRequest(actor_id=admin.user_id, request_id=pending.id)
        )

        assert response.applied is True
        assert response.status == JoinRequestStatus.DENIED
        decided = await service.get_by_id(pending.id)
        assert decided.decided_by == admin.user_id
        assert decided.decided_role is None
        assert await allow_list.get(Email("no@x.com")) is None
        assert [e.action for e in audit.entries] == ["JOIN_REQUEST_DENIED"]

    @pytest.mark.asyncio
    async def test_deny_twice_is_a_no_op(self, unit_env):
        deny = await unit_env.get(DenyJoinRequestUseCase)
        service = await unit_env.get(JoinRequestService)
        audit = await unit_env.get(AuditLogRepository)
        admin = await seed_admin(unit_env)
        pending = await service.submit(Email("no@x.com"), None)
        request = DenyJoinRequestRequest(actor_id=admin.user_id, request_id=pending.id)

        await deny.execute(request)
        again = await deny.execute(request)

        assert again.applied is False
        assert again.status == JoinRequestStatus.DENIED
        assert len(audit.entries) == 1

    @pytest.mark.asyncio
    async def test_concurrent_accept_and_deny_apply_once(self, unit_env):
        """Exactly one of two racing decisions takes effect."""
        accept = await unit_env.get(AcceptJoinRequestUseCase)
        deny = await unit_env.get(DenyJoinRequestUseCase)
        service = await unit_env.get(JoinRequestService)
        allow_list = await unit_env.get(AllowListService)
        admin = await seed_admin(unit_env)
        pending = await service.submit(Email("race@x.com"), None)

        accepted, denied = await asyncio.gather(
            accept.execute(
                AcceptJoinRequestRequest(
                    actor_id=admin.user_id, request_id=pending.id, role=Role.VIEWER
                )
            ),
            deny.execute(
                DenyJoinRequestRequest(actor_id=admin.user_id, request_id=pending.id)
            ),
        )

        assert [accepted.applied, denied.applied].count(True) == 1
        final = await service.get_by_id(pending.id)
        entry = await allow_list.get(Email("race@x.com"))
        if final.status == JoinRequestStatus.ACCEPTED:
            assert entry is not None and entry.role == Role.VIEWER
        else:
            assert entry is None
