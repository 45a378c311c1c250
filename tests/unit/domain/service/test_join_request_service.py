"""Unit tests for JoinRequestService."""

from uuid import uuid4

import pytest

from hadik.domain.error import ConflictError, NotFoundError
from hadik.domain.service import JoinRequestService
from hadik.domain.value import Email, JoinRequestId, JoinRequestStatus, Role, UserId
from hadik.util.clock import Clock
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestJoinRequestService:
    """Tests for the join request ledger."""

    @pytest.mark.asyncio
    async def test_one_pending_request_per_email(self, unit_env):
        service = await unit_env.get(JoinRequestService)
        await service.submit(Email("new@x.com"), "192.0.2.7")

        with pytest.raises(ConflictError):
            await service.submit(Email("NEW@x.com"), "192.0.2.8")

        assert len(await service.list_pending()) == 1

    @pytest.mark.asyncio
    async def test_decided_email_may_request_again(self, unit_env):
        """The uniqueness rule only covers pending requests."""
        service = await unit_env.get(JoinRequestService)
        first = await service.submit(Email("again@x.com"), None)
        await service.decide(first.id, JoinRequestStatus.DENIED, decided_by=UserId(uuid4()))

        second = await service.submit(Email("again@x.com"), None)

        assert second.id != first.id
        assert second.is_pending

    @pytest.mark.asyncio
    async def test_only_first_decision_applies(self, unit_env):
        service = await unit_env.get(JoinRequestService)
        admin_id = UserId(uuid4())
        request = await service.submit(Email("race@x.com"), None)

        accepted = await service.decide(
            request.id, JoinRequestStatus.ACCEPTED, admin_id, decided_role=Role.VIEWER
        )
        denied = await service.decide(request.id, JoinRequestStatus.DENIED, admin_id)

        assert accepted is not None
        assert accepted.decided_role == Role.VIEWER
        assert denied is None
        assert (await service.get_by_id(request.id)).status == JoinRequestStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_decision_records_who_and_when(self, unit_env):
        service = await unit_env.get(JoinRequestService)
        clock = await unit_env.get(Clock)
        admin_id = UserId(uuid4())
        request = await service.submit(Email("who@x.com"), None)
        clock.advance(hours=1)

        decided = await service.decide(request.id, JoinRequestStatus.DENIED, admin_id)

        assert decided.decided_by == admin_id
        assert decided.decided_at == clock.now()
        assert decided.decided_role is None

    @pytest.mark.asyncio
    async def test_malformed_decisions_rejected(self, unit_env):
        service = await unit_env.get(JoinRequestService)
        admin_id = UserId(uuid4())
        request = await service.submit(Email("bad@x.com"), None)

        with pytest.raises(ValueError):
            await service.decide(request.id, JoinRequestStatus.PENDING, admin_id)
        with pytest.raises(ValueError):
            await service.decide(request.id, JoinRequestStatus.ACCEPTED, admin_id)
        with pytest.raises(ValueError):
            await service.decide(
                request.id, JoinRequestStatus.DENIED, admin_id, decided_role=Role.VIEWER
            )

    @pytest.mark.asyncio
    async def test_pending_listed_oldest_first(self, unit_env):
        service = await unit_env.get(JoinRequestService)
        clock = await unit_env.get(Clock)
        await service.submit(Email("first@x.com"), None)
        clock.advance(minutes=1)
        await service.submit(Email("second@x.com"), None)

        pending = await service.list_pending()

        assert [r.email.root for r in pending] == ["first@x.com", "second@x.com"]

    @pytest.mark.asyncio
    async def test_get_unknown_raises(self, unit_env):
        service = await unit_env.get(JoinRequestService)

        with pytest.raises(NotFoundError):
            await service.get_by_id(JoinRequestId(uuid4()))
