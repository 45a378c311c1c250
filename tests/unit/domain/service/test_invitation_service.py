"""Unit tests for InvitationService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from hadik.domain.service import InvitationService, generate_token
from hadik.domain.value import Email, InvitationStep, InviteToken, Role, UserId
from hadik.util.clock import Clock
from tests.di import T0
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestInvitationService:
    """Tests for issuing, classifying and accepting invitations."""

    @pytest.mark.asyncio
    async def test_issue_sets_seven_day_expiry(self, unit_env):
        service = await unit_env.get(InvitationService)

        invitation = await service.issue(
            Email("bob@x.com"), Role.RESEARCHER, invited_by=UserId(uuid4())
        )

        assert invitation.expires_at == T0 + timedelta(days=7)
        assert invitation.accepted_at is None
        assert await service.get_by_token(invitation.token) == invitation

    @pytest.mark.asyncio
    async def test_reissue_keeps_one_invitation_with_fresh_token(self, unit_env):
        """Re-inviting an e-mail replaces its token; the old link stops working."""
        service = await unit_env.get(InvitationService)
        first = await service.issue(Email("bob@x.com"), Role.VIEWER, invited_by=None)

        second = await service.issue(Email("Bob@X.com"), Role.RESEARCHER, invited_by=None)

        assert second.id == first.id
        assert second.token != first.token
        assert second.role == Role.RESEARCHER
        assert await service.get_by_token(first.token) is None
        assert len(await service.list_all()) == 1

    @pytest.mark.asyncio
    async def test_classify_order(self, unit_env):
        """Lookup, then expiry, then acceptance."""
        service = await unit_env.get(InvitationService)
        clock = await unit_env.get(Clock)
        invitation = await service.issue(Email("e@x.com"), Role.VIEWER, invited_by=None)

        assert service.classify(None) == InvitationStep.INVALID_TOKEN
        assert service.classify(invitation) is None

        accepted = await service.mark_accepted(invitation.token)
        assert service.classify(accepted) == InvitationStep.ALREADY_ACCEPTED

        clock.advance(days=8)
        assert service.classify(accepted) == InvitationStep.EXPIRED

    @pytest.mark.asyncio
    async def test_mark_accepted_only_once(self, unit_env):
        service = await unit_env.get(InvitationService)
        invitation = await service.issue(Email("once@x.com"), Role.VIEWER, invited_by=None)

        first = await service.mark_accepted(invitation.token)
        second = await service.mark_accepted(invitation.token)

        assert first is not None
        assert first.accepted_at == T0
        assert second is None

    @pytest.mark.asyncio
    async def test_mark_accepted_refuses_expired(self, unit_env):
        service = await unit_env.get(InvitationService)
        clock = await unit_env.get(Clock)
        invitation = await service.issue(Email("late@x.com"), Role.VIEWER, invited_by=None)

        clock.advance(days=8)

        assert await service.mark_accepted(invitation.token) is None

    @pytest.mark.asyncio
    async def test_cancel(self, unit_env):
        service = await unit_env.get(InvitationService)
        invitation = await service.issue(Email("c@x.com"), Role.VIEWER, invited_by=None)

        assert await service.cancel(invitation.id) is True
        assert await service.cancel(invitation.id) is False
        assert await service.get_by_token(invitation.token) is None

    def test_generated_tokens_are_unguessable(self):
        tokens = {generate_token().root for _ in range(50)}

        assert len(tokens) == 50
        assert all(len(t) >= 40 for t in tokens)

    def test_token_redaction(self):
        token = InviteToken("abcdefghijklmnop")

        assert token.redacted() == "abcdefgh..."
