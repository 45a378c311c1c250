"""Unit tests for inviting, cancelling and listing invitations."""

from datetime import timedelta
from uuid import uuid4

import pytest

from hadik.application.usecase.invitation import (
    CancelInvitationUseCase,
    CreateInvitationUseCase,
    ListInvitationsUseCase,
)
from hadik.application.usecase.invitation.cancel_invitation import (
    CancelInvitationRequest,
)
from hadik.application.usecase.invitation.create_invitation import (
    CreateInvitationRequest,
)
from hadik.application.usecase.invitation.list_invitations import (
    ListInvitationsRequest,
)
from hadik.config import Settings
from hadik.domain.error import (
    BusinessRuleViolationError,
    NotAuthorizedError,
    ValidationError,
)
from hadik.domain.repository import AuditLogRepository, ProfileRepository
from hadik.domain.service import (
    AllowListService,
    InvitationNotifier,
    InvitationService,
)
from hadik.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InviteToken,
    Role,
    UserId,
)
from hadik.util.clock import Clock
from tests.conftest import seed_admin, seed_profile
from tests.di import T0
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateInvitation:
    """Tests for CreateInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_invite_allow_lists_and_notifies(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateInvitationUseCase)
        allow_list = await unit_env.get(AllowListService)
        invitations = await unit_env.get(InvitationService)
        notifier = await unit_env.get(InvitationNotifier)
        settings = await unit_env.get(Settings)
        audit = await unit_env.get(AuditLogRepository)
        admin = await seed_admin(unit_env)

        # Act
        response = await use_case.execute(
            CreateInvitationRequest(
                actor_id=admin.user_id, email=" Bob@X.com ", role=Role.RESEARCHER
            )
        )

        # Assert
        assert response.email_sent is True
        assert response.email == "bob@x.com"
        assert response.expires_at == T0 + timedelta(days=7)
        assert (await allow_list.get(Email("bob@x.com"))).role == Role.RESEARCHER

        [(email, token, role, accept_url)] = notifier.sent
        assert (email, role, accept_url) == (
            "bob@x.com",
            Role.RESEARCHER,
            settings.accept_invitation_url,
        )
        assert response.invite_url == f"{settings.accept_invitation_url}?token={token}"
        invitation = await invitations.get_by_token(InviteToken(token))
        assert invitation.invited_by == admin.user_id
        assert [e.action for e in audit.entries] == ["MEMBER_INVITED"]

    @pytest.mark.asyncio
    async def test_delivery_failure_keeps_invitation(self, unit_env):
        use_case = await unit_env.get(CreateInvitationUseCase)
        notifier = await unit_env.get(InvitationNotifier)
        invitations = await unit_env.get(InvitationService)
        admin = await seed_admin(unit_env)
        notifier.fail = True

        response = await use_case.execute(
            CreateInvitationRequest(
                actor_id=admin.user_id, email="bob@x.com", role=Role.VIEWER
            )
        )

        assert response.email_sent is False
        assert "manually" in response.message
        assert len(await invitations.list_all()) == 1

    @pytest.mark.asyncio
    async def test_reinvite_replaces_token(self, unit_env):
        use_case = await unit_env.get(CreateInvitationUseCase)
        invitations = await unit_env.get(InvitationService)
        admin = await seed_admin(unit_env)
        request = CreateInvitationRequest(
            actor_id=admin.user_id, email="bob@x.com", role=Role.VIEWER
        )

        first = await use_case.execute(request)
        second = await use_case.execute(request.model_copy(update={"role": Role.ANNOTATOR}))

        assert first.invite_url != second.invite_url
        [only] = await invitations.list_all()
        assert only.role == Role.ANNOTATOR

    @pytest.mark.asyncio
    async def test_invalid_email(self, unit_env):
        use_case = await unit_env.get(CreateInvitationUseCase)
        admin = await seed_admin(unit_env)

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateInvitationRequest(
                    actor_id=admin.user_id, email="bob-at-x", role=Role.VIEWER
                )
            )

    @pytest.mark.asyncio
    async def test_requires_admin(self, unit_env):
        use_case = await unit_env.get(CreateInvitationUseCase)
        profiles = await unit_env.get(ProfileRepository)
        viewer = UserId(uuid4())
        await seed_profile(profiles, viewer, "viewer@x.com", Role.VIEWER)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                CreateInvitationRequest(actor_id=viewer, email="bob@x.com", role=Role.VIEWER)
            )

    @pytest.mark.asyncio
    async def test_admin_email_cannot_be_invited(self, unit_env):
        use_case = await unit_env.get(CreateInvitationUseCase)
        allow_list = await unit_env.get(AllowListService)
        notifier = await unit_env.get(InvitationNotifier)
        admin = await seed_admin(unit_env)

        with pytest.raises(BusinessRuleViolationError):
            await use_case.execute(
                CreateInvitationRequest(
                    actor_id=admin.user_id, email="Admin@x.com", role=Role.VIEWER
                )
            )

        assert await allow_list.get(Email("admin@x.com")) is None
        assert notifier.sent == []


class TestCancelInvitation:
    @pytest.mark.asyncio
    async def test_cancel_removes_invitation_and_allow_list(self, unit_env):
        create = await unit_env.get(CreateInvitationUseCase)
        cancel = await unit_env.get(CancelInvitationUseCase)
        allow_list = await unit_env.get(AllowListService)
        invitations = await unit_env.get(InvitationService)
        admin = await seed_admin(unit_env)
        created = await create.execute(
            CreateInvitationRequest(
                actor_id=admin.user_id, email="bob@x.com", role=Role.VIEWER
            )
        )

        response = await cancel.execute(
            CancelInvitationRequest(
                actor_id=admin.user_id,
                invitation_id=created.invitation_id,
                email="bob@x.com",
            )
        )

        assert response.invitation_removed is True
        assert response.allow_list_removed is True
        assert await invitations.list_all() == []
        assert await allow_list.get(Email("bob@x.com")) is None

    @pytest.mark.asyncio
    async def test_cancel_missing_invitation_is_harmless(self, unit_env):
        cancel = await unit_env.get(CancelInvitationUseCase)
        admin = await seed_admin(unit_env)

        response = await cancel.execute(
            CancelInvitationRequest(
                actor_id=admin.user_id,
                invitation_id=InvitationId(uuid4()),
                email="ghost@x.com",
            )
        )

        assert response.invitation_removed is False
        assert response.allow_list_removed is False


class TestListInvitations:
    @pytest.mark.asyncio
    async def test_statuses_are_derived(self, unit_env):
        """Newest first; expiry is judged at read time."""
        create = await unit_env.get(CreateInvitationUseCase)
        list_invitations = await unit_env.get(ListInvitationsUseCase)
        clock = await unit_env.get(Clock)
        admin = await seed_admin(unit_env)
        await create.execute(
            CreateInvitationRequest(
                actor_id=admin.user_id, email="old@x.com", role=Role.VIEWER
            )
        )
        clock.advance(days=5)
        await create.execute(
            CreateInvitationRequest(
                actor_id=admin.user_id, email="new@x.com", role=Role.VIEWER
            )
        )
        clock.advance(days=3)

        response = await list_invitations.execute(
            ListInvitationsRequest(actor_id=admin.user_id)
        )

        assert [(i.email, i.status) for i in response.items] == [
            ("new@x.com", InvitationStatus.PENDING),
            ("old@x.com", InvitationStatus.EXPIRED),
        ]
