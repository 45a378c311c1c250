"""Unit tests for password establishment."""

import pytest

from hadik.application.usecase.auth import SetPasswordUseCase
from hadik.application.usecase.auth.set_password import SetPasswordRequest
from hadik.domain.error import ValidationError
from hadik.domain.repository import AuditLogRepository, ProfileRepository
from hadik.domain.service import IdentityStore
from hadik.domain.value import Email, Role
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestSetPasswordUseCase:
    """Tests for SetPasswordUseCase."""

    @pytest.mark.asyncio
    async def test_sets_password_for_token_account(self, unit_env):
        """An account created without a password can sign in after setting one."""
        # Arrange
        use_case = await unit_env.get(SetPasswordUseCase)
        identity_store = await unit_env.get(IdentityStore)
        profiles = await unit_env.get(ProfileRepository)
        audit = await unit_env.get(AuditLogRepository)
        identity_store.add_account("token@x.com")
        session = identity_store.open_session("token@x.com")

        # Act
        response = await use_case.execute(
            SetPasswordRequest(
                session=session, password="s3cret!", confirmation="s3cret!"
            )
        )

        # Assert
        assert response.message
        signed_in = await identity_store.authenticate(Email("token@x.com"), "s3cret!")
        assert signed_in.user_id == session.user_id
        profile = await profiles.find_by_id(session.user_id)
        assert profile.role == Role.VIEWER
        assert [e.action for e in audit.entries] == ["PASSWORD_SET"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "password,confirmation",
        [("short", "short"), ("long-enough", "long-enougH")],
    )
    async def test_rejects_bad_password(self, unit_env, password, confirmation):
        use_case = await unit_env.get(SetPasswordUseCase)
        identity_store = await unit_env.get(IdentityStore)
        identity_store.add_account("token@x.com")
        session = identity_store.open_session("token@x.com")

        with pytest.raises(ValidationError):
            await use_case.execute(
                SetPasswordRequest(
                    session=session, password=password, confirmation=confirmation
                )
            )

        assert identity_store.accounts["token@x.com"][1] is None
