"""Unit tests for the login/signup decision."""

from uuid import uuid4

import pytest

from hadik.application.usecase.auth import LoginUseCase
from hadik.application.usecase.auth.login import (
    ACCOUNT_EXISTS_MESSAGE,
    MESSAGES,
    REQUEST_DECLINED_MESSAGE,
    LoginRequest,
)
from hadik.config import Settings
from hadik.domain.repository import (
    AuditLogRepository,
    ProfileRepository,
    UserIpRepository,
)
from hadik.domain.service import (
    AllowListService,
    IdentityStore,
    JoinRequestService,
    LoginAttemptTracker,
)
from hadik.domain.value import (
    Email,
    JoinRequestStatus,
    LoginOutcome,
    Role,
    UserId,
)
from hadik.util.clock import Clock
from tests.conftest import seed_profile
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _request(email: str, password: str = "wrong-password") -> LoginRequest:
    return LoginRequest(email=email, password=password, client_ip="192.0.2.10")


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_member_signs_in(self, unit_env):
        """Valid credentials authenticate and backfill the profile."""
        # Arrange
        use_case = await unit_env.get(LoginUseCase)
        identity_store = await unit_env.get(IdentityStore)
        profiles = await unit_env.get(ProfileRepository)
        ips = await unit_env.get(UserIpRepository)
        user_id = identity_store.add_account("alice@x.com", "secret123")

        # Act
        response = await use_case.execute(
            _request("Alice@X.com", "secret123"), LoginAttemptTracker()
        )

        # Assert
        assert response.outcome == LoginOutcome.AUTHENTICATED
        assert response.session.user_id == user_id
        profile = await profiles.find_by_id(user_id)
        assert profile.role == Role.VIEWER
        assert ips.records[user_id].ip_address == "192.0.2.10"

    @pytest.mark.asyncio
    async def test_every_outcome_has_a_message(self, unit_env):
        assert set(MESSAGES) == set(LoginOutcome)
        assert len(set(MESSAGES.values())) == len(MESSAGES)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password", [("not-an-email", "pw"), ("ok@x.com", ""), ("", "pw")]
    )
    async def test_invalid_input_has_no_side_effects(self, unit_env, email, password):
        use_case = await unit_env.get(LoginUseCase)
        identity_store = await unit_env.get(IdentityStore)
        tracker = LoginAttemptTracker()

        response = await use_case.execute(
            LoginRequest(email=email, password=password), tracker
        )

        assert response.outcome == LoginOutcome.INVALID_INPUT
        assert identity_store.authenticate_calls == 0
        assert tracker.is_idle((await unit_env.get(Clock)).now())

    @pytest.mark.asyncio
    async def test_unknown_email_submits_join_request(self, unit_env):
        use_case = await unit_env.get(LoginUseCase)
        join_requests = await unit_env.get(JoinRequestService)
        audit = await unit_env.get(AuditLogRepository)

        response = await use_case.execute(_request("new@x.com"), LoginAttemptTracker())

        assert response.outcome == LoginOutcome.JOIN_REQUEST_SUBMITTED
        [pending] = await join_requests.list_pending()
        assert response.join_request_id == str(pending.id)
        assert pending.ip == "192.0.2.10"
        assert [e.action for e in audit.entries] == ["JOIN_REQUEST_SUBMITTED"]
        assert audit.entries[0].user_email == "new@x.com"

    @pytest.mark.asyncio
    async def test_repeated_attempts_keep_one_pending_request(self, unit_env):
        """However often an unknown e-mail retries, one request stays pending."""
        use_case = await unit_env.get(LoginUseCase)
        join_requests = await unit_env.get(JoinRequestService)

        outcomes = [
            (await use_case.execute(_request("new@x.com"), LoginAttemptTracker())).outcome
            for _ in range(4)
        ]

        assert outcomes == [
            LoginOutcome.JOIN_REQUEST_SUBMITTED,
            LoginOutcome.ALREADY_PENDING,
            LoginOutcome.ALREADY_PENDING,
            LoginOutcome.ALREADY_PENDING,
        ]
        assert len(await join_requests.list_pending()) == 1

    @pytest.mark.asyncio
    async def test_allow_listed_email_creates_account(self, unit_env):
        use_case = await unit_env.get(LoginUseCase)
        allow_list = await unit_env.get(AllowListService)
        profiles = await unit_env.get(ProfileRepository)
        join_requests = await unit_env.get(JoinRequestService)
        await allow_list.grant(Email("granted@x.com"), Role.RESEARCHER)

        response = await use_case.execute(
            _request("granted@x.com", "chosen-password"), LoginAttemptTracker()
        )

        assert response.outcome == LoginOutcome.ACCOUNT_CREATED
        profile = await profiles.find_by_id(response.session.user_id)
        assert profile.role == Role.RESEARCHER
        assert await join_requests.list_pending() == []

    @pytest.mark.asyncio
    async def test_allow_listed_account_without_password_gets_link(self, unit_env):
        """An account made by a token flow is sent a password link."""
        use_case = await unit_env.get(LoginUseCase)
        allow_list = await unit_env.get(AllowListService)
        identity_store = await unit_env.get(IdentityStore)
        settings = await unit_env.get(Settings)
        identity_store.add_account("linked@x.com")
        await allow_list.grant(Email("linked@x.com"), Role.ANNOTATOR)

        response = await use_case.execute(_request("linked@x.com"), LoginAttemptTracker())

        assert response.outcome == LoginOutcome.ALREADY_ACCEPTED_AWAITING_PASSWORD
        assert identity_store.password_links == [
            ("linked@x.com", settings.set_password_url)
        ]

    @pytest.mark.asyncio
    async def test_existing_account_is_not_turned_into_a_request(self, unit_env):
        """A profile without an allow-list entry is denied, not re-requested."""
        use_case = await unit_env.get(LoginUseCase)
        profiles = await unit_env.get(ProfileRepository)
        join_requests = await unit_env.get(JoinRequestService)
        await seed_profile(profiles, UserId(uuid4()), "old@x.com", Role.VIEWER)

        response = await use_case.execute(_request("old@x.com"), LoginAttemptTracker())

        assert response.outcome == LoginOutcome.DENIED
        assert response.message == ACCOUNT_EXISTS_MESSAGE
        assert await join_requests.list_pending() == []

    @pytest.mark.asyncio
    async def test_denied_request_is_not_reopened(self, unit_env):
        use_case = await unit_env.get(LoginUseCase)
        join_requests = await unit_env.get(JoinRequestService)
        await use_case.execute(_request("no@x.com"), LoginAttemptTracker())
        [pending] = await join_requests.list_pending()
        await join_requests.decide(
            pending.id,
            JoinRequestStatus.DENIED,
            decided_by=UserId(uuid4()),
        )

        response = await use_case.execute(_request("no@x.com"), LoginAttemptTracker())

        assert response.outcome == LoginOutcome.DENIED
        assert response.message == REQUEST_DECLINED_MESSAGE
        assert await join_requests.list_pending() == []

    @pytest.mark.asyncio
    async def test_accepted_request_without_allow_list_awaits_password(self, unit_env):
        use_case = await unit_env.get(LoginUseCase)
        join_requests = await unit_env.get(JoinRequestService)
        submitted = await join_requests.submit(Email("wait@x.com"), None)
        await join_requests.decide(
            submitted.id,
            JoinRequestStatus.ACCEPTED,
            decided_by=UserId(uuid4()),
            decided_role=Role.VIEWER,
        )

        response = await use_case.execute(_request("wait@x.com"), LoginAttemptTracker())

        assert response.outcome == LoginOutcome.ALREADY_ACCEPTED_AWAITING_PASSWORD

    @pytest.mark.asyncio
    async def test_store_outage_is_an_error_not_a_denial(self, unit_env):
        use_case = await unit_env.get(LoginUseCase)
        identity_store = await unit_env.get(IdentityStore)
        join_requests = await unit_env.get(JoinRequestService)
        identity_store.unavailable = True

        response = await use_case.execute(_request("new@x.com"), LoginAttemptTracker())

        assert response.outcome == LoginOutcome.ERROR
        assert await join_requests.list_pending() == []

    @pytest.mark.asyncio
    async def test_audit_outage_does_not_block_request(self, unit_env):
        use_case = await unit_env.get(LoginUseCase)
        audit = await unit_env.get(AuditLogRepository)
        audit.fail = True

        response = await use_case.execute(_request("new@x.com"), LoginAttemptTracker())

        assert response.outcome == LoginOutcome.JOIN_REQUEST_SUBMITTED


class TestLoginRateLimit:
    """Tests for throttling inside the login decision."""

    @pytest.mark.asyncio
    async def test_sixth_attempt_within_window_is_limited(self, unit_env):
        """Five failures lock out; the lockout ends 60s after the earliest."""
        # Arrange
        use_case = await unit_env.get(LoginUseCase)
        identity_store = await unit_env.get(IdentityStore)
        clock = await unit_env.get(Clock)
        tracker = LoginAttemptTracker(window_seconds=60, max_failures=5)

        # Act: failures at T0, T0+10 ... T0+40
        for _ in range(5):
            await use_case.execute(_request("new@x.com"), tracker)
            clock.advance(seconds=10)
        limited = await use_case.execute(_request("new@x.com"), tracker)

        # Assert
        assert limited.outcome == LoginOutcome.RATE_LIMITED
        assert limited.retry_after_seconds == 10
        assert "10 seconds" in limited.message
        assert identity_store.authenticate_calls == 5

        clock.advance(seconds=10)
        allowed = await use_case.execute(_request("new@x.com"), tracker)
        assert allowed.outcome == LoginOutcome.ALREADY_PENDING
        assert identity_store.authenticate_calls == 6

    @pytest.mark.asyncio
    async def test_success_resets_failures(self, unit_env):
        use_case = await unit_env.get(LoginUseCase)
        identity_store = await unit_env.get(IdentityStore)
        clock = await unit_env.get(Clock)
        identity_store.add_account("member@x.com", "right-password")
        tracker = LoginAttemptTracker(window_seconds=60, max_failures=5)

        for _ in range(4):
            await use_case.execute(_request("member@x.com"), tracker)
        ok = await use_case.execute(_request("member@x.com", "right-password"), tracker)

        assert ok.outcome == LoginOutcome.AUTHENTICATED
        assert tracker.failure_count(clock.now()) == 0
