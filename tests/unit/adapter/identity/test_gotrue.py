"""Unit tests for the GoTrue Identity Store adapter."""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import httpx
import pytest

from hadik.adapter.error import (
    IdentityErrorKind,
    IdentityStoreError,
    IdentityStoreUnavailableError,
)
from hadik.adapter.identity import GoTrueIdentityStore, classify_error
from hadik.domain.value import Email

USER_ID = uuid4()


def _session_payload(email: str = "alice@x.com") -> dict:
    return {
        "access_token": "access-abc",
        "refresh_token": "refresh-abc",
        "user": {"id": str(USER_ID), "email": email},
    }


@pytest.fixture
def store():
    return GoTrueIdentityStore("https://project.supabase.co/", "anon-key", timeout=3.0)


class TestClassifyError:
    """Tests for classify_error."""

    @pytest.mark.parametrize(
        "payload,kind",
        [
            ({"error_code": "invalid_credentials"}, IdentityErrorKind.INVALID_CREDENTIALS),
            ({"error": "invalid_grant"}, IdentityErrorKind.INVALID_CREDENTIALS),
            ({"error_code": "user_already_exists"}, IdentityErrorKind.ALREADY_EXISTS),
            ({"error_code": "email_exists"}, IdentityErrorKind.ALREADY_EXISTS),
            ({"error_code": "weak_password"}, IdentityErrorKind.OTHER),
            ({}, IdentityErrorKind.OTHER),
        ],
    )
    def test_maps_codes(self, payload, kind):
        assert classify_error(payload)[0] == kind

    def test_message_text_is_not_inspected(self):
        """A message that reads like bad credentials is still OTHER without the code."""
        kind, message = classify_error({"msg": "Invalid login credentials"})

        assert kind == IdentityErrorKind.OTHER
        assert message == "Invalid login credentials"

    def test_default_message(self):
        _, message = classify_error({"error_code": "invalid_credentials"})

        assert message == "Authentication failed"


class TestGoTrueIdentityStore:
    """Tests for GoTrueIdentityStore."""

    @pytest.mark.asyncio
    async def test_authenticate_parses_session(self, store):
        with patch("httpx.AsyncClient") as mock_client:
            request = AsyncMock(return_value=httpx.Response(200, json=_session_payload()))
            mock_client.return_value.__aenter__.return_value.request = request

            session = await store.authenticate(Email("alice@x.com"), "pw")

        assert session.user_id == USER_ID
        assert session.email == Email("alice@x.com")
        assert session.access_token == "access-abc"
        method, url = request.call_args.args
        assert method == "POST"
        assert url == "https://project.supabase.co/auth/v1/token?grant_type=password"
        assert request.call_args.kwargs["headers"]["apikey"] == "anon-key"
        assert request.call_args.kwargs["timeout"] == 3.0

    @pytest.mark.asyncio
    async def test_authenticate_invalid_grant(self, store):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.request = AsyncMock(
                return_value=httpx.Response(
                    400,
                    json={
                        "error": "invalid_grant",
                        "error_description": "Invalid login credentials",
                    },
                )
            )

            with pytest.raises(IdentityStoreError) as exc_info:
                await store.authenticate(Email("alice@x.com"), "wrong")

        assert exc_info.value.kind == IdentityErrorKind.INVALID_CREDENTIALS
        assert exc_info.value.message == "Invalid login credentials"

    @pytest.mark.asyncio
    async def test_server_error_is_unavailable(self, store):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.request = AsyncMock(
                return_value=httpx.Response(502, text="Bad Gateway")
            )

            with pytest.raises(IdentityStoreUnavailableError):
                await store.authenticate(Email("alice@x.com"), "pw")

    @pytest.mark.asyncio
    async def test_transport_error_is_unavailable(self, store):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.request = AsyncMock(
                side_effect=httpx.ConnectError("connection refused")
            )

            with pytest.raises(IdentityStoreUnavailableError):
                await store.authenticate(Email("alice@x.com"), "pw")

    @pytest.mark.asyncio
    async def test_signup_already_registered(self, store):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.request = AsyncMock(
                return_value=httpx.Response(
                    422,
                    json={"error_code": "user_already_exists", "msg": "Already registered"},
                )
            )

            with pytest.raises(IdentityStoreError) as exc_info:
                await store.create_account(Email("alice@x.com"), "pw123456")

        assert exc_info.value.kind == IdentityErrorKind.ALREADY_EXISTS

    @pytest.mark.asyncio
    async def test_signup_without_session_needs_confirmation(self, store):
        with patch("httpx.AsyncClient") as mock_client:
            request = AsyncMock(
                return_value=httpx.Response(200, json=_session_payload()["user"])
            )
            mock_client.return_value.__aenter__.return_value.request = request

            with pytest.raises(IdentityStoreError) as exc_info:
                await store.create_account(
                    Email("alice@x.com"), "pw123456", full_name="Alice", avatar_url=None
                )

        assert exc_info.value.kind == IdentityErrorKind.OTHER
        assert request.call_args.kwargs["json"]["data"] == {"full_name": "Alice"}

    @pytest.mark.asyncio
    async def test_expired_token_has_no_session(self, store):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.request = AsyncMock(
                return_value=httpx.Response(401, json={"msg": "JWT expired"})
            )

            assert await store.get_current_session("stale") is None

    @pytest.mark.asyncio
    async def test_current_session_uses_bearer_token(self, store):
        with patch("httpx.AsyncClient") as mock_client:
            request = AsyncMock(
                return_value=httpx.Response(200, json=_session_payload()["user"])
            )
            mock_client.return_value.__aenter__.return_value.request = request

            session = await store.get_current_session("live-token")

        assert session.access_token == "live-token"
        assert request.call_args.kwargs["headers"]["Authorization"] == "Bearer live-token"

    @pytest.mark.asyncio
    async def test_recover_link_carries_redirect(self, store):
        with patch("httpx.AsyncClient") as mock_client:
            request = AsyncMock(return_value=httpx.Response(200, json={}))
            mock_client.return_value.__aenter__.return_value.request = request

            await store.send_password_establish_link(
                Email("alice@x.com"), "http://localhost:3000/set-password"
            )

        _, url = request.call_args.args
        assert url.endswith(
            "/recover?redirect_to=http%3A%2F%2Flocalhost%3A3000%2Fset-password"
        )
