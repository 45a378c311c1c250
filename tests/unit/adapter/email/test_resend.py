"""Unit tests for the Resend invitation notifier."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from hadik.adapter.email import ResendInvitationNotifier, render_invitation
from hadik.adapter.error import EmailDeliveryError
from hadik.domain.value import Email, InviteToken, Role


@pytest.fixture
def notifier():
    return ResendInvitationNotifier(
        "https://api.resend.com/emails", "re_test", "noreply@hadik.dev"
    )


class TestRenderInvitation:
    def test_link_and_role_are_escaped(self):
        html = render_invitation('https://x/accept?token=a&b="c"', Role.ANNOTATOR)

        assert "ANNOTATOR" in html
        assert 'href="https://x/accept?token=a&amp;b=&quot;c&quot;"' in html


class TestResendInvitationNotifier:
    """Tests for ResendInvitationNotifier."""

    @pytest.mark.asyncio
    async def test_sends_invitation(self, notifier):
        with patch("httpx.AsyncClient") as mock_client:
            post = AsyncMock(return_value=httpx.Response(200, json={"id": "msg_1"}))
            mock_client.return_value.__aenter__.return_value.post = post

            await notifier.send_invitation(
                Email("bob@x.com"),
                InviteToken("tok123"),
                Role.RESEARCHER,
                "http://localhost:3000/accept-invitation",
            )

        body = post.call_args.kwargs["json"]
        assert body["to"] == ["bob@x.com"]
        assert body["from"] == "noreply@hadik.dev"
        assert "http://localhost:3000/accept-invitation?token=tok123" in body["html"]
        assert post.call_args.kwargs["headers"] == {"Authorization": "Bearer re_test"}

    @pytest.mark.asyncio
    async def test_rejection_raises(self, notifier):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=httpx.Response(403, json={"message": "domain not verified"})
            )

            with pytest.raises(EmailDeliveryError):
                await notifier.send_invitation(
                    Email("bob@x.com"), InviteToken("tok123"), Role.VIEWER, "http://x"
                )

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, notifier):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                side_effect=httpx.ReadTimeout("timed out")
            )

            with pytest.raises(EmailDeliveryError):
                await notifier.send_invitation(
                    Email("bob@x.com"), InviteToken("tok123"), Role.VIEWER, "http://x"
                )
