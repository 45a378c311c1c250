"""Invitation e-mail delivery through the Resend HTTP API."""

from html import escape

import httpx
import logfire

from hadik.adapter.error import EmailDeliveryError
from hadik.domain.service.notifier import InvitationNotifier
from hadik.domain.value import Email, InviteToken, Role


def render_invitation(link: str, role: Role) -> str:
    """HTML body of the invitation e-mail."""
    return (
        "<h2>You have been invited to join the workspace</h2>"
        f"<p>You will join as <strong>{escape(role.value)}</strong>.</p>"
        f'<p><a href="{escape(link, quote=True)}">Accept your invitation</a></p>'
        "<p>This link expires in 7 days.</p>"
    )


class ResendInvitationNotifier(InvitationNotifier):
    """Sends invitation links with Resend."""

    def __init__(
        self, api_url: str, api_key: str, from_address: str, timeout: float = 15.0
    ) -> None:
        """Initialize Resend client.

        Args:
            api_url: Resend e-mails endpoint
            api_key: Resend API key
            from_address: Sender address
            timeout: Request timeout in seconds
        """
        self.api_url = api_url
        self.api_key = api_key
        self.from_address = from_address
        self.timeout = timeout

    async def send_invitation(
        self, email: Email, token: InviteToken, role: Role, accept_url: str
    ) -> None:
        link = f"{accept_url}?token={token.root}"
        body = {
            "from": self.from_address,
            "to": [email.root],
            "subject": "You're invited to join the workspace",
            "html": render_invitation(link, role),
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.api_url,
                    json=body,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Resend HTTP error", error=str(e))
            raise EmailDeliveryError(f"HTTP error sending invitation: {e}")

        if response.status_code >= 400:
            logfire.error(
                "Resend rejected invitation e-mail",
                status_code=response.status_code,
                error=response.text,
            )
            raise EmailDeliveryError(
                f"Invitation e-mail rejected: {response.status_code}"
            )

        logfire.info("Invitation e-mail sent", email=email.root, token=token.redacted())


class MockInvitationNotifier(InvitationNotifier):
    """Records invitations instead of sending them. Set `fail` to simulate an outage."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, Role, str]] = []
        self.fail = False

    async def send_invitation(
        self, email: Email, token: InviteToken, role: Role, accept_url: str
    ) -> None:
        if self.fail:
            raise EmailDeliveryError("Mock e-mail delivery failure")
        self.sent.append((email.root, token.root, role, accept_url))
