"""Invitation notification port."""

from hadik.domain.value import Email, InviteToken, Role


class InvitationNotifier:
    """Out-of-band delivery of invitation tokens."""

    async def send_invitation(
        self, email: Email, token: InviteToken, role: Role, accept_url: str
    ) -> None:
        """Deliver the invitation link.

        Args:
            email: Invitee
            token: Invitation token appended to the accept URL
            role: Role the invitee will receive
            accept_url: Page that completes the invitation

        Raises:
            EmailDeliveryError: If the message could not be handed off
        """
        raise NotImplementedError
