"""Transactional e-mail adapter."""

from .resend import MockInvitationNotifier, ResendInvitationNotifier, render_invitation

__all__ = ["MockInvitationNotifier", "ResendInvitationNotifier", "render_invitation"]
