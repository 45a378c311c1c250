"""Invitation use cases."""

from .accept_invitation import AcceptInvitationUseCase
from .cancel_invitation import CancelInvitationUseCase
from .create_invitation import CreateInvitationUseCase
from .list_invitations import ListInvitationsUseCase
from .validate_invitation import ValidateInvitationUseCase

__all__ = [
    "AcceptInvitationUseCase",
    "CancelInvitationUseCase",
    "CreateInvitationUseCase",
    "ListInvitationsUseCase",
    "ValidateInvitationUseCase",
]
