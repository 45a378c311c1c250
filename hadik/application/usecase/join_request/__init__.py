"""Join request use cases."""

from .accept_join_request import AcceptJoinRequestUseCase
from .deny_join_request import DenyJoinRequestUseCase
from .list_pending_join_requests import ListPendingJoinRequestsUseCase

__all__ = [
    "AcceptJoinRequestUseCase",
    "DenyJoinRequestUseCase",
    "ListPendingJoinRequestsUseCase",
]
