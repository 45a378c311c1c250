"""Authentication and self-service use cases."""

from .get_current_member import GetCurrentMemberUseCase
from .login import LoginUseCase
from .set_password import SetPasswordUseCase
from .touch_last_seen import TouchLastSeenUseCase
from .update_own_profile import UpdateOwnProfileUseCase

__all__ = [
    "GetCurrentMemberUseCase",
    "LoginUseCase",
    "SetPasswordUseCase",
    "TouchLastSeenUseCase",
    "UpdateOwnProfileUseCase",
]
