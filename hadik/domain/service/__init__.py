"""Domain services."""

from .allow_list_service import AllowListService
from .audit_service import AuditArchive, AuditService
from .base import Service
from .identity_store import IdentityStore
from .invitation_service import InvitationService, generate_token
from .join_request_service import JoinRequestService
from .login_throttle import LoginAttemptTracker, LoginThrottle
from .notifier import InvitationNotifier
from .permission_service import (
    ALL_PERMISSIONS,
    DEFAULT_PERMISSIONS,
    PermissionService,
    resolve_permissions,
)
from .profile_service import ProfileService

__all__ = [
    "ALL_PERMISSIONS",
    "DEFAULT_PERMISSIONS",
    "AllowListService",
    "AuditArchive",
    "AuditService",
    "IdentityStore",
    "InvitationNotifier",
    "InvitationService",
    "JoinRequestService",
    "LoginAttemptTracker",
    "LoginThrottle",
    "PermissionService",
    "ProfileService",
    "Service",
    "generate_token",
    "resolve_permissions",
]
