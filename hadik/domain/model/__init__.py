"""Domain model entities for workspace admission."""

from hadik.domain.model.allow_list import AllowListEntry
from hadik.domain.model.audit_log import AuditLogEntry, UserIp
from hadik.domain.model.invitation import Invitation
from hadik.domain.model.join_request import JoinRequest
from hadik.domain.model.profile import Profile
from hadik.domain.model.role_permission import RolePermission

__all__ = [
    "AllowListEntry",
    "AuditLogEntry",
    "Invitation",
    "JoinRequest",
    "Profile",
    "RolePermission",
    "UserIp",
]
