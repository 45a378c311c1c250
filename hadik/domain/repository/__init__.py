"""Repository interfaces for the admission domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from hadik.domain.repository.allow_list import AllowListRepository
from hadik.domain.repository.audit_log import AuditLogRepository, UserIpRepository
from hadik.domain.repository.invitation import InvitationRepository
from hadik.domain.repository.join_request import JoinRequestRepository
from hadik.domain.repository.profile import ProfileRepository
from hadik.domain.repository.role_permission import RolePermissionRepository

__all__ = [
    "AllowListRepository",
    "AuditLogRepository",
    "InvitationRepository",
    "JoinRequestRepository",
    "ProfileRepository",
    "RolePermissionRepository",
    "UserIpRepository",
]
