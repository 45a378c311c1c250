"""In-memory repository implementations for testing."""

from .allow_list import InMemoryAllowListRepository
from .audit_log import InMemoryAuditLogRepository, InMemoryUserIpRepository
from .invitation import InMemoryInvitationRepository
from .join_request import InMemoryJoinRequestRepository
from .profile import InMemoryProfileRepository
from .role_permission import InMemoryRolePermissionRepository

__all__ = [
    "InMemoryAllowListRepository",
    "InMemoryAuditLogRepository",
    "InMemoryInvitationRepository",
    "InMemoryJoinRequestRepository",
    "InMemoryProfileRepository",
    "InMemoryRolePermissionRepository",
    "InMemoryUserIpRepository",
]
