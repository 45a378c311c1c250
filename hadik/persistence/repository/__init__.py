"""PostgreSQL repository implementations."""

from hadik.persistence.repository.allow_list import PostgresAllowListRepository
from hadik.persistence.repository.audit_log import (
    PostgresAuditLogRepository,
    PostgresUserIpRepository,
)
from hadik.persistence.repository.invitation import PostgresInvitationRepository
from hadik.persistence.repository.join_request import PostgresJoinRequestRepository
from hadik.persistence.repository.profile import PostgresProfileRepository
from hadik.persistence.repository.role_permission import (
    PostgresRolePermissionRepository,
)

__all__ = [
    "PostgresAllowListRepository",
    "PostgresAuditLogRepository",
    "PostgresInvitationRepository",
    "PostgresJoinRequestRepository",
    "PostgresProfileRepository",
    "PostgresRolePermissionRepository",
    "PostgresUserIpRepository",
]
