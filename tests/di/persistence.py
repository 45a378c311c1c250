"""Mock persistence providers for testing."""

from dishka import Scope, provide

from hadik.domain.repository import (
    AllowListRepository,
    AuditLogRepository,
    InvitationRepository,
    JoinRequestRepository,
    ProfileRepository,
    RolePermissionRepository,
    UserIpRepository,
)
from hadik.persistence.repository.inmemory import (
    InMemoryAllowListRepository,
    InMemoryAuditLogRepository,
    InMemoryInvitationRepository,
    InMemoryJoinRequestRepository,
    InMemoryProfileRepository,
    InMemoryRolePermissionRepository,
    InMemoryUserIpRepository,
)
from hadik.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state survives across requests served by one container
    (HTTP tests make several calls). Each test builds its own container, so
    tests stay isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_allow_list_repository(self) -> AllowListRepository:
        """Provide in-memory allow-list repository."""
        return InMemoryAllowListRepository()

    @provide(scope=Scope.APP)
    def get_join_request_repository(self) -> JoinRequestRepository:
        """Provide in-memory join request repository."""
        return InMemoryJoinRequestRepository()

    @provide(scope=Scope.APP)
    def get_invitation_repository(self) -> InvitationRepository:
        """Provide in-memory invitation repository."""
        return InMemoryInvitationRepository()

    @provide(scope=Scope.APP)
    def get_profile_repository(self) -> ProfileRepository:
        """Provide in-memory profile repository."""
        return InMemoryProfileRepository()

    @provide(scope=Scope.APP)
    def get_role_permission_repository(self) -> RolePermissionRepository:
        """Provide in-memory role-permission repository."""
        return InMemoryRolePermissionRepository()

    @provide(scope=Scope.APP)
    def get_audit_log_repository(self) -> AuditLogRepository:
        """Provide in-memory audit log repository."""
        return InMemoryAuditLogRepository()

    @provide(scope=Scope.APP)
    def get_user_ip_repository(self) -> UserIpRepository:
        """Provide in-memory user IP repository."""
        return InMemoryUserIpRepository()
