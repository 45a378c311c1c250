"""Domain layer DI providers."""

from datetime import timedelta

from dishka import Scope, provide

from hadik.config import Settings
from hadik.domain.repository import (
    AllowListRepository,
    AuditLogRepository,
    InvitationRepository,
    JoinRequestRepository,
    ProfileRepository,
    RolePermissionRepository,
    UserIpRepository,
)
from hadik.domain.service import (
    AllowListService,
    AuditService,
    InvitationService,
    JoinRequestService,
    PermissionService,
    ProfileService,
)
from hadik.util.clock import Clock
from hadik.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_allow_list_service(
        self, allow_list_repository: AllowListRepository, clock: Clock
    ) -> AllowListService:
        """Provide allow-list domain service."""
        return AllowListService(allow_list_repository=allow_list_repository, clock=clock)

    @provide
    def get_join_request_service(
        self, join_request_repository: JoinRequestRepository, clock: Clock
    ) -> JoinRequestService:
        """Provide join request domain service."""
        return JoinRequestService(
            join_request_repository=join_request_repository, clock=clock
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        clock: Clock,
        settings: Settings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            clock=clock,
            ttl=timedelta(days=settings.admission.invitation_ttl_days),
        )

    @provide
    def get_profile_service(
        self,
        profile_repository: ProfileRepository,
        allow_list_repository: AllowListRepository,
        user_ip_repository: UserIpRepository,
        clock: Clock,
    ) -> ProfileService:
        """Provide profile domain service."""
        return ProfileService(
            profile_repository=profile_repository,
            allow_list_repository=allow_list_repository,
            user_ip_repository=user_ip_repository,
            clock=clock,
        )

    @provide
    def get_permission_service(
        self, role_permission_repository: RolePermissionRepository, clock: Clock
    ) -> PermissionService:
        """Provide role-permission domain service."""
        return PermissionService(
            role_permission_repository=role_permission_repository, clock=clock
        )

    @provide
    def get_audit_service(
        self, audit_log_repository: AuditLogRepository, clock: Clock
    ) -> AuditService:
        """Provide audit log domain service."""
        return AuditService(audit_log_repository=audit_log_repository, clock=clock)
