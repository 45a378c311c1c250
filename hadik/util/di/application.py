"""Application layer DI providers."""

from dishka import Scope, provide

from hadik.application.usecase.audit import (
    ArchiveAuditLogsUseCase,
    ListAuditLogsUseCase,
)
from hadik.application.usecase.auth import (
    GetCurrentMemberUseCase,
    LoginUseCase,
    SetPasswordUseCase,
    TouchLastSeenUseCase,
    UpdateOwnProfileUseCase,
)
from hadik.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    CreateInvitationUseCase,
    ListInvitationsUseCase,
    ValidateInvitationUseCase,
)
from hadik.application.usecase.join_request import (
    AcceptJoinRequestUseCase,
    DenyJoinRequestUseCase,
    ListPendingJoinRequestsUseCase,
)
from hadik.application.usecase.member import (
    ChangeRoleUseCase,
    DeleteMemberUseCase,
    ListMembersUseCase,
)
from hadik.application.usecase.permission import (
    GetPermissionMatrixUseCase,
    UpdateRolePermissionsUseCase,
)
from hadik.config import Settings
from hadik.domain.service import (
    AllowListService,
    AuditService,
    IdentityStore,
    InvitationNotifier,
    InvitationService,
    JoinRequestService,
    PermissionService,
    ProfileService,
)
from hadik.util.clock import Clock
from hadik.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Auth use cases
    @provide
    def get_login_use_case(
        self,
        identity_store: IdentityStore,
        allow_list_service: AllowListService,
        join_request_service: JoinRequestService,
        profile_service: ProfileService,
        audit_service: AuditService,
        clock: Clock,
        settings: Settings,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            identity_store=identity_store,
            allow_list_service=allow_list_service,
            join_request_service=join_request_service,
            profile_service=profile_service,
            audit_service=audit_service,
            clock=clock,
            settings=settings,
        )

    @provide
    def get_set_password_use_case(
        self,
        identity_store: IdentityStore,
        profile_service: ProfileService,
        audit_service: AuditService,
        settings: Settings,
    ) -> SetPasswordUseCase:
        """Provide set password use case."""
        return SetPasswordUseCase(
            identity_store=identity_store,
            profile_service=profile_service,
            audit_service=audit_service,
            settings=settings,
        )

    @provide
    def get_current_member_use_case(
        self,
        profile_service: ProfileService,
        permission_service: PermissionService,
        settings: Settings,
    ) -> GetCurrentMemberUseCase:
        """Provide get current member use case."""
        return GetCurrentMemberUseCase(
            profile_service=profile_service,
            permission_service=permission_service,
            settings=settings,
        )

    @provide
    def get_update_own_profile_use_case(
        self, profile_service: ProfileService
    ) -> UpdateOwnProfileUseCase:
        """Provide self profile edit use case."""
        return UpdateOwnProfileUseCase(profile_service=profile_service)

    @provide
    def get_touch_last_seen_use_case(
        self, profile_service: ProfileService
    ) -> TouchLastSeenUseCase:
        """Provide activity heartbeat use case."""
        return TouchLastSeenUseCase(profile_service=profile_service)

    # Join request use cases
    @provide
    def get_accept_join_request_use_case(
        self,
        profile_service: ProfileService,
        join_request_service: JoinRequestService,
        allow_list_service: AllowListService,
        audit_service: AuditService,
    ) -> AcceptJoinRequestUseCase:
        """Provide accept join request use case."""
        return AcceptJoinRequestUseCase(
            profile_service=profile_service,
            join_request_service=join_request_service,
            allow_list_service=allow_list_service,
            audit_service=audit_service,
        )

    @provide
    def get_deny_join_request_use_case(
        self,
        profile_service: ProfileService,
        join_request_service: JoinRequestService,
        audit_service: AuditService,
    ) -> DenyJoinRequestUseCase:
        """Provide deny join request use case."""
        return DenyJoinRequestUseCase(
            profile_service=profile_service,
            join_request_service=join_request_service,
            audit_service=audit_service,
        )

    @provide
    def get_list_pending_join_requests_use_case(
        self, profile_service: ProfileService, join_request_service: JoinRequestService
    ) -> ListPendingJoinRequestsUseCase:
        """Provide list pending join requests use case."""
        return ListPendingJoinRequestsUseCase(
            profile_service=profile_service, join_request_service=join_request_service
        )

    # Invitation use cases
    @provide
    def get_create_invitation_use_case(
        self,
        profile_service: ProfileService,
        allow_list_service: AllowListService,
        invitation_service: InvitationService,
        notifier: InvitationNotifier,
        audit_service: AuditService,
        settings: Settings,
    ) -> CreateInvitationUseCase:
        """Provide invite member use case."""
        return CreateInvitationUseCase(
            profile_service=profile_service,
            allow_list_service=allow_list_service,
            invitation_service=invitation_service,
            notifier=notifier,
            audit_service=audit_service,
            settings=settings,
        )

    @provide
    def get_cancel_invitation_use_case(
        self,
        profile_service: ProfileService,
        allow_list_service: AllowListService,
        invitation_service: InvitationService,
        audit_service: AuditService,
    ) -> CancelInvitationUseCase:
        """Provide cancel invitation use case."""
        return CancelInvitationUseCase(
            profile_service=profile_service,
            allow_list_service=allow_list_service,
            invitation_service=invitation_service,
            audit_service=audit_service,
        )

    @provide
    def get_validate_invitation_use_case(
        self, invitation_service: InvitationService, identity_store: IdentityStore
    ) -> ValidateInvitationUseCase:
        """Provide validate invitation use case."""
        return ValidateInvitationUseCase(
            invitation_service=invitation_service, identity_store=identity_store
        )

    @provide
    def get_accept_invitation_use_case(
        self,
        invitation_service: InvitationService,
        profile_service: ProfileService,
        identity_store: IdentityStore,
        audit_service: AuditService,
        settings: Settings,
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(
            invitation_service=invitation_service,
            profile_service=profile_service,
            identity_store=identity_store,
            audit_service=audit_service,
            settings=settings,
        )

    @provide
    def get_list_invitations_use_case(
        self,
        profile_service: ProfileService,
        invitation_service: InvitationService,
        clock: Clock,
    ) -> ListInvitationsUseCase:
        """Provide list invitations use case."""
        return ListInvitationsUseCase(
            profile_service=profile_service,
            invitation_service=invitation_service,
            clock=clock,
        )

    # Member use cases
    @provide
    def get_change_role_use_case(
        self, profile_service: ProfileService, audit_service: AuditService
    ) -> ChangeRoleUseCase:
        """Provide change role use case."""
        return ChangeRoleUseCase(
            profile_service=profile_service, audit_service=audit_service
        )

    @provide
    def get_delete_member_use_case(
        self,
        profile_service: ProfileService,
        allow_list_service: AllowListService,
        audit_service: AuditService,
    ) -> DeleteMemberUseCase:
        """Provide delete member use case."""
        return DeleteMemberUseCase(
            profile_service=profile_service,
            allow_list_service=allow_list_service,
            audit_service=audit_service,
        )

    @provide
    def get_list_members_use_case(
        self, profile_service: ProfileService, settings: Settings
    ) -> ListMembersUseCase:
        """Provide list members use case."""
        return ListMembersUseCase(profile_service=profile_service, settings=settings)

    # Permission use cases
    @provide
    def get_permission_matrix_use_case(
        self, profile_service: ProfileService, permission_service: PermissionService
    ) -> GetPermissionMatrixUseCase:
        """Provide permission matrix use case."""
        return GetPermissionMatrixUseCase(
            profile_service=profile_service, permission_service=permission_service
        )

    @provide
    def get_update_role_permissions_use_case(
        self,
        profile_service: ProfileService,
        permission_service: PermissionService,
        audit_service: AuditService,
    ) -> UpdateRolePermissionsUseCase:
        """Provide update role permissions use case."""
        return UpdateRolePermissionsUseCase(
            profile_service=profile_service,
            permission_service=permission_service,
            audit_service=audit_service,
        )

    # Audit use cases
    @provide
    def get_list_audit_logs_use_case(
        self, profile_service: ProfileService, audit_service: AuditService
    ) -> ListAuditLogsUseCase:
        """Provide list audit logs use case."""
        return ListAuditLogsUseCase(
            profile_service=profile_service, audit_service=audit_service
        )

    @provide
    def get_archive_audit_logs_use_case(
        self,
        profile_service: ProfileService,
        audit_service: AuditService,
        settings: Settings,
    ) -> ArchiveAuditLogsUseCase:
        """Provide archive audit logs use case."""
        return ArchiveAuditLogsUseCase(
            profile_service=profile_service,
            audit_service=audit_service,
            settings=settings,
        )
