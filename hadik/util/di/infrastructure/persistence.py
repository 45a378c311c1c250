"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

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
from hadik.persistence.database import create_engine, create_session_factory
from hadik.persistence.repository import (
    PostgresAllowListRepository,
    PostgresAuditLogRepository,
    PostgresInvitationRepository,
    PostgresJoinRequestRepository,
    PostgresProfileRepository,
    PostgresRolePermissionRepository,
    PostgresUserIpRepository,
)
from hadik.util.di.base import ProviderBase
from hadik.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        One request is one transaction: committed at the end of the request
        if no exception occurred, rolled back otherwise.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_allow_list_repository(self, session: AsyncSession) -> AllowListRepository:
        """Provide allow-list repository."""
        return PostgresAllowListRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_join_request_repository(
        self, session: AsyncSession
    ) -> JoinRequestRepository:
        """Provide join request repository."""
        return PostgresJoinRequestRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(self, session: AsyncSession) -> InvitationRepository:
        """Provide invitation repository."""
        return PostgresInvitationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_profile_repository(self, session: AsyncSession) -> ProfileRepository:
        """Provide profile repository."""
        return PostgresProfileRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_role_permission_repository(
        self, session: AsyncSession
    ) -> RolePermissionRepository:
        """Provide role-permission repository."""
        return PostgresRolePermissionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_audit_log_repository(self, session: AsyncSession) -> AuditLogRepository:
        """Provide audit log repository."""
        return PostgresAuditLogRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_user_ip_repository(self, session: AsyncSession) -> UserIpRepository:
        """Provide user IP repository."""
        return PostgresUserIpRepository(session)
