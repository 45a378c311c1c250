"""PostgreSQL implementation of the join request repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hadik.domain.error import ConflictError
from hadik.domain.model import JoinRequest
from hadik.domain.repository import JoinRequestRepository
from hadik.domain.value import Email, JoinRequestId, JoinRequestStatus, Role, UserId
from hadik.persistence.mappers import join_request_to_dict, row_to_join_request
from hadik.persistence.tables import join_requests_table


class PostgresJoinRequestRepository(JoinRequestRepository):
    """PostgreSQL implementation of JoinRequestRepository.

    The single pending slot per e-mail is enforced by a partial unique index.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, request_id: JoinRequestId) -> Optional[JoinRequest]:
        stmt = select(join_requests_table).where(join_requests_table.c.id == request_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_join_request(dict(row)) if row else None

    async def find_latest_by_email(self, email: Email) -> Optional[JoinRequest]:
        stmt = (
            select(join_requests_table)
            .where(join_requests_table.c.email == email.root)
            .order_by(join_requests_table.c.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_join_request(dict(row)) if row else None

    async def insert(self, request: JoinRequest) -> JoinRequest:
        """Insert a pending request.

        Runs in a savepoint so a unique violation leaves the surrounding
        transaction usable.

        Raises:
            ConflictError: If a pending request already exists for the e-mail
        """
        stmt = insert(join_requests_table).values(**join_request_to_dict(request))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConflictError("Pending join request", request.email.root) from e
        return request

    async def update_status(
        self,
        request_id: JoinRequestId,
        status: JoinRequestStatus,
        decided_by: UserId,
        decided_at: datetime,
        decided_role: Role | None = None,
    ) -> Optional[JoinRequest]:
        """Conditional UPDATE ... WHERE status = 'pending' RETURNING *."""
        stmt = (
            update(join_requests_table)
            .where(
                and_(
                    join_requests_table.c.id == request_id,
                    join_requests_table.c.status == JoinRequestStatus.PENDING.value,
                )
            )
            .values(
                status=status.value,
                decided_by=decided_by,
                decided_role=decided_role.value if decided_role else None,
                decided_at=decided_at,
            )
            .returning(*join_requests_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_join_request(dict(row)) if row else None

    async def find_pending(self) -> list[JoinRequest]:
        stmt = (
            select(join_requests_table)
            .where(join_requests_table.c.status == JoinRequestStatus.PENDING.value)
            .order_by(join_requests_table.c.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_join_request(dict(row)) for row in result.mappings()]
