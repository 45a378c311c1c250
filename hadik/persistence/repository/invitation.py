"""PostgreSQL implementation of the invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from hadik.domain.model import Invitation
from hadik.domain.repository import InvitationRepository
from hadik.domain.value import Email, InvitationId, InviteToken
from hadik.persistence.mappers import invitation_to_dict, row_to_invitation
from hadik.persistence.tables import invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _find_one(self, *criteria) -> Optional[Invitation]:
        stmt = select(invitations_table).where(*criteria)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        return await self._find_one(invitations_table.c.id == invitation_id)

    async def find_by_token(self, token: InviteToken) -> Optional[Invitation]:
        return await self._find_one(invitations_table.c.token == token.root)

    async def find_by_email(self, email: Email) -> Optional[Invitation]:
        return await self._find_one(invitations_table.c.email == email.root)

    async def upsert_by_email(self, invitation: Invitation) -> Invitation:
        """INSERT ... ON CONFLICT (email) DO UPDATE, keeping the existing id."""
        values = invitation_to_dict(invitation)
        stmt = (
            insert(invitations_table)
            .values(**values)
            .on_conflict_do_update(
                constraint="uq_invitations_email",
                set_={
                    "role": values["role"],
                    "token": values["token"],
                    "invited_by": values["invited_by"],
                    "accepted_at": None,
                    "expires_at": values["expires_at"],
                    "created_at": values["created_at"],
                },
            )
            .returning(*invitations_table.c)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return row_to_invitation(dict(result.mappings().one()))

    async def mark_accepted(
        self, token: InviteToken, accepted_at: datetime
    ) -> Optional[Invitation]:
        """Conditional UPDATE guarded on not accepted and not expired."""
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.token == token.root,
                    invitations_table.c.accepted_at.is_(None),
                    invitations_table.c.expires_at >= accepted_at,
                )
            )
            .values(accepted_at=accepted_at)
            .returning(*invitations_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_invitation(dict(row)) if row else None

    async def delete(self, invitation_id: InvitationId) -> bool:
        stmt = delete(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def find_all(self) -> list[Invitation]:
        stmt = select(invitations_table).order_by(invitations_table.c.created_at.desc())
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings()]
