"""PostgreSQL implementation of the allow-list repository."""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from hadik.domain.model import AllowListEntry
from hadik.domain.repository import AllowListRepository
from hadik.domain.value import Email
from hadik.persistence.mappers import allow_list_entry_to_dict, row_to_allow_list_entry
from hadik.persistence.tables import allowed_users_table


class PostgresAllowListRepository(AllowListRepository):
    """PostgreSQL implementation of AllowListRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_email(self, email: Email) -> Optional[AllowListEntry]:
        stmt = select(allowed_users_table).where(
            allowed_users_table.c.email == email.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_allow_list_entry(dict(row)) if row else None

    async def upsert(self, entry: AllowListEntry) -> AllowListEntry:
        """Insert the entry or update the role, keeping the original created_at."""
        values = allow_list_entry_to_dict(entry)
        stmt = (
            insert(allowed_users_table)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[allowed_users_table.c.email],
                set_={"role": values["role"]},
            )
            .returning(*allowed_users_table.c)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return row_to_allow_list_entry(dict(result.mappings().one()))

    async def delete(self, email: Email) -> bool:
        stmt = delete(allowed_users_table).where(
            allowed_users_table.c.email == email.root
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
