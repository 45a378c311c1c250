"""PostgreSQL implementation of the profile repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from hadik.domain.model import Profile
from hadik.domain.repository import ProfileRepository
from hadik.domain.value import Email, Role, UserId
from hadik.persistence.mappers import profile_to_dict, row_to_profile
from hadik.persistence.tables import profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[Profile]:
        stmt = select(profiles_table).where(profiles_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def find_by_email(self, email: Email) -> Optional[Profile]:
        stmt = select(profiles_table).where(profiles_table.c.email == email.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def insert_if_absent(self, profile: Profile) -> Profile:
        """INSERT ... ON CONFLICT (id) DO NOTHING, then read back the stored row."""
        stmt = (
            insert(profiles_table)
            .values(**profile_to_dict(profile))
            .on_conflict_do_nothing(index_elements=[profiles_table.c.id])
        )
        await self.session.execute(stmt)
        await self.session.flush()
        stored = await self.find_by_id(profile.id)
        return stored if stored is not None else profile

    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update).

        Args:
            profile: Profile to save

        Returns:
            Saved profile
        """
        values = profile_to_dict(profile)
        stmt = (
            insert(profiles_table)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[profiles_table.c.id],
                set_={k: v for k, v in values.items() if k not in ("id", "created_at")},
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return profile

    async def update_role(self, user_id: UserId, role: Role) -> Optional[Profile]:
        stmt = (
            update(profiles_table)
            .where(profiles_table.c.id == user_id)
            .values(role=role.value)
            .returning(*profiles_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_profile(dict(row)) if row else None

    async def touch_last_seen(self, user_id: UserId, seen_at: datetime) -> None:
        stmt = (
            update(profiles_table)
            .where(profiles_table.c.id == user_id)
            .values(last_seen_at=seen_at)
        )
        async with self.session.begin_nested():
            await self.session.execute(stmt)

    async def delete(self, user_id: UserId) -> bool:
        stmt = delete(profiles_table).where(profiles_table.c.id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def find_provisioned(self) -> list[Profile]:
        stmt = (
            select(profiles_table)
            .where(profiles_table.c.role.is_not(None))
            .order_by(profiles_table.c.full_name.asc().nulls_last())
        )
        result = await self.session.execute(stmt)
        return [row_to_profile(dict(row)) for row in result.mappings()]
