"""PostgreSQL implementations of the audit log and user IP repositories."""

from datetime import datetime

from sqlalchemy import delete, insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from hadik.domain.model import AuditLogEntry, UserIp
from hadik.domain.repository import AuditLogRepository, UserIpRepository
from hadik.domain.value import UserId
from hadik.persistence.mappers import (
    audit_log_entry_to_dict,
    row_to_audit_log_entry,
    user_ip_to_dict,
)
from hadik.persistence.tables import audit_logs_table, user_ips_table


class PostgresAuditLogRepository(AuditLogRepository):
    """PostgreSQL implementation of AuditLogRepository.

    Appends run in a savepoint so a failed audit insert does not abort the
    request transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def append(self, entry: AuditLogEntry) -> None:
        stmt = insert(audit_logs_table).values(**audit_log_entry_to_dict(entry))
        async with self.session.begin_nested():
            await self.session.execute(stmt)

    async def find_recent(self, limit: int = 50) -> list[AuditLogEntry]:
        stmt = (
            select(audit_logs_table)
            .order_by(audit_logs_table.c.timestamp.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_audit_log_entry(dict(row)) for row in result.mappings()]

    async def find_before(self, cutoff: datetime) -> list[AuditLogEntry]:
        stmt = (
            select(audit_logs_table)
            .where(audit_logs_table.c.timestamp < cutoff)
            .order_by(audit_logs_table.c.timestamp.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_audit_log_entry(dict(row)) for row in result.mappings()]

    async def delete_before(self, cutoff: datetime) -> int:
        stmt = delete(audit_logs_table).where(audit_logs_table.c.timestamp < cutoff)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount


class PostgresUserIpRepository(UserIpRepository):
    """PostgreSQL implementation of UserIpRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def upsert(self, record: UserIp) -> None:
        """Upsert on user_id inside a savepoint; address capture is best-effort."""
        values = user_ip_to_dict(record)
        stmt = (
            pg_insert(user_ips_table)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[user_ips_table.c.user_id],
                set_={"ip_address": values["ip_address"], "last_seen": values["last_seen"]},
            )
        )
        async with self.session.begin_nested():
            await self.session.execute(stmt)

    async def delete_for_user(self, user_id: UserId) -> None:
        stmt = delete(user_ips_table).where(user_ips_table.c.user_id == user_id)
        await self.session.execute(stmt)
        await self.session.flush()
