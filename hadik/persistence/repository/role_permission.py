"""PostgreSQL implementation of the role-permission repository."""

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from hadik.domain.model import RolePermission
from hadik.domain.repository import RolePermissionRepository
from hadik.persistence.mappers import role_permission_to_dict, row_to_role_permission
from hadik.persistence.tables import role_permissions_table


class PostgresRolePermissionRepository(RolePermissionRepository):
    """PostgreSQL implementation of RolePermissionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_all(self) -> list[RolePermission]:
        """Stored rows; rows with unknown role or permission keys are skipped."""
        stmt = select(role_permissions_table).order_by(
            role_permissions_table.c.role, role_permissions_table.c.permission
        )
        result = await self.session.execute(stmt)
        rows = []
        for row in result.mappings():
            try:
                rows.append(row_to_role_permission(dict(row)))
            except ValueError:
                continue
        return rows

    async def upsert_rows(self, rows: list[RolePermission]) -> None:
        if not rows:
            return
        stmt = insert(role_permissions_table).values(
            [role_permission_to_dict(r) for r in rows]
        )
        stmt = stmt.on_conflict_do_update(
            constraint="uq_role_permission",
            set_={
                "enabled": stmt.excluded.enabled,
                "updated_by": stmt.excluded.updated_by,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
