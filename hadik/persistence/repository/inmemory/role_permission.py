"""In-memory role-permission repository for testing."""

from hadik.domain.model.role_permission import RolePermission
from hadik.domain.repository.role_permission import RolePermissionRepository
from hadik.domain.value import Permission, Role


class InMemoryRolePermissionRepository(RolePermissionRepository):
    """In-memory implementation of RolePermissionRepository for testing."""

    def __init__(self) -> None:
        self._rows: dict[tuple[Role, Permission], RolePermission] = {}

    async def find_all(self) -> list[RolePermission]:
        return sorted(
            self._rows.values(), key=lambda r: (r.role.value, r.permission.value)
        )

    async def upsert_rows(self, rows: list[RolePermission]) -> None:
        for row in rows:
            self._rows[(row.role, row.permission)] = row
