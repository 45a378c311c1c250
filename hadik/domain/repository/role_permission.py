"""Role-permission repository interface."""

from abc import ABC, abstractmethod

from hadik.domain.model.role_permission import RolePermission


class RolePermissionRepository(ABC):
    """Repository for stored role-permission rows, unique on (role, permission)."""

    @abstractmethod
    async def find_all(self) -> list[RolePermission]:
        """List every stored row.

        Returns:
            Stored rows ordered by role then permission
        """
        pass

    @abstractmethod
    async def upsert_rows(self, rows: list[RolePermission]) -> None:
        """Write rows, replacing any stored row with the same (role, permission).

        Args:
            rows: Rows to write
        """
        pass
