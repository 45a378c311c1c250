"""Role-permission resolution."""

import logfire

from hadik.domain.error import BusinessRuleViolationError
from hadik.domain.model.role_permission import RolePermission
from hadik.domain.repository import RolePermissionRepository
from hadik.domain.value import Permission, Role, UserId
from hadik.util.clock import Clock

from .base import Service

ALL_PERMISSIONS: frozenset[Permission] = frozenset(Permission)

# Baseline for permission keys with no stored row
DEFAULT_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.RESEARCHER: frozenset(
        {
            Permission.MANAGE_MODELS,
            Permission.TRAINING_ACCESS,
            Permission.DATASET_LABELING,
        }
    ),
    Role.ANNOTATOR: frozenset({Permission.DATASET_LABELING}),
    Role.VIEWER: frozenset(),
}


def resolve_permissions(
    role: Role, rows: list[RolePermission]
) -> frozenset[Permission]:
    """Total function from (role, permission) to enabled.

    ADMIN always gets every permission; stored ADMIN rows are ignored.
    Other roles take the stored row per key, else the documented default.
    """
    if role == Role.ADMIN:
        return ALL_PERMISSIONS

    stored = {row.permission: row.enabled for row in rows if row.role == role}
    defaults = DEFAULT_PERMISSIONS.get(role, frozenset())
    return frozenset(
        permission
        for permission in Permission
        if stored.get(permission, permission in defaults)
    )


class PermissionService(Service):
    """Domain service for the role-permission matrix."""

    def __init__(
        self, role_permission_repository: RolePermissionRepository, clock: Clock
    ) -> None:
        self.role_permission_repository = role_permission_repository
        self.clock = clock

    async def resolve(self, role: Role) -> frozenset[Permission]:
        """Enabled permissions for a role."""
        if role == Role.ADMIN:
            return ALL_PERMISSIONS
        rows = await self.role_permission_repository.find_all()
        return resolve_permissions(role, rows)

    async def matrix(self) -> dict[Role, frozenset[Permission]]:
        """Enabled permissions for every role, from a single read."""
        rows = await self.role_permission_repository.find_all()
        return {role: resolve_permissions(role, rows) for role in Role}

    async def update(
        self, role: Role, enabled: set[Permission], updated_by: UserId
    ) -> frozenset[Permission]:
        """Replace a role's permissions, writing one row per permission key.

        Args:
            role: Role to edit
            enabled: Permissions to enable; every other key is disabled
            updated_by: Editing admin

        Returns:
            The role's resolved permissions after the write

        Raises:
            BusinessRuleViolationError: If role is ADMIN
        """
        if role == Role.ADMIN:
            raise BusinessRuleViolationError("ADMIN permissions are fixed")

        with logfire.span(
            "permission_service.update", role=role.value, updated_by=str(updated_by)
        ):
            now = self.clock.now()
            rows = [
                RolePermission(
                    role=role,
                    permission=permission,
                    enabled=permission in enabled,
                    updated_by=updated_by,
                    updated_at=now,
                )
                for permission in Permission
            ]
            await self.role_permission_repository.upsert_rows(rows)
            logfire.info(
                "Role permissions saved",
                role=role.value,
                enabled=sorted(p.value for p in enabled),
            )
            return frozenset(enabled)
