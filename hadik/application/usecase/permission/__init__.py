"""Role-permission use cases."""

from .get_permission_matrix import GetPermissionMatrixUseCase
from .update_role_permissions import UpdateRolePermissionsUseCase

__all__ = ["GetPermissionMatrixUseCase", "UpdateRolePermissionsUseCase"]
