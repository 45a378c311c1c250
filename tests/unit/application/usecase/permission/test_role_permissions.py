"""Unit tests for the role-permission matrix use cases."""

import pytest

from hadik.application.usecase.auth import GetCurrentMemberUseCase
from hadik.application.usecase.auth.get_current_member import GetCurrentMemberRequest
from hadik.application.usecase.permission import (
    GetPermissionMatrixUseCase,
    UpdateRolePermissionsUseCase,
)
from hadik.application.usecase.permission.get_permission_matrix import (
    GetPermissionMatrixRequest,
)
from hadik.application.usecase.permission.update_role_permissions import (
    UpdateRolePermissionsRequest,
)
from hadik.domain.error import ValidationError
from hadik.domain.repository import AuditLogRepository, RolePermissionRepository
from hadik.domain.service import AllowListService, IdentityStore
from hadik.domain.value import Email, Permission, Role
from tests.conftest import seed_admin
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetPermissionMatrix:
    @pytest.mark.asyncio
    async def test_defaults_and_admin_row(self, unit_env):
        use_case = await unit_env.get(GetPermissionMatrixUseCase)
        admin = await seed_admin(unit_env)

        response = await use_case.execute(GetPermissionMatrixRequest(actor_id=admin.user_id))

        rows = {row.role: row for row in response.roles}
        assert set(rows) == set(Role)
        assert rows[Role.ADMIN].editable is False
        assert all(cell.enabled for cell in rows[Role.ADMIN].permissions)
        assert [c.permission for c in rows[Role.ANNOTATOR].permissions if c.enabled] == [
            Permission.DATASET_LABELING
        ]
        assert not any(cell.enabled for cell in rows[Role.VIEWER].permissions)
        assert all(cell.description for cell in rows[Role.VIEWER].permissions)


class TestUpdateRolePermissions:
    """Tests for UpdateRolePermissionsUseCase."""

    @pytest.mark.asyncio
    async def test_update_writes_every_key(self, unit_env):
        use_case = await unit_env.get(UpdateRolePermissionsUseCase)
        repository = await unit_env.get(RolePermissionRepository)
        audit = await unit_env.get(AuditLogRepository)
        admin = await seed_admin(unit_env)

        response = await use_case.execute(
            UpdateRolePermissionsRequest(
                actor_id=admin.user_id,
                role=Role.VIEWER,
                enabled=[Permission.DEPLOYMENT, Permission.API_KEYS],
            )
        )

        assert response.enabled == [Permission.API_KEYS, Permission.DEPLOYMENT]
        rows = [r for r in await repository.find_all() if r.role == Role.VIEWER]
        assert len(rows) == len(Permission)
        assert {r.permission for r in rows if r.enabled} == {
            Permission.API_KEYS,
            Permission.DEPLOYMENT,
        }
        assert audit.entries[-1].action == "PERMISSIONS_SAVED"

    @pytest.mark.asyncio
    async def test_members_see_updated_permissions(self, unit_env):
        update = await unit_env.get(UpdateRolePermissionsUseCase)
        current = await unit_env.get(GetCurrentMemberUseCase)
        identity_store = await unit_env.get(IdentityStore)
        allow_list = await unit_env.get(AllowListService)
        admin = await seed_admin(unit_env)
        await allow_list.grant(Email("res@x.com"), Role.RESEARCHER)
        identity_store.add_account("res@x.com", "password")
        session = identity_store.open_session("res@x.com")

        await update.execute(
            UpdateRolePermissionsRequest(
                actor_id=admin.user_id,
                role=Role.RESEARCHER,
                enabled=[Permission.TRAINING_ACCESS],
            )
        )
        response = await current.execute(GetCurrentMemberRequest(session=session))

        assert response.permissions == [Permission.TRAINING_ACCESS]

    @pytest.mark.asyncio
    async def test_admin_role_is_rejected(self, unit_env):
        use_case = await unit_env.get(UpdateRolePermissionsUseCase)
        repository = await unit_env.get(RolePermissionRepository)
        admin = await seed_admin(unit_env)

        with pytest.raises(ValidationError):
            await use_case.execute(
                UpdateRolePermissionsRequest(
                    actor_id=admin.user_id, role=Role.ADMIN, enabled=[]
                )
            )

        assert await repository.find_all() == []
