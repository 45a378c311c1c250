"""Role-permission matrix row."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from hadik.domain.model.common import DomainModel
from hadik.domain.value import Permission, Role, UserId
from hadik.util.clock import utc_now


class RolePermission(DomainModel):
    """Stored (role, permission) switch, unique on the pair."""

    role: Role
    permission: Permission
    enabled: bool
    updated_by: Optional[UserId] = None
    updated_at: datetime = Field(default_factory=utc_now)
