"""Member administration use cases."""

from .change_role import ChangeRoleUseCase
from .delete_member import DeleteMemberUseCase
from .list_members import ListMembersUseCase

__all__ = ["ChangeRoleUseCase", "DeleteMemberUseCase", "ListMembersUseCase"]
