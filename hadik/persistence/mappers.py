"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we map rows by hand
instead of using SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from hadik.domain.model import (
    AllowListEntry,
    AuditLogEntry,
    Invitation,
    JoinRequest,
    Profile,
    RolePermission,
    UserIp,
)
from hadik.domain.value import (
    AuditLogId,
    Email,
    InvitationId,
    InviteToken,
    JoinRequestId,
    JoinRequestStatus,
    Permission,
    Role,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_user_id(value: Any) -> UserId | None:
    return UserId(_uuid(value)) if value is not None else None


def row_to_allow_list_entry(row: Dict[str, Any]) -> AllowListEntry:
    return AllowListEntry(
        email=Email(row["email"]),
        role=Role(row["role"]),
        created_at=row["created_at"],
    )


def allow_list_entry_to_dict(entry: AllowListEntry) -> Dict[str, Any]:
    return {
        "email": entry.email.root,
        "role": entry.role.value,
        "created_at": entry.created_at,
    }


def row_to_join_request(row: Dict[str, Any]) -> JoinRequest:
    """Convert database row to JoinRequest domain model.

    Args:
        row: Database row as dict

    Returns:
        JoinRequest domain model
    """
    return JoinRequest(
        id=JoinRequestId(_uuid(row["id"])),
        email=Email(row["email"]),
        ip=row.get("ip"),
        status=JoinRequestStatus(row["status"]),
        decided_by=_optional_user_id(row.get("decided_by")),
        decided_role=Role(row["decided_role"]) if row.get("decided_role") else None,
        decided_at=row.get("decided_at"),
        created_at=row["created_at"],
    )


def join_request_to_dict(request: JoinRequest) -> Dict[str, Any]:
    return {
        "id": request.id,
        "email": request.email.root,
        "ip": request.ip,
        "status": request.status.value,
        "decided_by": request.decided_by,
        "decided_role": request.decided_role.value if request.decided_role else None,
        "decided_at": request.decided_at,
        "created_at": request.created_at,
    }


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        email=Email(row["email"]),
        role=Role(row["role"]),
        token=InviteToken(row["token"]),
        invited_by=_optional_user_id(row.get("invited_by")),
        accepted_at=row.get("accepted_at"),
        expires_at=row["expires_at"],
        created_at=row["created_at"],
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    return {
        "id": invitation.id,
        "email": invitation.email.root,
        "role": invitation.role.value,
        "token": invitation.token.root,
        "invited_by": invitation.invited_by,
        "accepted_at": invitation.accepted_at,
        "expires_at": invitation.expires_at,
        "created_at": invitation.created_at,
    }


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model.

    Unknown role strings are treated as not provisioned.
    """
    role = row.get("role")
    return Profile(
        id=UserId(_uuid(row["id"])),
        email=Email(row["email"]) if row.get("email") else None,
        full_name=row.get("full_name"),
        avatar_url=row.get("avatar_url"),
        role=Role(role) if role in Role._value2member_map_ else None,
        last_seen_at=row.get("last_seen_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    return {
        "id": profile.id,
        "email": profile.email.root if profile.email else None,
        "full_name": profile.full_name,
        "avatar_url": profile.avatar_url,
        "role": profile.role.value if profile.role else None,
        "last_seen_at": profile.last_seen_at,
        "created_at": profile.created_at,
        "updated_at": profile.updated_at,
    }


def row_to_role_permission(row: Dict[str, Any]) -> RolePermission:
    return RolePermission(
        role=Role(row["role"]),
        permission=Permission(row["permission"]),
        enabled=row["enabled"],
        updated_by=_optional_user_id(row.get("updated_by")),
        updated_at=row["updated_at"],
    )


def role_permission_to_dict(row: RolePermission) -> Dict[str, Any]:
    return {
        "role": row.role.value,
        "permission": row.permission.value,
        "enabled": row.enabled,
        "updated_by": row.updated_by,
        "updated_at": row.updated_at,
    }


def row_to_audit_log_entry(row: Dict[str, Any]) -> AuditLogEntry:
    return AuditLogEntry(
        id=AuditLogId(_uuid(row["id"])),
        user_id=_optional_user_id(row.get("user_id")),
        user_email=row.get("user_email"),
        action=row["action"],
        resource=row.get("resource"),
        details=row.get("details"),
        ip_address=row.get("ip_address"),
        timestamp=row["timestamp"],
    )


def audit_log_entry_to_dict(entry: AuditLogEntry) -> Dict[str, Any]:
    return entry.model_dump()


def user_ip_to_dict(record: UserIp) -> Dict[str, Any]:
    return record.model_dump()
