"""Domain value objects for workspace admission."""

from hadik.domain.value.identifiers import (
    AuditLogId,
    InvitationId,
    JoinRequestId,
    UserId,
)
from hadik.domain.value.types import (
    AVATARS,
    PERMISSION_DESCRIPTIONS,
    AuditAction,
    Email,
    IdentitySession,
    InvitationStatus,
    InvitationStep,
    InviteToken,
    JoinRequestStatus,
    LoginOutcome,
    Permission,
    Role,
)

__all__ = [
    # Identifiers
    "UserId",
    "JoinRequestId",
    "InvitationId",
    "AuditLogId",
    # Types
    "Role",
    "Permission",
    "PERMISSION_DESCRIPTIONS",
    "JoinRequestStatus",
    "InvitationStatus",
    "LoginOutcome",
    "InvitationStep",
    "AuditAction",
    "AVATARS",
    "Email",
    "IdentitySession",
    "InviteToken",
]
