"""Strongly typed identifiers for workspace admission entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Account id issued by the Identity Store; profiles share it
UserId = NewType("UserId", UUID)
JoinRequestId = NewType("JoinRequestId", UUID)
InvitationId = NewType("InvitationId", UUID)
AuditLogId = NewType("AuditLogId", UUID)
