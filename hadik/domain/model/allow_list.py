"""Allow-list entry.

The allow-list is the admission gate: an e-mail with no entry can never
create an account through the normal sign-in path.
"""

from datetime import datetime

from pydantic import Field

from hadik.domain.model.common import DomainModel
from hadik.domain.value import Email, Role
from hadik.util.clock import utc_now


class AllowListEntry(DomainModel):
    """Mapping of a case-folded e-mail to the role it will be granted."""

    email: Email
    role: Role
    created_at: datetime = Field(default_factory=utc_now)
