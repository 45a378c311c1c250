"""Profile aggregate.

One record per Identity Store account, carrying the workspace role and the
display attributes the member controls.
"""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import Field

from hadik.domain.model.common import DomainModel
from hadik.domain.value import Email, Role, UserId
from hadik.util.clock import utc_now


class Profile(DomainModel):
    """Workspace member profile.

    A profile whose role is None is not yet provisioned and is excluded from
    member listings.
    """

    id: UserId  # Same id as the Identity Store account
    email: Optional[Email] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Optional[Role] = None
    last_seen_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_provisioned(self) -> bool:
        return self.role is not None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def is_online(self, now: datetime, window: timedelta) -> bool:
        if self.last_seen_at is None:
            return False
        return now - self.last_seen_at < window
