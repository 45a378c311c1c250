"""In-memory profile repository for testing."""

from datetime import datetime
from typing import Optional

from hadik.domain.model.profile import Profile
from hadik.domain.repository.profile import ProfileRepository
from hadik.domain.value import Email, Role, UserId


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[UserId, Profile] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[Profile]:
        return self._profiles.get(user_id)

    async def find_by_email(self, email: Email) -> Optional[Profile]:
        for profile in self._profiles.values():
            if profile.email == email:
                return profile
        return None

    async def insert_if_absent(self, profile: Profile) -> Profile:
        return self._profiles.setdefault(profile.id, profile)

    async def save(self, profile: Profile) -> Profile:
        self._profiles[profile.id] = profile
        return profile

    async def update_role(self, user_id: UserId, role: Role) -> Optional[Profile]:
        profile = self._profiles.get(user_id)
        if profile is None:
            return None
        updated = profile.model_copy(update={"role": role})
        self._profiles[user_id] = updated
        return updated

    async def touch_last_seen(self, user_id: UserId, seen_at: datetime) -> None:
        profile = self._profiles.get(user_id)
        if profile is not None:
            self._profiles[user_id] = profile.model_copy(update={"last_seen_at": seen_at})

    async def delete(self, user_id: UserId) -> bool:
        return self._profiles.pop(user_id, None) is not None

    async def find_provisioned(self) -> list[Profile]:
        provisioned = [p for p in self._profiles.values() if p.role is not None]
        return sorted(provisioned, key=lambda p: (p.full_name is None, p.full_name or ""))
