"""Profile repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from hadik.domain.model.profile import Profile
from hadik.domain.value import Email, Role, UserId


class ProfileRepository(ABC):
    """Repository for member profiles.

    Defines the contract for profile persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Profile | None:
        """Find a profile by account id.

        Args:
            user_id: Identity Store account id

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Profile | None:
        """Find a profile by e-mail.

        Args:
            email: Normalized e-mail

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert_if_absent(self, profile: Profile) -> Profile:
        """Backfill a profile, keeping any existing row untouched.

        Args:
            profile: Profile to insert when no row exists for its id

        Returns:
            The stored profile (the pre-existing one if there was one)
        """
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update).

        Args:
            profile: Profile to save

        Returns:
            The saved profile
        """
        pass

    @abstractmethod
    async def update_role(self, user_id: UserId, role: Role) -> Profile | None:
        """Set the role of a profile.

        Args:
            user_id: Profile id
            role: New role

        Returns:
            The updated profile, or None if it does not exist
        """
        pass

    @abstractmethod
    async def touch_last_seen(self, user_id: UserId, seen_at: datetime) -> None:
        """Record member activity.

        Args:
            user_id: Profile id
            seen_at: Activity time
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Delete a profile.

        Args:
            user_id: Profile id

        Returns:
            True if a row was removed
        """
        pass

    @abstractmethod
    async def find_provisioned(self) -> list[Profile]:
        """List profiles that have a role, ordered by full name.

        Returns:
            Provisioned profiles
        """
        pass
