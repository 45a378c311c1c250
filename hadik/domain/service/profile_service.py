"""Profile domain service."""

from datetime import timedelta

import logfire

from hadik.domain.error import (
    BusinessRuleViolationError,
    NotAuthorizedError,
    NotFoundError,
)
from hadik.domain.model.audit_log import UserIp
from hadik.domain.model.profile import Profile
from hadik.domain.repository import (
    AllowListRepository,
    ProfileRepository,
    UserIpRepository,
)
from hadik.domain.value import Email, Role, UserId
from hadik.util.clock import Clock

from .base import Service


class ProfileService(Service):
    """Domain service for member profiles."""

    def __init__(
        self,
        profile_repository: ProfileRepository,
        allow_list_repository: AllowListRepository,
        user_ip_repository: UserIpRepository,
        clock: Clock,
    ) -> None:
        """Initialize profile service.

        Args:
            profile_repository: Profile repository
            allow_list_repository: Allow-list repository, source of backfill roles
            user_ip_repository: Per-member address records
            clock: Time source
        """
        self.profile_repository = profile_repository
        self.allow_list_repository = allow_list_repository
        self.user_ip_repository = user_ip_repository
        self.clock = clock

    async def get_by_id(self, user_id: UserId) -> Profile | None:
        return await self.profile_repository.find_by_id(user_id)

    async def get_by_email(self, email: Email) -> Profile | None:
        return await self.profile_repository.find_by_email(email)

    async def require_admin(self, actor_id: UserId, action: str) -> Profile:
        """Load the acting profile and check it holds the ADMIN role.

        Args:
            actor_id: Acting account id
            action: Operation name, used in the error

        Returns:
            The admin's profile

        Raises:
            NotAuthorizedError: If the actor has no profile or is not ADMIN
        """
        actor = await self.profile_repository.find_by_id(actor_id)
        if actor is None or not actor.is_admin:
            logfire.warn(
                "Admin operation refused", action=action, actor_id=str(actor_id)
            )
            raise NotAuthorizedError(action, str(actor_id))
        return actor

    async def ensure_profile(
        self, user_id: UserId, email: Email, fallback_role: Role
    ) -> tuple[Profile, bool]:
        """Create the profile for an account if it does not exist yet.

        Idempotent. The role comes from the allow-list entry for the e-mail,
        else fallback_role. Never grants ADMIN by default.

        Args:
            user_id: Identity Store account id
            email: Account e-mail
            fallback_role: Role for accounts with no allow-list entry

        Returns:
            The profile and whether this call created it

        Raises:
            BusinessRuleViolationError: If fallback_role is ADMIN
        """
        if fallback_role == Role.ADMIN:
            raise BusinessRuleViolationError("Profiles are never backfilled as ADMIN")

        existing = await self.profile_repository.find_by_id(user_id)
        if existing is not None:
            return existing, False

        with logfire.span(
            "profile_service.ensure_profile", user_id=str(user_id), email=email.root
        ):
            entry = await self.allow_list_repository.find_by_email(email)
            role = entry.role if entry else fallback_role
            now = self.clock.now()
            candidate = Profile(
                id=user_id,
                email=email,
                role=role,
                created_at=now,
                updated_at=now,
            )
            stored = await self.profile_repository.insert_if_absent(candidate)
            created = stored == candidate
            if created:
                logfire.info(
                    "Profile backfilled",
                    user_id=str(user_id),
                    role=role.value,
                    from_allow_list=entry is not None,
                )
            return stored, created

    async def apply_role(self, user_id: UserId, email: Email, role: Role) -> Profile:
        """Give an account a role, creating its profile if needed.

        Used by invitation acceptance, where the invitation's role wins over
        any backfilled one.

        Raises:
            BusinessRuleViolationError: If the account is an ADMIN
        """
        with logfire.span(
            "profile_service.apply_role", user_id=str(user_id), role=role.value
        ):
            existing = await self.profile_repository.find_by_id(user_id)
            if existing is not None and existing.is_admin:
                raise BusinessRuleViolationError("Admin roles cannot be changed")
            now = self.clock.now()
            await self.profile_repository.insert_if_absent(
                Profile(id=user_id, email=email, role=role, created_at=now, updated_at=now)
            )
            updated = await self.profile_repository.update_role(user_id, role)
            if updated is None:
                raise NotFoundError("Profile", str(user_id))
            return updated

    async def change_role(self, user_id: UserId, role: Role) -> tuple[Profile, Role | None]:
        """Change a member's role.

        Args:
            user_id: Target member
            role: New role

        Returns:
            The updated profile and its previous role

        Raises:
            NotFoundError: If the member does not exist
            BusinessRuleViolationError: If the member is an ADMIN
        """
        with logfire.span(
            "profile_service.change_role", user_id=str(user_id), role=role.value
        ):
            profile = await self.profile_repository.find_by_id(user_id)
            if profile is None:
                raise NotFoundError("Profile", str(user_id))
            if profile.is_admin:
                raise BusinessRuleViolationError("Admin roles cannot be changed")

            updated = await self.profile_repository.update_role(user_id, role)
            if updated is None:
                raise NotFoundError("Profile", str(user_id))
            logfire.info(
                "Role changed",
                user_id=str(user_id),
                old_role=profile.role.value if profile.role else None,
                new_role=role.value,
            )
            return updated, profile.role

    async def remove(self, user_id: UserId) -> bool:
        """Delete a member's profile and address record.

        Returns:
            True if a profile was removed

        Raises:
            BusinessRuleViolationError: If the member is an ADMIN
        """
        with logfire.span("profile_service.remove", user_id=str(user_id)):
            profile = await self.profile_repository.find_by_id(user_id)
            if profile is not None and profile.is_admin:
                raise BusinessRuleViolationError("Admins cannot be deleted")

            removed = await self.profile_repository.delete(user_id)
            await self.user_ip_repository.delete_for_user(user_id)
            logfire.info("Profile removed", user_id=str(user_id), removed=removed)
            return removed

    async def update_display(
        self,
        user_id: UserId,
        full_name: str | None = None,
        avatar_url: str | None = None,
    ) -> Profile:
        """Update the display attributes a member controls.

        Raises:
            NotFoundError: If the profile does not exist
        """
        profile = await self.profile_repository.find_by_id(user_id)
        if profile is None:
            raise NotFoundError("Profile", str(user_id))

        changes: dict = {"updated_at": self.clock.now()}
        if full_name is not None:
            changes["full_name"] = full_name.strip() or None
        if avatar_url is not None:
            changes["avatar_url"] = avatar_url
        return await self.profile_repository.save(profile.model_copy(update=changes))

    async def touch_last_seen(self, user_id: UserId) -> None:
        await self.profile_repository.touch_last_seen(user_id, self.clock.now())

    async def record_ip(self, user_id: UserId, ip_address: str | None) -> None:
        """Remember the member's latest address. Failures are only logged."""
        if not ip_address:
            return
        try:
            await self.user_ip_repository.upsert(
                UserIp(user_id=user_id, ip_address=ip_address, last_seen=self.clock.now())
            )
        except Exception as e:
            logfire.warn("Failed to record user IP", user_id=str(user_id), error=str(e))

    async def list_members(self, online_window: timedelta) -> list[tuple[Profile, bool]]:
        """Provisioned members ordered by name, each with an online flag."""
        now = self.clock.now()
        profiles = await self.profile_repository.find_provisioned()
        return [(p, p.is_online(now, online_window)) for p in profiles]
