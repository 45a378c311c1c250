"""Allow-list domain service."""

import logfire

from hadik.domain.model.allow_list import AllowListEntry
from hadik.domain.repository import AllowListRepository
from hadik.domain.value import Email, Role
from hadik.util.clock import Clock

from .base import Service


class AllowListService(Service):
    """Domain service for the admission gate."""

    def __init__(self, allow_list_repository: AllowListRepository, clock: Clock) -> None:
        self.allow_list_repository = allow_list_repository
        self.clock = clock

    async def get(self, email: Email) -> AllowListEntry | None:
        """Look up the allow-list entry for an e-mail."""
        return await self.allow_list_repository.find_by_email(email)

    async def grant(self, email: Email, role: Role) -> AllowListEntry:
        """Allow-list an e-mail with a role, replacing any previous role.

        Args:
            email: Normalized e-mail
            role: Role to grant at account creation

        Returns:
            The stored entry
        """
        with logfire.span("allow_list_service.grant", email=email.root, role=role.value):
            entry = await self.allow_list_repository.upsert(
                AllowListEntry(email=email, role=role, created_at=self.clock.now())
            )
            logfire.info("E-mail allow-listed", email=email.root, role=role.value)
            return entry

    async def revoke(self, email: Email) -> bool:
        """Remove an e-mail from the allow-list.

        Args:
            email: Normalized e-mail

        Returns:
            True if an entry was removed
        """
        with logfire.span("allow_list_service.revoke", email=email.root):
            removed = await self.allow_list_repository.delete(email)
            logfire.info("Allow-list entry revoked", email=email.root, removed=removed)
            return removed
