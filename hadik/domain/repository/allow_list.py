"""Allow-list repository interface."""

from abc import ABC, abstractmethod

from hadik.domain.model.allow_list import AllowListEntry
from hadik.domain.value import Email


class AllowListRepository(ABC):
    """Repository for allow-list entries, keyed by case-folded e-mail."""

    @abstractmethod
    async def find_by_email(self, email: Email) -> AllowListEntry | None:
        """Find the entry for an e-mail.

        Read at every sign-in attempt that fails the credential check.

        Args:
            email: Normalized e-mail

        Returns:
            The entry if the e-mail is allow-listed, None otherwise
        """
        pass

    @abstractmethod
    async def upsert(self, entry: AllowListEntry) -> AllowListEntry:
        """Create the entry or replace the role of an existing one.

        Args:
            entry: Entry to write

        Returns:
            The stored entry
        """
        pass

    @abstractmethod
    async def delete(self, email: Email) -> bool:
        """Remove the entry for an e-mail.

        Args:
            email: Normalized e-mail

        Returns:
            True if an entry was removed, False if there was none
        """
        pass
