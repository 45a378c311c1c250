"""Audit log and user IP repository interfaces."""

from abc import ABC, abstractmethod
from datetime import datetime

from hadik.domain.model.audit_log import AuditLogEntry, UserIp
from hadik.domain.value import UserId


class AuditLogRepository(ABC):
    """Append-only audit log."""

    @abstractmethod
    async def append(self, entry: AuditLogEntry) -> None:
        """Append an entry.

        Args:
            entry: Entry to append
        """
        pass

    @abstractmethod
    async def find_recent(self, limit: int = 50) -> list[AuditLogEntry]:
        """List the newest entries.

        Args:
            limit: Maximum number of entries

        Returns:
            Entries, newest first
        """
        pass

    @abstractmethod
    async def find_before(self, cutoff: datetime) -> list[AuditLogEntry]:
        """List entries older than a cutoff.

        Args:
            cutoff: Exclusive upper bound on timestamp

        Returns:
            Entries, newest first
        """
        pass

    @abstractmethod
    async def delete_before(self, cutoff: datetime) -> int:
        """Delete entries older than a cutoff.

        Args:
            cutoff: Exclusive upper bound on timestamp

        Returns:
            Number of deleted entries
        """
        pass


class UserIpRepository(ABC):
    """Last known client address per member."""

    @abstractmethod
    async def upsert(self, record: UserIp) -> None:
        """Create or replace the record for the user.

        Args:
            record: Address record
        """
        pass

    @abstractmethod
    async def delete_for_user(self, user_id: UserId) -> None:
        """Remove the record for a user, if any.

        Args:
            user_id: Member id
        """
        pass
