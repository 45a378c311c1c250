"""In-memory audit log and user IP repositories for testing."""

from datetime import datetime

from hadik.domain.model.audit_log import AuditLogEntry, UserIp
from hadik.domain.repository.audit_log import AuditLogRepository, UserIpRepository
from hadik.domain.value import UserId


class InMemoryAuditLogRepository(AuditLogRepository):
    """In-memory implementation of AuditLogRepository for testing.

    Set `fail` to make appends raise, as a broken audit store would.
    """

    def __init__(self) -> None:
        self.entries: list[AuditLogEntry] = []
        self.fail = False

    async def append(self, entry: AuditLogEntry) -> None:
        if self.fail:
            raise RuntimeError("Audit store unavailable")
        self.entries.append(entry)

    async def find_recent(self, limit: int = 50) -> list[AuditLogEntry]:
        return sorted(self.entries, key=lambda e: e.timestamp, reverse=True)[:limit]

    async def find_before(self, cutoff: datetime) -> list[AuditLogEntry]:
        old = [e for e in self.entries if e.timestamp < cutoff]
        return sorted(old, key=lambda e: e.timestamp, reverse=True)

    async def delete_before(self, cutoff: datetime) -> int:
        before = len(self.entries)
        self.entries = [e for e in self.entries if e.timestamp >= cutoff]
        return before - len(self.entries)


class InMemoryUserIpRepository(UserIpRepository):
    """In-memory implementation of UserIpRepository for testing."""

    def __init__(self) -> None:
        self.records: dict[UserId, UserIp] = {}

    async def upsert(self, record: UserIp) -> None:
        self.records[record.user_id] = record

    async def delete_for_user(self, user_id: UserId) -> None:
        self.records.pop(user_id, None)
