"""In-memory allow-list repository for testing."""

from typing import Optional

from hadik.domain.model.allow_list import AllowListEntry
from hadik.domain.repository.allow_list import AllowListRepository
from hadik.domain.value import Email


class InMemoryAllowListRepository(AllowListRepository):
    """In-memory implementation of AllowListRepository for testing."""

    def __init__(self) -> None:
        self._entries: dict[str, AllowListEntry] = {}

    async def find_by_email(self, email: Email) -> Optional[AllowListEntry]:
        return self._entries.get(email.root)

    async def upsert(self, entry: AllowListEntry) -> AllowListEntry:
        existing = self._entries.get(entry.email.root)
        if existing is not None:
            entry = existing.model_copy(update={"role": entry.role})
        self._entries[entry.email.root] = entry
        return entry

    async def delete(self, email: Email) -> bool:
        return self._entries.pop(email.root, None) is not None
