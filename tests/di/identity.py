"""Mock Identity Store providers for testing."""

from dishka import Scope, provide

from hadik.adapter.identity import MockIdentityStore
from hadik.domain.service import IdentityStore
from hadik.util.di.infrastructure.identity import IdentityProvider


class MockIdentityProvider(IdentityProvider):
    """Mock Identity Store provider using the in-memory store."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_identity_store(self) -> IdentityStore:
        """Provide in-memory Identity Store."""
        return MockIdentityStore()
