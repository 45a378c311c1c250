"""Identity Store infrastructure providers."""

from dishka import Scope, provide

from hadik.adapter.identity import GoTrueIdentityStore
from hadik.config import Settings
from hadik.domain.service import IdentityStore
from hadik.util.di.base import ProviderBase
from hadik.util.error import ConfigurationError


class IdentityProvider(ProviderBase):
    """Identity Store component base."""

    __mock_component__ = "identity"


class ProdIdentityProvider(IdentityProvider):
    """Production Identity Store provider (GoTrue REST API)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_store(self, settings: Settings) -> IdentityStore:
        """Provide GoTrue-backed Identity Store.

        Raises:
            ConfigurationError: If the anon key is left at its placeholder in production
        """
        if (
            settings.environment == "production"
            and settings.identity.anon_key == "CHANGE_ME_IN_PRODUCTION"
        ):
            raise ConfigurationError("IDENTITY__ANON_KEY", settings.environment)

        return GoTrueIdentityStore(
            url=settings.identity.url,
            anon_key=settings.identity.anon_key,
            timeout=settings.identity.request_timeout,
        )
