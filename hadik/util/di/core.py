"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from hadik.config import Settings
from hadik.domain.service import LoginThrottle
from hadik.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_login_throttle(self, settings: Settings) -> LoginThrottle:
        """Provide the process-wide registry of per-client login trackers."""
        return LoginThrottle(
            window_seconds=settings.admission.rate_limit_window_seconds,
            max_failures=settings.admission.rate_limit_max_failures,
        )
