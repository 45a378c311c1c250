"""Invitation e-mail infrastructure providers."""

from dishka import Scope, provide

from hadik.adapter.email import ResendInvitationNotifier
from hadik.config import Settings
from hadik.domain.service import InvitationNotifier
from hadik.util.di.base import ProviderBase
from hadik.util.error import ConfigurationError


class EmailProvider(ProviderBase):
    """E-mail component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production e-mail provider (Resend)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_invitation_notifier(self, settings: Settings) -> InvitationNotifier:
        """Provide Resend invitation notifier.

        Raises:
            ConfigurationError: If the API key is left at its placeholder in production
        """
        if (
            settings.environment == "production"
            and settings.email.api_key == "CHANGE_ME_IN_PRODUCTION"
        ):
            raise ConfigurationError("EMAIL__API_KEY", settings.environment)

        return ResendInvitationNotifier(
            api_url=settings.email.api_url,
            api_key=settings.email.api_key,
            from_address=settings.email.from_address,
        )
