"""Identity Store port.

The Identity Store owns accounts, credentials and sessions. This module only
describes the calls the admission logic makes; adapters translate the store's
own error vocabulary into IdentityStoreError kinds.
"""

from hadik.domain.value import Email, IdentitySession


class IdentityStore:
    """Generic Identity Store interface.

    Failures are raised, not returned:
    - IdentityStoreError(kind, message) when the store answered with a rejection
    - IdentityStoreUnavailableError when it could not be reached
    """

    async def authenticate(self, email: Email, password: str) -> IdentitySession:
        """Sign in with e-mail and password.

        Args:
            email: Normalized e-mail
            password: Password as typed

        Returns:
            Active session
        """
        raise NotImplementedError

    async def create_account(
        self,
        email: Email,
        password: str,
        full_name: str | None = None,
        avatar_url: str | None = None,
    ) -> IdentitySession:
        """Create an account and sign it in.

        Args:
            email: Normalized e-mail
            password: Initial password
            full_name: Optional display name stored as account metadata
            avatar_url: Optional avatar stored as account metadata

        Returns:
            Active session for the new account
        """
        raise NotImplementedError

    async def set_password(self, access_token: str, password: str) -> None:
        """Set the password of the session's account.

        Args:
            access_token: Session access token
            password: New password
        """
        raise NotImplementedError

    async def get_current_session(self, access_token: str) -> IdentitySession | None:
        """Resolve an access token to its session.

        Args:
            access_token: Bearer token presented by the caller

        Returns:
            The session, or None if the token is unknown or expired
        """
        raise NotImplementedError

    async def send_password_establish_link(self, email: Email, redirect_to: str) -> None:
        """E-mail a link that lets the account holder choose a password.

        Args:
            email: Account e-mail
            redirect_to: Page the link lands on
        """
        raise NotImplementedError
