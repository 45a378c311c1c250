"""Identity Store adapter for the GoTrue (Supabase Auth) REST API."""

from urllib.parse import urlencode
from uuid import UUID, uuid4

import httpx
import logfire

from hadik.adapter.error import (
    IdentityErrorKind,
    IdentityStoreError,
    IdentityStoreUnavailableError,
)
from hadik.domain.service.identity_store import IdentityStore
from hadik.domain.value import Email, IdentitySession, UserId

# GoTrue error codes, matched exactly; message text is never inspected
INVALID_CREDENTIALS_CODES = frozenset({"invalid_credentials", "invalid_grant"})
ALREADY_EXISTS_CODES = frozenset({"user_already_exists", "email_exists"})


def classify_error(payload: dict) -> tuple[IdentityErrorKind, str]:
    """Map a GoTrue error body to an error kind and a user-facing message.

    Newer servers send `error_code`; older ones send `error` with an
    OAuth-style code (`invalid_grant` for a failed password grant).
    """
    code = payload.get("error_code") or payload.get("error") or ""
    message = (
        payload.get("msg")
        or payload.get("message")
        or payload.get("error_description")
        or "Authentication failed"
    )
    if code in INVALID_CREDENTIALS_CODES:
        return IdentityErrorKind.INVALID_CREDENTIALS, message
    if code in ALREADY_EXISTS_CODES:
        return IdentityErrorKind.ALREADY_EXISTS, message
    return IdentityErrorKind.OTHER, message


class GoTrueIdentityStore(IdentityStore):
    """Identity Store backed by a GoTrue server."""

    def __init__(self, url: str, anon_key: str, timeout: float = 15.0) -> None:
        """Initialize GoTrue client.

        Args:
            url: Project URL; the auth API lives under /auth/v1
            anon_key: Public API key
            timeout: Per-request timeout in seconds
        """
        self.auth_url = f"{url.rstrip('/')}/auth/v1"
        self.anon_key = anon_key
        self.timeout = timeout

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {access_token or self.anon_key}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        json: dict | None = None,
        access_token: str | None = None,
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient() as client:
                return await client.request(
                    method,
                    f"{self.auth_url}{path}",
                    json=json,
                    headers=self._headers(access_token),
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("GoTrue HTTP error", path=path.split("?")[0], error=str(e))
            raise IdentityStoreUnavailableError(f"HTTP error calling Identity Store: {e}")

    def _raise_for_error(self, response: httpx.Response, operation: str) -> None:
        if response.status_code < 400:
            return
        if response.status_code >= 500:
            logfire.error(
                "GoTrue server error",
                operation=operation,
                status_code=response.status_code,
            )
            raise IdentityStoreUnavailableError(
                f"Identity Store returned {response.status_code} for {operation}"
            )
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        kind, message = classify_error(payload if isinstance(payload, dict) else {})
        logfire.info(
            "GoTrue rejected request",
            operation=operation,
            status_code=response.status_code,
            kind=kind.value,
        )
        raise IdentityStoreError(kind, message)

    def _parse_session(self, payload: dict) -> IdentitySession:
        user = payload.get("user") or {}
        try:
            return IdentitySession(
                access_token=payload["access_token"],
                refresh_token=payload.get("refresh_token"),
                user_id=UserId(UUID(user["id"])),
                email=Email(user["email"]),
            )
        except (KeyError, ValueError) as e:
            raise IdentityStoreUnavailableError(
                f"Unexpected session payload from Identity Store: {e}"
            )

    async def authenticate(self, email: Email, password: str) -> IdentitySession:
        response = await self._request(
            "POST",
            "/token?grant_type=password",
            json={"email": email.root, "password": password},
        )
        self._raise_for_error(response, "authenticate")
        return self._parse_session(response.json())

    async def create_account(
        self,
        email: Email,
        password: str,
        full_name: str | None = None,
        avatar_url: str | None = None,
    ) -> IdentitySession:
        metadata = {
            key: value
            for key, value in (("full_name", full_name), ("avatar_url", avatar_url))
            if value
        }
        response = await self._request(
            "POST",
            "/signup",
            json={"email": email.root, "password": password, "data": metadata},
        )
        self._raise_for_error(response, "create_account")

        payload = response.json()
        if not payload.get("access_token"):
            # Server requires e-mail confirmation before issuing a session
            raise IdentityStoreError(
                IdentityErrorKind.OTHER,
                "Check your e-mail to confirm your account, then sign in.",
            )
        logfire.info("GoTrue account created", email=email.root)
        return self._parse_session(payload)

    async def set_password(self, access_token: str, password: str) -> None:
        response = await self._request(
            "PUT", "/user", json={"password": password}, access_token=access_token
        )
        self._raise_for_error(response, "set_password")

    async def get_current_session(self, access_token: str) -> IdentitySession | None:
        response = await self._request("GET", "/user", access_token=access_token)
        if response.status_code in (401, 403):
            return None
        self._raise_for_error(response, "get_current_session")
        return self._parse_session({"access_token": access_token, "user": response.json()})

    async def send_password_establish_link(self, email: Email, redirect_to: str) -> None:
        response = await self._request(
            "POST",
            f"/recover?{urlencode({'redirect_to': redirect_to})}",
            json={"email": email.root},
        )
        self._raise_for_error(response, "send_password_establish_link")


class MockIdentityStore(IdentityStore):
    """In-memory Identity Store for testing.

    Accounts may exist without a password, as they do after a token-based
    flow. Set `unavailable` to simulate a transport failure.
    """

    def __init__(self) -> None:
        self.accounts: dict[str, tuple[UserId, str | None]] = {}
        self.sessions: dict[str, IdentitySession] = {}
        self.password_links: list[tuple[str, str]] = []
        self.unavailable = False
        self.authenticate_calls = 0

    def _check_available(self) -> None:
        if self.unavailable:
            raise IdentityStoreUnavailableError("Mock Identity Store is unavailable")

    def add_account(self, email: str, password: str | None = None) -> UserId:
        user_id = UserId(uuid4())
        self.accounts[Email(email).root] = (user_id, password)
        return user_id

    def open_session(self, email: str) -> IdentitySession:
        normalized = Email(email)
        user_id, _ = self.accounts[normalized.root]
        session = IdentitySession(
            access_token=f"mock-access-{uuid4().hex}",
            refresh_token=f"mock-refresh-{uuid4().hex}",
            user_id=user_id,
            email=normalized,
        )
        self.sessions[session.access_token] = session
        return session

    async def authenticate(self, email: Email, password: str) -> IdentitySession:
        self.authenticate_calls += 1
        self._check_available()
        account = self.accounts.get(email.root)
        if account is None or account[1] is None or account[1] != password:
            raise IdentityStoreError(
                IdentityErrorKind.INVALID_CREDENTIALS, "Invalid login credentials"
            )
        return self.open_session(email.root)

    async def create_account(
        self,
        email: Email,
        password: str,
        full_name: str | None = None,
        avatar_url: str | None = None,
    ) -> IdentitySession:
        self._check_available()
        if email.root in self.accounts:
            raise IdentityStoreError(
                IdentityErrorKind.ALREADY_EXISTS, "User already registered"
            )
        self.add_account(email.root, password)
        return self.open_session(email.root)

    async def set_password(self, access_token: str, password: str) -> None:
        self._check_available()
        session = self.sessions.get(access_token)
        if session is None:
            raise IdentityStoreError(IdentityErrorKind.OTHER, "Session expired")
        user_id, _ = self.accounts[session.email.root]
        self.accounts[session.email.root] = (user_id, password)

    async def get_current_session(self, access_token: str) -> IdentitySession | None:
        self._check_available()
        return self.sessions.get(access_token)

    async def send_password_establish_link(self, email: Email, redirect_to: str) -> None:
        self._check_available()
        self.password_links.append((email.root, redirect_to))
