"""Unit tests for route request helpers."""

import ipaddress

import pytest
from starlette.requests import Request

from hadik.domain.service import IdentityStore
from hadik.interface.api.routes.session import bearer_token, client_ip, require_session
from hadik.interface.error import NotAuthenticatedError
from tests.conftest import seed_admin
from tests.harness import create_env_fixture

unit_env = create_env_fixture()
PROXIES = (ipaddress.ip_network("10.0.0.0/8"),)


def _request(headers: dict[str, str], client: tuple[str, int] | None = None) -> Request:
    scope = {
        "type": "http",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": client,
    }
    return Request(scope)


class TestBearerToken:
    @pytest.mark.parametrize(
        "header,token",
        [
            ("Bearer abc.def", "abc.def"),
            ("bearer   abc ", "abc"),
            ("Basic dXNlcjpwdw==", None),
            ("Bearer ", None),
            ("", None),
            (None, None),
        ],
    )
    def test_extracts_token(self, header, token):
        assert bearer_token(header) == token


class TestClientIp:
    def test_first_forwarded_hop_wins_behind_trusted_proxy(self):
        request = _request(
            {"X-Forwarded-For": "203.0.113.9, 10.0.0.1"}, client=("10.0.0.1", 5123)
        )

        assert client_ip(request, PROXIES) == "203.0.113.9"

    @pytest.mark.parametrize("proxies", [(), PROXIES])
    def test_forwarded_header_from_untrusted_peer_is_ignored(self, proxies):
        request = _request(
            {"X-Forwarded-For": "203.0.113.9"}, client=("198.51.100.4", 5123)
        )

        assert client_ip(request, proxies) == "198.51.100.4"

    def test_falls_back_to_peer(self):
        assert client_ip(_request({}, client=("198.51.100.4", 5123))) == "198.51.100.4"

    def test_unknown_without_peer(self):
        assert client_ip(_request({})) == "unknown"


class TestRequireSession:
    @pytest.mark.asyncio
    async def test_resolves_open_session(self, unit_env):
        identity_store = await unit_env.get(IdentityStore)
        admin = await seed_admin(unit_env)

        session = await require_session(identity_store, f"Bearer {admin.access_token}")

        assert session.user_id == admin.user_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", [None, "Bearer not-a-session"])
    async def test_rejects_missing_or_unknown_token(self, unit_env, header):
        identity_store = await unit_env.get(IdentityStore)

        with pytest.raises(NotAuthenticatedError):
            await require_session(identity_store, header)
