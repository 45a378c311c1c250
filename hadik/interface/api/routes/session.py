"""Request helpers shared by routes: bearer sessions and client address."""

import ipaddress
from collections.abc import Sequence

from fastapi import Request

from hadik.domain.service import IdentityStore
from hadik.domain.value import IdentitySession
from hadik.interface.error import NotAuthenticatedError

IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_session(
    identity_store: IdentityStore, authorization: str | None
) -> IdentitySession:
    """Resolve the caller's Identity Store session.

    Raises:
        NotAuthenticatedError: If no token is present or the store rejects it
    """
    token = bearer_token(authorization)
    if token is None:
        raise NotAuthenticatedError("Not authenticated")
    session = await identity_store.get_current_session(token)
    if session is None:
        raise NotAuthenticatedError("Session expired or invalid")
    return session


def _is_trusted(peer: str, trusted_proxies: Sequence[IPNetwork]) -> bool:
    try:
        address = ipaddress.ip_address(peer)
    except ValueError:
        return False
    return any(address in network for network in trusted_proxies)


def client_ip(request: Request, trusted_proxies: Sequence[IPNetwork] = ()) -> str:
    """Best-effort client address, used to key the login throttle.

    X-Forwarded-For is client-controlled, so its first hop is only believed
    when the socket peer is one of the trusted proxies.
    """
    peer = request.client.host if request.client and request.client.host else None
    if peer is not None and _is_trusted(peer, trusted_proxies):
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            first = forwarded.split(",")[0].strip()
            if first:
                return first
    return peer or "unknown"
