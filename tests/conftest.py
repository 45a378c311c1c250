"""Test configuration and fixtures."""

import logfire

from hadik.domain.model import Profile
from hadik.domain.repository import ProfileRepository
from hadik.domain.service import IdentityStore
from hadik.domain.value import Email, IdentitySession, Role, UserId

# Spans and events are exercised but never exported
logfire.configure(send_to_logfire=False, console=False)


async def seed_profile(
    profile_repository: ProfileRepository,
    user_id: UserId,
    email: str,
    role: Role | None,
    full_name: str | None = None,
) -> Profile:
    """Insert a profile directly, bypassing admission."""
    return await profile_repository.save(
        Profile(id=user_id, email=Email(email), role=role, full_name=full_name)
    )


async def seed_admin(env, email: str = "admin@x.com") -> IdentitySession:
    """Create an admin account with a profile and an open session."""
    identity_store = await env.get(IdentityStore)
    profile_repository = await env.get(ProfileRepository)
    identity_store.add_account(email, "admin-password")
    session = identity_store.open_session(email)
    await seed_profile(profile_repository, session.user_id, email, Role.ADMIN, "Admin")
    return session
