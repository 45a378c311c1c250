"""Identity Store adapter."""

from .gotrue import GoTrueIdentityStore, MockIdentityStore, classify_error

__all__ = ["GoTrueIdentityStore", "MockIdentityStore", "classify_error"]
