"""Mock providers for testing."""

from .clock import FrozenClock, MockClockProvider, T0
from .email import MockEmailProvider
from .identity import MockIdentityProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "FrozenClock",
    "MockClockProvider",
    "MockEmailProvider",
    "MockIdentityProvider",
    "MockPersistenceProvider",
    "T0",
    "build_test_container",
]
