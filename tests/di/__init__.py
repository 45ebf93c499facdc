"""Mock providers for testing."""

from .google import MockGoogleProvider
from .notification import MockNotificationProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockGoogleProvider",
    "MockNotificationProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
