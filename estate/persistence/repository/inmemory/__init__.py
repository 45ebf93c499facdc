"""In-memory repository implementations for testing."""

from .identity import InMemoryIdentityRepository

__all__ = ["InMemoryIdentityRepository"]
