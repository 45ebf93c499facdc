"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from estate.domain.repository.identity import IdentityRepository

__all__ = [
    "IdentityRepository",
]
