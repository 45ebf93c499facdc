"""PostgreSQL repository implementations."""

from estate.persistence.repository.identity import PostgresIdentityRepository

__all__ = ["PostgresIdentityRepository"]
