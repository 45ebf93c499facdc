"""In-memory identity repository for testing."""

from datetime import datetime
from typing import Any, Optional

from estate.domain.error import DuplicateIdentityError, NotFoundError
from estate.domain.model.identity import Identity, utcnow
from estate.domain.repository.identity import IdentityRepository
from estate.domain.value import Email, IdentityId


class InMemoryIdentityRepository(IdentityRepository):
    """In-memory implementation of IdentityRepository for testing.

    Each consume method matches and clears without an ``await`` in
    between, so it is atomic under a single event loop.
    """

    def __init__(self) -> None:
        self._identities: dict[IdentityId, Identity] = {}
        # Writes apply immediately; commits are only counted
        self.commits = 0

    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find an identity by ID."""
        return self._identities.get(identity_id)

    async def find_by_email(self, email: Email) -> Optional[Identity]:
        """Find an identity by email."""
        for identity in self._identities.values():
            if identity.email == email:
                return identity
        return None

    async def create(self, identity: Identity) -> Identity:
        """Insert a new identity, enforcing email uniqueness."""
        for existing in self._identities.values():
            if existing.email == identity.email:
                raise DuplicateIdentityError(identity.email.root)
        self._identities[identity.id] = identity
        return identity

    async def update(self, identity_id: IdentityId, **fields: Any) -> Identity:
        """Set the given fields and bump ``updated_at``."""
        identity = self._identities.get(identity_id)
        if not identity:
            raise NotFoundError("Identity", str(identity_id))
        return self._replace(identity, **fields)

    async def consume_email_verification_token(
        self, token: str
    ) -> Optional[Identity]:
        """Mark email verified and clear the token."""
        for identity in self._identities.values():
            if identity.email_verification_token == token:
                return self._replace(
                    identity, email_verified=True, email_verification_token=None
                )
        return None

    async def consume_phone_otp(self, email: Email, otp: str) -> Optional[Identity]:
        """Mark phone verified and clear the code."""
        for identity in self._identities.values():
            if identity.email == email and identity.phone_otp == otp:
                return self._replace(identity, phone_verified=True, phone_otp=None)
        return None

    async def consume_reset_token(
        self, token: str, password_hash: str, now: datetime
    ) -> Optional[Identity]:
        """Replace the password hash if the reset token matches and is unexpired."""
        for identity in self._identities.values():
            if (
                identity.reset_token == token
                and identity.reset_token_expiry is not None
                and identity.reset_token_expiry > now
            ):
                return self._replace(
                    identity,
                    password_hash=password_hash,
                    reset_token=None,
                    reset_token_expiry=None,
                )
        return None

    async def commit(self) -> None:
        self.commits += 1

    def _replace(self, identity: Identity, **fields: Any) -> Identity:
        fields["updated_at"] = utcnow()
        # Re-validate so a bad field is rejected the way the database would
        updated = Identity.model_validate({**identity.model_dump(), **fields})
        self._identities[identity.id] = updated
        return updated
