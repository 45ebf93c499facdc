"""Identity repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

from estate.domain.model.identity import Identity
from estate.domain.value import Email, IdentityId


class IdentityRepository(ABC):
    """Repository for the Identity aggregate.

    The consume operations are single conditional updates: the match and
    the clearing of the artifact happen in one store operation, so a
    token can never be consumed twice and a consume cannot succeed
    against a value a concurrent resend already replaced.
    """

    @abstractmethod
    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find an identity by ID.

        Args:
            identity_id: The identity's unique identifier

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[Identity]:
        """Find an identity by email.

        Args:
            email: Normalized email address

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, identity: Identity) -> Identity:
        """Insert a new identity.

        Args:
            identity: The identity to insert

        Returns:
            The stored identity

        Raises:
            DuplicateIdentityError: If an identity with the same email exists
        """
        pass

    @abstractmethod
    async def update(self, identity_id: IdentityId, **fields: Any) -> Identity:
        """Set the given fields on an identity and bump ``updated_at``.

        Only the named fields are written.

        Args:
            identity_id: The identity to update
            **fields: Field names and new values

        Returns:
            The updated identity

        Raises:
            NotFoundError: If no identity has this ID
        """
        pass

    @abstractmethod
    async def consume_email_verification_token(
        self, token: str
    ) -> Optional[Identity]:
        """Mark email verified and clear the token, if the token matches.

        Args:
            token: Presented email verification token

        Returns:
            The updated identity, or None if no identity holds this token
        """
        pass

    @abstractmethod
    async def consume_phone_otp(self, email: Email, otp: str) -> Optional[Identity]:
        """Mark phone verified and clear the code, if it matches exactly.

        Args:
            email: Identity email
            otp: Presented one-time code

        Returns:
            The updated identity, or None on mismatch
        """
        pass

    @abstractmethod
    async def consume_reset_token(
        self, token: str, password_hash: str, now: datetime
    ) -> Optional[Identity]:
        """Replace the password hash and clear reset fields.

        Matches only when ``reset_token`` equals ``token`` and
        ``reset_token_expiry`` is later than ``now``.

        Args:
            token: Presented reset token
            password_hash: Hash of the new password
            now: Current time

        Returns:
            The updated identity, or None if the token is unknown or expired
        """
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Make every write issued through this repository durable.

        Writes that are never committed are discarded when the request
        ends.

        Raises:
            Exception: Whatever the store raises; the writes are then lost
        """
        pass
