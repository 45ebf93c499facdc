"""Identity domain service."""

from datetime import datetime
from typing import Any

import logfire

from estate.domain.error import NotFoundError
from estate.domain.model import Identity
from estate.domain.model.identity import utcnow
from estate.domain.repository import IdentityRepository
from estate.domain.value import Email, IdentityId


class IdentityService:
    """Domain service for identity record operations."""

    def __init__(self, identity_repository: IdentityRepository) -> None:
        """Initialize identity service.

        Args:
            identity_repository: Identity repository
        """
        self.identity_repository = identity_repository

    async def get_by_id(self, identity_id: IdentityId) -> Identity:
        """Get identity by ID.

        Args:
            identity_id: Identity ID

        Returns:
            Identity entity

        Raises:
            NotFoundError: If identity not found
        """
        with logfire.span("identity_service.get_by_id", identity_id=str(identity_id)):
            identity = await self.identity_repository.find_by_id(identity_id)
            if not identity:
                logfire.warn("Identity not found", identity_id=str(identity_id))
                raise NotFoundError("Identity", str(identity_id))
            return identity

    async def get_by_email(self, email: Email) -> Identity | None:
        """Get identity by email.

        Args:
            email: Normalized email

        Returns:
            Identity if found, None otherwise
        """
        with logfire.span("identity_service.get_by_email", email=email.root):
            identity = await self.identity_repository.find_by_email(email)
            if identity:
                logfire.info(
                    "Identity found", email=email.root, identity_id=str(identity.id)
                )
            else:
                logfire.info("Identity not found", email=email.root)
            return identity

    async def create(self, identity: Identity) -> Identity:
        """Persist a new identity.

        Args:
            identity: Identity to create

        Returns:
            Created identity

        Raises:
            DuplicateIdentityError: If the email is already registered
        """
        with logfire.span(
            "identity_service.create",
            identity_id=str(identity.id),
            email=identity.email.root,
        ):
            created = await self.identity_repository.create(identity)
            logfire.info(
                "Identity created",
                identity_id=str(created.id),
                is_seller=created.is_seller,
                federated=created.federated_id is not None,
            )
            return created

    async def update(self, identity_id: IdentityId, **fields: Any) -> Identity:
        """Write selected fields of an identity.

        Args:
            identity_id: Identity ID
            **fields: Fields to set

        Returns:
            Updated identity

        Raises:
            NotFoundError: If identity not found
        """
        with logfire.span(
            "identity_service.update",
            identity_id=str(identity_id),
            fields=sorted(fields),
        ):
            return await self.identity_repository.update(identity_id, **fields)

    async def record_login(self, identity_id: IdentityId) -> Identity:
        """Stamp ``last_login`` with the current time.

        Args:
            identity_id: Identity ID

        Returns:
            Updated identity
        """
        with logfire.span("identity_service.record_login", identity_id=str(identity_id)):
            return await self.identity_repository.update(
                identity_id, last_login=utcnow()
            )

    async def consume_email_verification_token(self, token: str) -> Identity | None:
        """Consume an email verification token.

        Args:
            token: Presented token

        Returns:
            Identity with ``email_verified`` set, or None if nothing matched
        """
        with logfire.span("identity_service.consume_email_verification_token"):
            identity = await self.identity_repository.consume_email_verification_token(
                token
            )
            if identity:
                logfire.info("Email verified", identity_id=str(identity.id))
            else:
                logfire.warn("Email verification token matched nothing")
            return identity

    async def consume_phone_otp(self, email: Email, otp: str) -> Identity | None:
        """Consume a phone one-time code.

        Args:
            email: Identity email
            otp: Presented code

        Returns:
            Identity with ``phone_verified`` set, or None on mismatch
        """
        with logfire.span("identity_service.consume_phone_otp", email=email.root):
            identity = await self.identity_repository.consume_phone_otp(email, otp)
            if identity:
                logfire.info("Phone verified", identity_id=str(identity.id))
            else:
                logfire.warn("Phone OTP mismatch", email=email.root)
            return identity

    async def consume_reset_token(
        self, token: str, password_hash: str, now: datetime
    ) -> Identity | None:
        """Consume a password reset token and store the new hash.

        Args:
            token: Presented reset token
            password_hash: Hash of the new password
            now: Current time, compared against the token expiry

        Returns:
            Updated identity, or None if the token is unknown or expired
        """
        with logfire.span("identity_service.consume_reset_token"):
            identity = await self.identity_repository.consume_reset_token(
                token, password_hash, now
            )
            if identity:
                logfire.info("Password reset", identity_id=str(identity.id))
            else:
                logfire.warn("Reset token unknown or expired")
            return identity

    async def commit(self) -> None:
        """Make the writes of this request durable.

        Call before reporting a write as done; a failure here propagates.
        """
        with logfire.span("identity_service.commit"):
            await self.identity_repository.commit()
