"""PostgreSQL implementation of Identity repository."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from estate.domain.error import DuplicateIdentityError, NotFoundError
from estate.domain.model import Identity
from estate.domain.model.identity import utcnow
from estate.domain.repository import IdentityRepository
from estate.domain.value import Email, IdentityId
from estate.persistence.mappers import (
    fields_to_columns,
    identity_to_dict,
    row_to_identity,
)
from estate.persistence.tables import identities_table


class PostgresIdentityRepository(IdentityRepository):
    """PostgreSQL implementation of IdentityRepository.

    Consume operations are single ``UPDATE ... WHERE ... RETURNING``
    statements, so the row lock taken by the update fences them against a
    concurrent resend.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find an identity by ID."""
        stmt = select(identities_table).where(identities_table.c.id == identity_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_identity(dict(row)) if row else None

    async def find_by_email(self, email: Email) -> Optional[Identity]:
        """Find an identity by normalized email."""
        stmt = select(identities_table).where(
            identities_table.c.email == email.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_identity(dict(row)) if row else None

    async def create(self, identity: Identity) -> Identity:
        """Insert a new identity.

        Raises:
            DuplicateIdentityError: If the email is already taken
        """
        stmt = identities_table.insert().values(**identity_to_dict(identity))
        try:
            # Savepoint so a unique violation leaves the outer transaction usable
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise DuplicateIdentityError(identity.email.root) from e
        return identity

    async def update(self, identity_id: IdentityId, **fields: Any) -> Identity:
        """Set the given fields and bump ``updated_at``.

        Raises:
            NotFoundError: If no identity has this ID
        """
        values = fields_to_columns(fields)
        values["updated_at"] = utcnow()
        stmt = (
            identities_table.update()
            .where(identities_table.c.id == identity_id)
            .values(**values)
            .returning(identities_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            raise NotFoundError("Identity", str(identity_id))
        await self.session.flush()
        return row_to_identity(dict(row))

    async def consume_email_verification_token(
        self, token: str
    ) -> Optional[Identity]:
        """Mark email verified and clear the token in one statement."""
        stmt = (
            identities_table.update()
            .where(identities_table.c.email_verification_token == token)
            .values(
                email_verified=True,
                email_verification_token=None,
                updated_at=utcnow(),
            )
            .returning(identities_table)
        )
        return await self._update_returning(stmt)

    async def consume_phone_otp(self, email: Email, otp: str) -> Optional[Identity]:
        """Mark phone verified and clear the code in one statement."""
        stmt = (
            identities_table.update()
            .where(identities_table.c.email == email.root)
            .where(identities_table.c.phone_otp == otp)
            .values(phone_verified=True, phone_otp=None, updated_at=utcnow())
            .returning(identities_table)
        )
        return await self._update_returning(stmt)

    async def consume_reset_token(
        self, token: str, password_hash: str, now: datetime
    ) -> Optional[Identity]:
        """Replace the password hash if the reset token matches and is unexpired."""
        stmt = (
            identities_table.update()
            .where(identities_table.c.reset_token == token)
            .where(identities_table.c.reset_token_expiry > now)
            .values(
                password_hash=password_hash,
                reset_token=None,
                reset_token_expiry=None,
                updated_at=utcnow(),
            )
            .returning(identities_table)
        )
        return await self._update_returning(stmt)

    async def _update_returning(self, stmt) -> Optional[Identity]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_identity(dict(row)) if row else None

    async def commit(self) -> None:
        """Commit the request's transaction."""
        await self.session.commit()
