"""Integration tests for PostgresIdentityRepository.

Require a migrated PostgreSQL database reachable at DATABASE__URL
(``python scripts/run_migrations.py`` first). Skipped otherwise.
"""

import os
from datetime import timedelta
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from estate.domain.error import DuplicateIdentityError, NotFoundError
from estate.domain.model import Identity
from estate.domain.model.identity import utcnow
from estate.domain.repository import IdentityRepository
from estate.domain.value import Email, IdentityId
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ, reason="DATABASE__URL not set"
)

# Integration test fixture - real PostgreSQL, mocked external services
integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env):
    """Clean the identities table before each test."""
    session = await integration_env.get(AsyncSession)
    await session.execute(text("TRUNCATE TABLE identities"))
    await session.commit()
    yield


def make_identity(email: str = "a@x.com", **fields) -> Identity:
    values = {
        "id": IdentityId(uuid4()),
        "name": "Asha",
        "email": Email(email),
        "password_hash": "hash",
        "phone": "+919810012345",
    }
    values.update(fields)
    return Identity(**values)


class TestPostgresIdentityRepositoryIntegration:
    """Integration tests for PostgresIdentityRepository."""

    @pytest.mark.asyncio
    async def test_create_and_find(self, integration_env):
        """Identities should round-trip through the table."""
        repo = await integration_env.get(IdentityRepository)
        identity = await repo.create(make_identity(is_seller=True, rera_id="R-1"))

        by_id = await repo.find_by_id(identity.id)
        by_email = await repo.find_by_email(Email("A@x.com"))

        assert by_id is not None
        assert by_id.email.root == "a@x.com"
        assert by_id.is_seller is True
        assert by_id.rera_id == "R-1"
        assert by_email is not None
        assert by_email.id == identity.id

    @pytest.mark.asyncio
    async def test_duplicate_email(self, integration_env):
        """The unique constraint should surface as DuplicateIdentityError."""
        repo = await integration_env.get(IdentityRepository)
        await repo.create(make_identity())

        with pytest.raises(DuplicateIdentityError):
            await repo.create(make_identity())

        # Savepoint keeps the transaction usable
        assert await repo.find_by_email(Email("a@x.com")) is not None

    @pytest.mark.asyncio
    async def test_update_missing(self, integration_env):
        """Updating an unknown id should raise NotFoundError."""
        repo = await integration_env.get(IdentityRepository)

        with pytest.raises(NotFoundError):
            await repo.update(IdentityId(uuid4()), name="x")

    @pytest.mark.asyncio
    async def test_consume_email_token_once(self, integration_env):
        """The conditional update should match exactly once."""
        repo = await integration_env.get(IdentityRepository)
        await repo.create(make_identity(email_verification_token="tok"))

        first = await repo.consume_email_verification_token("tok")
        second = await repo.consume_email_verification_token("tok")

        assert first is not None
        assert first.email_verified is True
        assert second is None

    @pytest.mark.asyncio
    async def test_consume_phone_otp(self, integration_env):
        """The code should only match its own identity."""
        repo = await integration_env.get(IdentityRepository)
        await repo.create(make_identity("a@x.com", phone_otp="111111"))

        assert await repo.consume_phone_otp(Email("b@x.com"), "111111") is None
        verified = await repo.consume_phone_otp(Email("a@x.com"), "111111")
        assert verified is not None
        assert verified.phone_verified is True
        assert verified.phone_otp is None

    @pytest.mark.asyncio
    async def test_consume_reset_token_expiry(self, integration_env):
        """Expired tokens should not match; live ones should swap the hash."""
        repo = await integration_env.get(IdentityRepository)
        now = utcnow()
        expired = await repo.create(
            make_identity(
                "old@x.com", reset_token="r-old", reset_token_expiry=now - timedelta(minutes=1)
            )
        )
        await repo.create(
            make_identity(
                "new@x.com", reset_token="r-new", reset_token_expiry=now + timedelta(hours=1)
            )
        )

        assert await repo.consume_reset_token("r-old", "new-hash", now) is None
        assert (await repo.find_by_id(expired.id)).password_hash == "hash"

        updated = await repo.consume_reset_token("r-new", "new-hash", now)
        assert updated is not None
        assert updated.password_hash == "new-hash"
        assert updated.reset_token is None
        assert updated.reset_token_expiry is None
