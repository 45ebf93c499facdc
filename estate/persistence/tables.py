"""SQLAlchemy table definitions for EstateHub.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# IDENTITIES TABLE
# ============================================================================
identities_table = Table(
    "identities",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),  # Stored lower-cased
    Column("password_hash", String(255), nullable=True),  # NULL for federated-only
    Column("phone", String(32), nullable=True),
    Column("profile_picture", Text, nullable=False, server_default=""),
    Column("is_seller", Boolean, nullable=False, server_default="false"),
    Column("company_name", String(255), nullable=False, server_default=""),
    Column("rera_id", String(255), nullable=False, server_default=""),
    Column("email_verified", Boolean, nullable=False, server_default="false"),
    Column("phone_verified", Boolean, nullable=False, server_default="false"),
    Column("email_verification_token", String(128), nullable=True),
    Column("phone_otp", String(16), nullable=True),
    Column("reset_token", String(128), nullable=True),
    Column("reset_token_expiry", TIMESTAMP(timezone=True), nullable=True),
    Column("federated_id", String(255), nullable=True),
    Column("last_login", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_identities_email_verification_token",
    identities_table.c.email_verification_token,
)
Index("idx_identities_reset_token", identities_table.c.reset_token)
