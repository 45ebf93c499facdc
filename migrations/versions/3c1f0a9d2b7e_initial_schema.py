"""initial_schema

Create the identities table:
- Credentials (password hash and/or federated subject)
- Email and phone verification state
- Password reset token and expiry

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2026-10-19 18:20:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # IDENTITIES table
    # ========================================================================
    op.create_table(
        "identities",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),  # Lower-cased
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("profile_picture", sa.Text(), nullable=False, server_default=""),
        sa.Column("is_seller", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("company_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("rera_id", sa.String(255), nullable=False, server_default=""),
        sa.Column(
            "email_verified", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column(
            "phone_verified", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("email_verification_token", sa.String(128), nullable=True),
        sa.Column("phone_otp", sa.String(16), nullable=True),
        sa.Column("reset_token", sa.String(128), nullable=True),
        sa.Column("reset_token_expiry", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("federated_id", sa.String(255), nullable=True),
        sa.Column("last_login", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="identities_email_key"),
        # At least one way to authenticate
        sa.CheckConstraint(
            "password_hash IS NOT NULL OR federated_id IS NOT NULL",
            name="ck_identities_auth_method",
        ),
    )
    op.create_index(
        "idx_identities_email_verification_token",
        "identities",
        ["email_verification_token"],
    )
    op.create_index("idx_identities_reset_token", "identities", ["reset_token"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_identities_reset_token", table_name="identities")
    op.drop_index(
        "idx_identities_email_verification_token", table_name="identities"
    )
    op.drop_table("identities")
