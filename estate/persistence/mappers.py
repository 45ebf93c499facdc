"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from estate.domain.model import Identity
from estate.domain.value import Email, IdentityId


def row_to_identity(row: Dict[str, Any]) -> Identity:
    """Convert database row to Identity domain model.

    Args:
        row: Database row as dict

    Returns:
        Identity domain model
    """
    return Identity(
        id=IdentityId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        name=row["name"],
        email=Email(row["email"]),
        password_hash=row.get("password_hash"),
        phone=row.get("phone"),
        profile_picture=row.get("profile_picture") or "",
        is_seller=row["is_seller"],
        company_name=row.get("company_name") or "",
        rera_id=row.get("rera_id") or "",
        email_verified=row["email_verified"],
        phone_verified=row["phone_verified"],
        email_verification_token=row.get("email_verification_token"),
        phone_otp=row.get("phone_otp"),
        reset_token=row.get("reset_token"),
        reset_token_expiry=row.get("reset_token_expiry"),
        federated_id=row.get("federated_id"),
        last_login=row.get("last_login"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def identity_to_dict(identity: Identity) -> Dict[str, Any]:
    """Convert Identity domain model to database dict.

    Args:
        identity: Identity domain model

    Returns:
        Dict suitable for database insertion
    """
    data = identity.model_dump()
    data["email"] = identity.email.root
    return data


def fields_to_columns(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Unwrap value objects in a partial update."""
    return {
        key: value.root if isinstance(value, Email) else value
        for key, value in fields.items()
    }
