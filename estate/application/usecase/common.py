"""Response shapes shared by identity use cases."""

from datetime import datetime

from pydantic import BaseModel

from estate.domain.model import Identity
from estate.domain.service.password_service import MAX_PASSWORD_BYTES, fits_bcrypt
from estate.domain.value import Email


class IdentityProfile(BaseModel):
    """Public view of an identity.

    Excludes the password hash, every verification and reset artifact,
    and the federated subject.
    """

    id: str
    name: str
    email: str
    phone: str | None
    profile_picture: str
    is_seller: bool
    company_name: str
    rera_id: str
    email_verified: bool
    phone_verified: bool
    last_login: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentityProfile":
        return cls(
            id=str(identity.id),
            name=identity.name,
            email=identity.email.root,
            phone=identity.phone,
            profile_picture=identity.profile_picture,
            is_seller=identity.is_seller,
            company_name=identity.company_name,
            rera_id=identity.rera_id,
            email_verified=identity.email_verified,
            phone_verified=identity.phone_verified,
            last_login=identity.last_login,
            created_at=identity.created_at,
            updated_at=identity.updated_at,
        )


class SessionResponse(BaseModel):
    """A freshly issued session with the identity it belongs to."""

    message: str
    token: str
    user: IdentityProfile
    email_verified: bool
    phone_verified: bool

    @classmethod
    def for_identity(
        cls, message: str, token: str, identity: Identity
    ) -> "SessionResponse":
        return cls(
            message=message,
            token=token,
            user=IdentityProfile.from_identity(identity),
            email_verified=identity.email_verified,
            phone_verified=identity.phone_verified,
        )


class MessageResponse(BaseModel):
    """Acknowledgement with no payload."""

    message: str


def parse_email(value: str) -> Email | None:
    """Normalize a caller-supplied email, or None if it is malformed.

    Lookups treat a malformed address like an unregistered one.
    """
    try:
        return Email(value)
    except ValueError:
        return None


def check_new_password(value: str) -> str:
    """Reject a new password bcrypt cannot hash.

    Length limits on the field count characters; bcrypt's limit is in
    UTF-8 bytes.
    """
    if not fits_bcrypt(value):
        raise ValueError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded"
        )
    return value
