"""Identity aggregate root.

One identity per user account. Holds credentials and the state of the
email and phone verifications and any outstanding password reset.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from estate.domain.value import Email, IdentityId


def utcnow() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(timezone.utc)


class Identity(BaseModel):
    """User account and its verification state.

    ``email_verified`` and ``phone_verified`` are independent; no
    combination is invalid and neither gates login.

    Outstanding artifacts (``email_verification_token``, ``phone_otp``,
    ``reset_token``/``reset_token_expiry``) are either absent or awaiting
    exactly one consumption.
    """

    model_config = ConfigDict(frozen=True)

    id: IdentityId
    name: str
    email: Email
    password_hash: Optional[str] = None  # Absent for federated-only identities
    phone: Optional[str] = None
    profile_picture: str = ""
    is_seller: bool = False
    company_name: str = ""
    rera_id: str = ""

    email_verified: bool = False
    phone_verified: bool = False
    email_verification_token: Optional[str] = None
    phone_otp: Optional[str] = None

    reset_token: Optional[str] = None
    reset_token_expiry: Optional[datetime] = None

    federated_id: Optional[str] = None
    last_login: Optional[datetime] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def require_authentication_method(self) -> "Identity":
        """An identity must be able to authenticate somehow."""
        if not self.password_hash and not self.federated_id:
            raise ValueError("Identity needs a password hash or a federated id")
        return self
