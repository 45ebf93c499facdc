"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, RootModel, field_validator

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ValueObject(BaseModel):
    """Immutable record compared by value."""

    model_config = ConfigDict(frozen=True)


class StringValue(RootModel[str]):
    """Immutable wrapper around one validated string.

    Serializes as the bare string.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.root


class FederatedProvider(str, Enum):
    """Supported federated sign-in providers."""

    GOOGLE = "google"


class NotificationChannel(str, Enum):
    """Channel a notification is delivered over."""

    EMAIL = "email"
    SMS = "sms"


class Email(StringValue):
    """Email address, trimmed and lower-cased.

    Normalizing at construction means lookups and the uniqueness
    constraint both operate on a single canonical form.
    """

    @field_validator("root")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Validate format and normalize case."""
        v = v.strip().lower()
        if len(v) < 3 or len(v) > 255:
            raise ValueError("Email must be 3-255 characters")
        if not _EMAIL_PATTERN.match(v):
            raise ValueError("Email address is malformed")
        return v


class FederatedIdentityInfo(ValueObject):
    """Identity facts extracted from a verified federated assertion."""

    provider: FederatedProvider
    subject: str  # Stable provider subject identifier ("sub")
    email: Email
    email_verified: bool = False
    name: str | None = None
    picture: str | None = None


class DeliveryWarning(ValueObject):
    """A notification that could not be handed to its gateway.

    Returned alongside a successful result so callers can decide whether
    to surface it; the mutation that preceded the send is kept.
    """

    channel: NotificationChannel
    recipient: str
    message: str
