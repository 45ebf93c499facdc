"""Domain value objects."""

from estate.domain.value.identifiers import IdentityId
from estate.domain.value.types import (
    DeliveryWarning,
    Email,
    FederatedIdentityInfo,
    FederatedProvider,
    NotificationChannel,
)

__all__ = [
    # Identifiers
    "IdentityId",
    # Types
    "DeliveryWarning",
    "Email",
    "FederatedIdentityInfo",
    "FederatedProvider",
    "NotificationChannel",
]
