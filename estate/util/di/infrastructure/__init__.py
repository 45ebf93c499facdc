"""Infrastructure providers."""

# Import bases
from .federated import FederatedAggregatorProvider
from .google import GoogleProvider
from .notification import NotificationProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .google import ProdGoogleProvider  # noqa: F401
from .notification import ProdNotificationProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "FederatedAggregatorProvider",
    "GoogleProvider",
    "NotificationProvider",
    "PersistenceProvider",
    "ProdGoogleProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
]
