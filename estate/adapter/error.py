"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class NotificationDeliveryError(ProviderError):
    """Raised when a gateway could not hand a message to its transport."""

    pass


class GoogleAuthError(ProviderError):
    """Raised when Google's signing keys cannot be fetched."""

    pass
