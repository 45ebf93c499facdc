"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DuplicateIdentityError(DomainError):
    """Raised when an identity already exists for an email."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Identity already exists for {email}")


class InvalidCredentialsError(DomainError):
    """Raised when an email/password pair does not authenticate.

    Deliberately carries no detail about which half was wrong.
    """

    def __init__(self):
        super().__init__("Invalid credentials")


class InvalidOrExpiredTokenError(DomainError):
    """Raised when a verification or reset token matches nothing consumable."""

    def __init__(self, purpose: str):
        self.purpose = purpose
        super().__init__(f"Invalid or expired {purpose} token")


class InvalidOtpError(DomainError):
    """Raised when a phone one-time code does not match."""

    def __init__(self):
        super().__init__("Invalid OTP")


class InvalidAssertionError(DomainError):
    """Raised when a federated identity assertion fails verification."""

    pass


class AccountLinkingError(DomainError):
    """Raised when a federated sign-in may not be linked to an existing identity."""

    pass
