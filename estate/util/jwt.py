"""JWT session token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, ConfigDict, Field

from estate.config import AuthSettings


class TokenPayload(BaseModel):
    """Session claim carried in the JWT.

    Wire shape: ``{"id", "email", "isSeller", "exp"}``.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    is_seller: bool = Field(default=False, alias="isSeller")
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


class InvalidTokenError(JWTError):
    """Token signature or structure is invalid."""

    pass


class TokenExpiredError(JWTError):
    """Token was valid but its expiry has passed."""

    pass


def create_token(
    identity_id: str, email: str, is_seller: bool, settings: AuthSettings
) -> str:
    """Create a signed session token.

    Args:
        identity_id: Identity ID
        email: Identity email
        is_seller: Seller role flag
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "id": identity_id,
        "email": email,
        "isSeller": is_seller,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a session token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        TokenExpiredError: If the token has expired
        InvalidTokenError: If the token is malformed or the signature is wrong
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "id", "email"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError("Token has expired")
    except jwt.InvalidTokenError:
        raise InvalidTokenError("Invalid token")

    try:
        return TokenPayload.model_validate(payload)
    except ValueError:
        raise InvalidTokenError("Invalid token")
