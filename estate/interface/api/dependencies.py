"""Bearer session authentication for routes.

Routes receive the caller as an explicit ``AuthenticatedIdentity`` value
returned from ``authenticate``; nothing is attached to the request.
"""

import logging

from fastapi import HTTPException, status

from estate.application.usecase.auth import GetCurrentIdentityUseCase
from estate.application.usecase.auth.get_current_identity import (
    AuthenticatedIdentity,
    GetCurrentIdentityRequest,
)
from estate.domain.error import NotFoundError
from estate.util.jwt import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def server_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Server error",
    )


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


async def authenticate(
    authorization: str | None,
    get_current_identity_use_case: GetCurrentIdentityUseCase,
) -> AuthenticatedIdentity:
    """Validate the bearer session and resolve its identity.

    Args:
        authorization: Raw Authorization header
        get_current_identity_use_case: Use case from DI

    Returns:
        The authenticated identity

    Raises:
        HTTPException: 401 for a missing, invalid or expired token or a
            deleted identity; 500 for anything else
    """
    token = extract_bearer_token(authorization)
    if not token:
        raise unauthorized("No authentication token provided")

    try:
        return await get_current_identity_use_case.execute(
            GetCurrentIdentityRequest(token=token)
        )
    except TokenExpiredError:
        raise unauthorized("Token expired")
    except InvalidTokenError:
        raise unauthorized("Invalid token")
    except NotFoundError:
        logger.warning("Valid session for a missing identity")
        raise unauthorized("Authentication failed")
    except Exception as e:
        logger.exception(f"Unexpected error during authentication: {str(e)}")
        raise server_error()
