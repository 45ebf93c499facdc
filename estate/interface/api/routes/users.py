"""User profile routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status
from pydantic import BaseModel, Field

from estate.application.usecase.auth import GetCurrentIdentityUseCase
from estate.application.usecase.common import IdentityProfile
from estate.application.usecase.profile import UpdateProfileUseCase
from estate.application.usecase.profile.update_profile import UpdateProfileRequest
from estate.domain.error import NotFoundError
from estate.interface.api.dependencies import authenticate, server_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdateProfileAPIRequest(BaseModel):
    """API request for updating the caller's profile."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, min_length=10, max_length=32)
    company_name: str | None = Field(default=None, max_length=255)
    rera_id: str | None = Field(default=None, max_length=255)


@router.get("/profile", response_model=IdentityProfile)
async def get_profile(
    get_current_identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    authorization: str | None = Header(default=None),
) -> IdentityProfile:
    """Get the caller's public profile."""
    current = await authenticate(authorization, get_current_identity_use_case)
    return current.profile


@router.put("/profile", response_model=IdentityProfile)
async def update_profile(
    request: UpdateProfileAPIRequest,
    get_current_identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
    authorization: str | None = Header(default=None),
) -> IdentityProfile:
    """Update the caller's profile.

    Changing ``phone`` marks it unverified; request a new code with
    ``POST /auth/resend-phone-otp``. Company name and RERA id are only
    stored for sellers.

    Example:
        PUT /users/profile
        Authorization: Bearer <token>

        {"name": "Asha K", "phone": "+919810012345"}
    """
    current = await authenticate(authorization, get_current_identity_use_case)

    try:
        return await update_profile_use_case.execute(
            UpdateProfileRequest(
                identity_id=current.identity_id,
                name=request.name,
                phone=request.phone,
                company_name=request.company_name,
                rera_id=request.rera_id,
            )
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except Exception as e:
        logger.exception(f"Unexpected error updating profile: {str(e)}")
        raise server_error()
