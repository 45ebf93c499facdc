"""Update profile use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from estate.application.usecase.base import BaseUseCase
from estate.application.usecase.common import IdentityProfile
from estate.domain.service import IdentityService
from estate.domain.value import IdentityId


class UpdateProfileRequest(BaseModel):
    """Update profile request."""

    identity_id: str  # From authenticated session
    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, min_length=10, max_length=32)
    company_name: str | None = Field(default=None, max_length=255)
    rera_id: str | None = Field(default=None, max_length=255)


class UpdateProfileUseCase(BaseUseCase[UpdateProfileRequest, IdentityProfile]):
    """Use case for editing an identity's profile.

    Email, role and verification flags cannot be changed here. A new phone
    number is unverified until a fresh code is consumed.
    """

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize update profile use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(self, request: UpdateProfileRequest) -> IdentityProfile:
        """Execute update profile flow.

        Raises:
            NotFoundError: If the identity does not exist
        """
        identity = await self.identity_service.get_by_id(
            IdentityId(UUID(request.identity_id))
        )

        fields: dict = {}
        if request.name is not None:
            fields["name"] = request.name
        if request.phone is not None and request.phone != identity.phone:
            fields["phone"] = request.phone
            fields["phone_verified"] = False
            fields["phone_otp"] = None
            logfire.info("Phone changed - verification reset", identity_id=str(identity.id))
        if identity.is_seller:
            if request.company_name is not None:
                fields["company_name"] = request.company_name
            if request.rera_id is not None:
                fields["rera_id"] = request.rera_id

        if not fields:
            return IdentityProfile.from_identity(identity)

        updated = await self.identity_service.update(identity.id, **fields)
        await self.identity_service.commit()
        return IdentityProfile.from_identity(updated)
