"""Register use case."""

from uuid import uuid4

import logfire
from pydantic import BaseModel, Field, field_validator

from estate.application.usecase.base import BaseUseCase
from estate.application.usecase.common import check_new_password
from estate.domain.error import DuplicateIdentityError
from estate.domain.model import Identity
from estate.domain.service import (
    CodeGenerator,
    IdentityService,
    NotificationService,
    PasswordService,
)
from estate.domain.value import DeliveryWarning, Email, IdentityId


class RegisterRequest(BaseModel):
    """Registration form."""

    name: str = Field(min_length=1, max_length=255)
    email: str
    password: str = Field(min_length=6, max_length=72)
    phone: str = Field(min_length=10, max_length=32)
    is_seller: bool = False
    company_name: str | None = Field(default=None, max_length=255)
    rera_id: str | None = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return Email(v).root

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return check_new_password(v)


class RegisterResponse(BaseModel):
    """Registration result. No session is issued until the user logs in."""

    message: str
    identity_id: str
    email: str
    email_verification_pending: bool = True
    phone_verification_pending: bool = True
    warnings: list[DeliveryWarning] = []


class RegisterUseCase(BaseUseCase[RegisterRequest, RegisterResponse]):
    """Use case for creating a password identity with dual verification."""

    def __init__(
        self,
        identity_service: IdentityService,
        password_service: PasswordService,
        code_generator: CodeGenerator,
        notification_service: NotificationService,
    ) -> None:
        """Initialize register use case.

        Args:
            identity_service: Identity domain service
            password_service: Password hashing service
            code_generator: Verification artifact generator
            notification_service: Notification domain service
        """
        self.identity_service = identity_service
        self.password_service = password_service
        self.code_generator = code_generator
        self.notification_service = notification_service

    async def execute(self, request: RegisterRequest) -> RegisterResponse:
        """Execute registration.

        Steps:
        1. Reject an email that is already registered
        2. Hash the password and generate both verification artifacts
        3. Persist the identity with both verification flags false
        4. Send the email link and the phone code

        Notification failures do not undo step 3; they come back as
        warnings and the user can ask for a resend.

        Raises:
            DuplicateIdentityError: If the email is already registered
        """
        email = Email(request.email)

        with logfire.span("register_identity", email=email.root):
            if await self.identity_service.get_by_email(email):
                logfire.warn("Registration rejected - email taken", email=email.root)
                raise DuplicateIdentityError(email.root)

            password_hash = await self.password_service.hash(request.password)
            email_token = self.code_generator.email_verification_token()
            phone_otp = self.code_generator.phone_otp()

            identity = Identity(
                id=IdentityId(uuid4()),
                name=request.name,
                email=email,
                password_hash=password_hash,
                phone=request.phone,
                is_seller=request.is_seller,
                # Seller metadata only applies to sellers
                company_name=(request.company_name or "") if request.is_seller else "",
                rera_id=(request.rera_id or "") if request.is_seller else "",
                email_verification_token=email_token,
                phone_otp=phone_otp,
            )
            # The unique constraint still catches a concurrent duplicate
            created = await self.identity_service.create(identity)
            await self.identity_service.commit()

            warnings = [
                warning
                for warning in (
                    await self.notification_service.send_email_verification(
                        created.email.root, email_token
                    ),
                    await self.notification_service.send_phone_otp(
                        request.phone, phone_otp
                    ),
                )
                if warning is not None
            ]

            return RegisterResponse(
                message=(
                    "Registration successful. "
                    "Please verify your phone number and email."
                ),
                identity_id=str(created.id),
                email=created.email.root,
                warnings=warnings,
            )
