"""Authentication and verification routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status

from estate.adapter.error import GoogleAuthError
from estate.application.usecase.auth import (
    FederatedLoginUseCase,
    GetCurrentIdentityUseCase,
    LoginUseCase,
    RegisterUseCase,
)
from estate.application.usecase.auth.federated_login import (
    FederatedLoginRequest,
    FederatedLoginResponse,
)
from estate.application.usecase.auth.login import LoginRequest
from estate.application.usecase.auth.register import RegisterRequest, RegisterResponse
from estate.application.usecase.common import (
    IdentityProfile,
    MessageResponse,
    SessionResponse,
)
from estate.application.usecase.password import (
    ForgotPasswordUseCase,
    ResetPasswordUseCase,
)
from estate.application.usecase.password.forgot_password import ForgotPasswordRequest
from estate.application.usecase.password.reset_password import ResetPasswordRequest
from estate.application.usecase.verification import (
    ResendEmailVerificationUseCase,
    ResendPhoneOtpUseCase,
    VerifyEmailUseCase,
    VerifyPhoneUseCase,
)
from estate.application.usecase.verification.resend_email_verification import (
    ResendEmailVerificationRequest,
)
from estate.application.usecase.verification.resend_phone_otp import (
    ResendPhoneOtpRequest,
)
from estate.application.usecase.verification.verify_email import VerifyEmailRequest
from estate.application.usecase.verification.verify_phone import VerifyPhoneRequest
from estate.domain.error import (
    AccountLinkingError,
    DuplicateIdentityError,
    InvalidAssertionError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    InvalidOtpError,
    NotFoundError,
)
from estate.interface.api.dependencies import authenticate, server_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: RegisterRequest,
    register_use_case: FromDishka[RegisterUseCase],
) -> RegisterResponse:
    """Create an identity and send both verification messages.

    No session is issued. Notification failures are returned in
    ``warnings``; the identity is kept either way.

    Example:
        POST /auth/register
        {
            "name": "Asha",
            "email": "a@x.com",
            "password": "Secret123",
            "phone": "+911234567890",
            "is_seller": false
        }

        Response (201):
        {
            "message": "Registration successful. Please verify your phone number and email.",
            "identity_id": "123e4567-e89b-12d3-a456-426614174000",
            "email": "a@x.com",
            "email_verification_pending": true,
            "phone_verification_pending": true,
            "warnings": []
        }
    """
    try:
        response = await register_use_case.execute(request)
        logger.info(f"Registered identity {response.identity_id}")
        return response
    except DuplicateIdentityError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )
    except Exception as e:
        logger.exception(f"Unexpected error during registration: {str(e)}")
        raise server_error()


@router.post("/login", response_model=SessionResponse)
async def login(
    request: LoginRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> SessionResponse:
    """Authenticate with email and password.

    Succeeds regardless of verification state; ``email_verified`` and
    ``phone_verified`` tell the client what is still outstanding.
    """
    try:
        return await login_use_case.execute(request)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    except Exception as e:
        logger.exception(f"Unexpected error during login: {str(e)}")
        raise server_error()


@router.post("/google", response_model=FederatedLoginResponse)
async def google_sign_in(
    request: FederatedLoginRequest,
    federated_login_use_case: FromDishka[FederatedLoginUseCase],
) -> FederatedLoginResponse:
    """Sign in with a Google ID token.

    Creates the identity on first sign-in, or links an existing password
    account with the same verified email.

    Example:
        POST /auth/google
        {"credential": "<Google ID token>"}
    """
    try:
        return await federated_login_use_case.execute(request)
    except InvalidAssertionError as e:
        logger.warning(f"Federated credential rejected: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid federated credential",
        )
    except AccountLinkingError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except GoogleAuthError as e:
        logger.error(f"Google key fetch failed: {str(e)}")
        raise server_error()
    except Exception as e:
        logger.exception(f"Unexpected error during federated sign-in: {str(e)}")
        raise server_error()


@router.get("/verify", response_model=IdentityProfile)
async def verify_session(
    get_current_identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    authorization: str | None = Header(default=None),
) -> IdentityProfile:
    """Resolve the bearer session to the caller's public profile."""
    current = await authenticate(authorization, get_current_identity_use_case)
    return current.profile


@router.get("/verify-email/{token}", response_model=SessionResponse)
async def verify_email(
    token: str,
    verify_email_use_case: FromDishka[VerifyEmailUseCase],
) -> SessionResponse:
    """Consume an email verification token and issue a session."""
    try:
        return await verify_email_use_case.execute(VerifyEmailRequest(token=token))
    except InvalidOrExpiredTokenError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired verification token",
        )
    except Exception as e:
        logger.exception(f"Unexpected error during email verification: {str(e)}")
        raise server_error()


@router.post("/verify-phone-otp", response_model=SessionResponse)
async def verify_phone_otp(
    request: VerifyPhoneRequest,
    verify_phone_use_case: FromDishka[VerifyPhoneUseCase],
) -> SessionResponse:
    """Consume a phone one-time code and issue a session."""
    try:
        return await verify_phone_use_case.execute(request)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except InvalidOtpError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid OTP",
        )
    except Exception as e:
        logger.exception(f"Unexpected error during phone verification: {str(e)}")
        raise server_error()


@router.post("/resend-phone-otp", response_model=MessageResponse)
async def resend_phone_otp(
    request: ResendPhoneOtpRequest,
    resend_phone_otp_use_case: FromDishka[ResendPhoneOtpUseCase],
) -> MessageResponse:
    """Issue and send a new phone code, invalidating the previous one."""
    try:
        return await resend_phone_otp_use_case.execute(request)
    except Exception as e:
        logger.exception(f"Unexpected error during OTP resend: {str(e)}")
        raise server_error()


@router.post("/resend-email-verification", response_model=MessageResponse)
async def resend_email_verification(
    request: ResendEmailVerificationRequest,
    resend_email_verification_use_case: FromDishka[ResendEmailVerificationUseCase],
) -> MessageResponse:
    """Issue and send a new verification link, invalidating the previous one."""
    try:
        return await resend_email_verification_use_case.execute(request)
    except Exception as e:
        logger.exception(f"Unexpected error during verification resend: {str(e)}")
        raise server_error()


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    forgot_password_use_case: FromDishka[ForgotPasswordUseCase],
) -> MessageResponse:
    """Send a password reset link valid for one hour.

    The response is identical whether or not the email is registered.
    """
    try:
        return await forgot_password_use_case.execute(request)
    except Exception as e:
        logger.exception(f"Unexpected error during reset request: {str(e)}")
        raise server_error()


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    reset_password_use_case: FromDishka[ResetPasswordUseCase],
) -> MessageResponse:
    """Replace the password using a reset token. No session is issued."""
    try:
        return await reset_password_use_case.execute(request)
    except InvalidOrExpiredTokenError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired reset token",
        )
    except Exception as e:
        logger.exception(f"Unexpected error during password reset: {str(e)}")
        raise server_error()
