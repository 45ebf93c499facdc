"""Unit tests for email verification use cases."""

import pytest

from estate.adapter.smtp import MockEmailGateway
from estate.application.usecase.verification import (
    ResendEmailVerificationUseCase,
    VerifyEmailUseCase,
)
from estate.application.usecase.verification.resend_email_verification import (
    RESEND_EMAIL_MESSAGE,
    ResendEmailVerificationRequest,
)
from estate.application.usecase.verification.verify_email import VerifyEmailRequest
from estate.domain.error import InvalidOrExpiredTokenError
from estate.domain.repository import IdentityRepository
from estate.domain.service import EmailGateway, JWTService
from tests.conftest import register_identity
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestVerifyEmailUseCase:
    """Tests for VerifyEmailUseCase."""

    @pytest.mark.asyncio
    async def test_verify_sets_flag_and_issues_session(self, unit_env):
        """A valid token should verify the email and return a session."""
        identity = await register_identity(unit_env)
        use_case = await unit_env.get(VerifyEmailUseCase)

        response = await use_case.execute(
            VerifyEmailRequest(token=identity.email_verification_token)
        )

        assert response.message == "Email verified successfully"
        assert response.email_verified is True
        assert response.phone_verified is False
        jwt_service = await unit_env.get(JWTService)
        assert jwt_service.verify_token(response.token).id == str(identity.id)

        repository = await unit_env.get(IdentityRepository)
        stored = await repository.find_by_id(identity.id)
        assert stored.email_verified is True
        assert stored.email_verification_token is None

    @pytest.mark.asyncio
    async def test_token_is_single_use(self, unit_env):
        """Presenting the same token twice should fail the second time."""
        identity = await register_identity(unit_env)
        use_case = await unit_env.get(VerifyEmailUseCase)
        request = VerifyEmailRequest(token=identity.email_verification_token)
        await use_case.execute(request)

        with pytest.raises(InvalidOrExpiredTokenError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_unknown_and_empty_tokens_rejected(self, unit_env):
        """Tokens that match nothing should be rejected."""
        use_case = await unit_env.get(VerifyEmailUseCase)

        with pytest.raises(InvalidOrExpiredTokenError):
            await use_case.execute(VerifyEmailRequest(token="f" * 64))
        with pytest.raises(InvalidOrExpiredTokenError):
            await use_case.execute(VerifyEmailRequest(token=""))


class TestResendEmailVerificationUseCase:
    """Tests for ResendEmailVerificationUseCase."""

    @pytest.mark.asyncio
    async def test_resend_replaces_token(self, unit_env):
        """The old link should stop working once a new one is issued."""
        identity = await register_identity(unit_env)
        old_token = identity.email_verification_token
        resend = await unit_env.get(ResendEmailVerificationUseCase)
        verify = await unit_env.get(VerifyEmailUseCase)

        response = await resend.execute(
            ResendEmailVerificationRequest(email="asha@example.com")
        )

        assert response.message == RESEND_EMAIL_MESSAGE
        repository = await unit_env.get(IdentityRepository)
        new_token = (await repository.find_by_id(identity.id)).email_verification_token
        assert new_token != old_token

        email_gateway = await unit_env.get(EmailGateway)
        assert isinstance(email_gateway, MockEmailGateway)
        assert new_token in email_gateway.last_to("asha@example.com").body

        with pytest.raises(InvalidOrExpiredTokenError):
            await verify.execute(VerifyEmailRequest(token=old_token))
        assert (
            await verify.execute(VerifyEmailRequest(token=new_token))
        ).email_verified is True

    @pytest.mark.asyncio
    async def test_unknown_email_gets_same_answer(self, unit_env):
        """Unknown emails should not be revealed and nothing is sent."""
        resend = await unit_env.get(ResendEmailVerificationUseCase)
        email_gateway = await unit_env.get(EmailGateway)

        response = await resend.execute(
            ResendEmailVerificationRequest(email="nobody@example.com")
        )

        assert response.message == RESEND_EMAIL_MESSAGE
        assert email_gateway.sent == []

    @pytest.mark.asyncio
    async def test_gateway_failure_does_not_raise(self, unit_env):
        """A failed resend should still answer generically."""
        await register_identity(unit_env)
        email_gateway = await unit_env.get(EmailGateway)
        email_gateway.fail = True
        resend = await unit_env.get(ResendEmailVerificationUseCase)

        response = await resend.execute(
            ResendEmailVerificationRequest(email="asha@example.com")
        )

        assert response.message == RESEND_EMAIL_MESSAGE
