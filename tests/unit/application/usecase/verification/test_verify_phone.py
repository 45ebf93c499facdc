"""Unit tests for phone verification use cases."""

from uuid import uuid4

import pytest

from estate.application.usecase.verification import (
    ResendPhoneOtpUseCase,
    VerifyPhoneUseCase,
)
from estate.application.usecase.verification.resend_phone_otp import (
    RESEND_OTP_MESSAGE,
    ResendPhoneOtpRequest,
)
from estate.application.usecase.verification.verify_phone import VerifyPhoneRequest
from estate.domain.error import InvalidOtpError, NotFoundError
from estate.domain.model import Identity
from estate.domain.repository import IdentityRepository
from estate.domain.service import SmsGateway
from estate.domain.value import Email, IdentityId
from tests.conftest import register_identity
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestVerifyPhoneUseCase:
    """Tests for VerifyPhoneUseCase."""

    @pytest.mark.asyncio
    async def test_verify_sets_flag_and_issues_session(self, unit_env):
        """The right code should verify the phone and return a session."""
        identity = await register_identity(unit_env)
        use_case = await unit_env.get(VerifyPhoneUseCase)

        response = await use_case.execute(
            VerifyPhoneRequest(email="asha@example.com", otp=identity.phone_otp)
        )

        assert response.message == "Phone verified successfully"
        assert response.phone_verified is True
        assert response.email_verified is False
        assert response.token

        repository = await unit_env.get(IdentityRepository)
        stored = await repository.find_by_id(identity.id)
        assert stored.phone_verified is True
        assert stored.phone_otp is None

    @pytest.mark.asyncio
    async def test_code_must_match_exactly(self, unit_env):
        """A code with surrounding whitespace should not match."""
        identity = await register_identity(unit_env)
        use_case = await unit_env.get(VerifyPhoneUseCase)

        with pytest.raises(InvalidOtpError):
            await use_case.execute(
                VerifyPhoneRequest(
                    email="asha@example.com", otp=f" {identity.phone_otp} "
                )
            )

        repository = await unit_env.get(IdentityRepository)
        stored = await repository.find_by_id(identity.id)
        assert stored.phone_verified is False
        assert stored.phone_otp == identity.phone_otp

    @pytest.mark.asyncio
    async def test_verification_is_committed(self, unit_env):
        """The flag flip should be committed before the session is returned."""
        identity = await register_identity(unit_env)
        repository = await unit_env.get(IdentityRepository)
        commits = repository.commits
        use_case = await unit_env.get(VerifyPhoneUseCase)

        with pytest.raises(InvalidOtpError):
            await use_case.execute(
                VerifyPhoneRequest(email="asha@example.com", otp="not-it")
            )
        assert repository.commits == commits

        await use_case.execute(
            VerifyPhoneRequest(email="asha@example.com", otp=identity.phone_otp)
        )
        assert repository.commits == commits + 1

    @pytest.mark.asyncio
    async def test_wrong_code_rejected_and_kept(self, unit_env):
        """A wrong code should fail without clearing the outstanding one."""
        identity = await register_identity(unit_env)
        use_case = await unit_env.get(VerifyPhoneUseCase)
        wrong = "000000" if identity.phone_otp != "000000" else "111111"

        with pytest.raises(InvalidOtpError):
            await use_case.execute(
                VerifyPhoneRequest(email="asha@example.com", otp=wrong)
            )

        response = await use_case.execute(
            VerifyPhoneRequest(email="asha@example.com", otp=identity.phone_otp)
        )
        assert response.phone_verified is True

    @pytest.mark.asyncio
    async def test_code_is_single_use(self, unit_env):
        """Reusing a consumed code should fail."""
        identity = await register_identity(unit_env)
        use_case = await unit_env.get(VerifyPhoneUseCase)
        request = VerifyPhoneRequest(email="asha@example.com", otp=identity.phone_otp)
        await use_case.execute(request)

        with pytest.raises(InvalidOtpError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_code_bound_to_its_identity(self, unit_env):
        """One identity's code should not verify another identity."""
        first = await register_identity(unit_env, email="a@example.com")
        await register_identity(unit_env, email="b@example.com", phone="+919810099999")
        use_case = await unit_env.get(VerifyPhoneUseCase)
        repository = await unit_env.get(IdentityRepository)
        second = await repository.find_by_email(Email("b@example.com"))
        if second.phone_otp == first.phone_otp:
            pytest.skip("Codes collided")

        with pytest.raises(InvalidOtpError):
            await use_case.execute(
                VerifyPhoneRequest(email="b@example.com", otp=first.phone_otp)
            )

    @pytest.mark.asyncio
    async def test_unknown_email(self, unit_env):
        """An unknown email should raise NotFoundError."""
        use_case = await unit_env.get(VerifyPhoneUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                VerifyPhoneRequest(email="nobody@example.com", otp="123456")
            )


class TestResendPhoneOtpUseCase:
    """Tests for ResendPhoneOtpUseCase."""

    @pytest.mark.asyncio
    async def test_resend_replaces_code(self, unit_env):
        """The old code should stop working once a new one is issued."""
        identity = await register_identity(unit_env)
        resend = await unit_env.get(ResendPhoneOtpUseCase)
        verify = await unit_env.get(VerifyPhoneUseCase)
        repository = await unit_env.get(IdentityRepository)

        response = await resend.execute(ResendPhoneOtpRequest(email="asha@example.com"))

        assert response.message == RESEND_OTP_MESSAGE
        new_otp = (await repository.find_by_id(identity.id)).phone_otp
        sms_gateway = await unit_env.get(SmsGateway)
        assert sms_gateway.last_to("+919810012345").body.endswith(new_otp)

        if new_otp != identity.phone_otp:
            with pytest.raises(InvalidOtpError):
                await verify.execute(
                    VerifyPhoneRequest(email="asha@example.com", otp=identity.phone_otp)
                )
        assert (
            await verify.execute(
                VerifyPhoneRequest(email="asha@example.com", otp=new_otp)
            )
        ).phone_verified is True

    @pytest.mark.asyncio
    async def test_unknown_email_gets_same_answer(self, unit_env):
        """Unknown emails should not be revealed."""
        resend = await unit_env.get(ResendPhoneOtpUseCase)
        sms_gateway = await unit_env.get(SmsGateway)

        response = await resend.execute(ResendPhoneOtpRequest(email="nobody@example.com"))

        assert response.message == RESEND_OTP_MESSAGE
        assert sms_gateway.sent == []

    @pytest.mark.asyncio
    async def test_identity_without_phone(self, unit_env):
        """A federated identity with no phone gets the generic answer and no code."""
        repository = await unit_env.get(IdentityRepository)
        await repository.create(
            Identity(
                id=IdentityId(uuid4()),
                name="G",
                email=Email("g@example.com"),
                federated_id="google-sub",
            )
        )
        resend = await unit_env.get(ResendPhoneOtpUseCase)
        sms_gateway = await unit_env.get(SmsGateway)

        response = await resend.execute(ResendPhoneOtpRequest(email="g@example.com"))

        assert response.message == RESEND_OTP_MESSAGE
        assert sms_gateway.sent == []
        stored = await repository.find_by_email(Email("g@example.com"))
        assert stored.phone_otp is None
