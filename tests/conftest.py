"""Test configuration and fixtures."""

import os

import logfire
from dishka import AsyncContainer

from estate.application.usecase.auth import RegisterUseCase
from estate.application.usecase.auth.register import RegisterRequest
from estate.domain.model import Identity
from estate.domain.repository import IdentityRepository
from estate.domain.value import Email

# Cheap bcrypt and a fixed secret for every container built in tests
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret")
os.environ.setdefault("ENVIRONMENT", "test")

logfire.configure(send_to_logfire=False, console=False)


async def register_identity(
    container: AsyncContainer,
    email: str = "asha@example.com",
    password: str = "Secret123",
    phone: str = "+919810012345",
    is_seller: bool = False,
    **extra,
) -> Identity:
    """Register through the use case and return the stored identity.

    The stored record carries the outstanding verification artifacts,
    which tests use in place of reading the delivered messages.
    """
    register_use_case = await container.get(RegisterUseCase)
    await register_use_case.execute(
        RegisterRequest(
            name="Asha",
            email=email,
            password=password,
            phone=phone,
            is_seller=is_seller,
            **extra,
        )
    )
    repository = await container.get(IdentityRepository)
    identity = await repository.find_by_email(Email(email))
    assert identity is not None
    return identity
