"""Credential hashing domain service."""

import asyncio

import bcrypt
import logfire

# bcrypt ignores or rejects input past this many bytes
MAX_PASSWORD_BYTES = 72


def fits_bcrypt(password: str) -> bool:
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


class PasswordService:
    """One-way hashing and verification of passwords with bcrypt.

    bcrypt is CPU-bound, so both operations run in a worker thread and
    the calling request suspends until they finish.
    """

    def __init__(self, rounds: int = 10) -> None:
        """Initialize password service.

        Args:
            rounds: bcrypt cost factor
        """
        self.rounds = rounds

    async def hash(self, password: str) -> str:
        """Hash a password.

        Args:
            password: Plaintext password

        Returns:
            bcrypt hash string

        Raises:
            ValueError: If the password is longer than 72 bytes
        """
        if not fits_bcrypt(password):
            raise ValueError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
        return await asyncio.to_thread(self._hash_sync, password)

    async def verify(self, password: str, password_hash: str | None) -> bool:
        """Check a password against a stored hash.

        Args:
            password: Plaintext password
            password_hash: Stored hash, or None for identities without one

        Returns:
            True if the password matches
        """
        if not password_hash:
            return False
        if not fits_bcrypt(password):
            # No stored password can be this long
            return False
        return await asyncio.to_thread(self._verify_sync, password, password_hash)

    def _hash_sync(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def _verify_sync(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError as e:
            # Malformed stored hash
            logfire.error("Password verification failed", error=str(e))
            return False
