"""Google Sign-In adapter."""

from .client import (
    GoogleIdentityVerifier,
    MockGoogleIdentityVerifier,
    RealGoogleIdentityVerifier,
)

__all__ = [
    "GoogleIdentityVerifier",
    "MockGoogleIdentityVerifier",
    "RealGoogleIdentityVerifier",
]
