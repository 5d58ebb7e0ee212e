"""Firebase identity adapter."""

from .verifier import (
    FirebaseIdentityVerifier,
    FirebaseKeyFetchError,
    FirebaseTokenError,
    MockFirebaseIdentityVerifier,
    RealFirebaseIdentityVerifier,
    identity_from_claims,
)

__all__ = [
    "FirebaseIdentityVerifier",
    "FirebaseKeyFetchError",
    "FirebaseTokenError",
    "MockFirebaseIdentityVerifier",
    "RealFirebaseIdentityVerifier",
    "identity_from_claims",
]
