"""Firebase ID token verification adapter."""

import asyncio
import logging
import time
from typing import Any

import httpx
import jwt

from fpv.adapter.error import ProviderError
from fpv.config import FirebaseSettings
from fpv.domain.error import AuthenticationError
from fpv.domain.service.auth_service import IdentityVerifier
from fpv.domain.value import AuthProvider, VerifiedIdentity

logger = logging.getLogger(__name__)

# Claims every Firebase ID token must carry
REQUIRED_CLAIMS = ["exp", "iat", "aud", "iss", "sub"]


class FirebaseTokenError(AuthenticationError):
    """The ID token is malformed, expired, or not signed for this project."""

    pass


class FirebaseKeyFetchError(ProviderError):
    """Google's signing keys could not be fetched."""

    pass


def identity_from_claims(claims: dict[str, Any]) -> VerifiedIdentity:
    """Build a verified identity from decoded ID token claims.

    Args:
        claims: Verified token claims

    Returns:
        Identity with the Firebase UID as external ID
    """
    email = claims.get("email") or None
    name = claims.get("name") or None
    if not name and email:
        name = email.split("@", 1)[0]

    firebase_claims = claims.get("firebase") or {}
    provider = firebase_claims.get("sign_in_provider") or AuthProvider.FIREBASE.value

    return VerifiedIdentity(
        external_id=claims["sub"],
        email=email,
        display_name=name,
        avatar_url=claims.get("picture") or None,
        provider=provider,
    )


class FirebaseIdentityVerifier(IdentityVerifier):
    """Firebase identity verifier base."""

    pass


class RealFirebaseIdentityVerifier(FirebaseIdentityVerifier):
    """Verify Firebase ID tokens against Google's published keys.

    Signature and claims are checked locally; the only network call is the
    key fetch, which is cached for `jwks_cache_seconds`. A token naming a key
    we haven't seen refreshes the cache early, at most once per
    `jwks_min_refetch_seconds`.
    """

    def __init__(self, settings: FirebaseSettings) -> None:
        """Initialize verifier.

        Args:
            settings: Firebase project and key endpoint settings
        """
        self.settings = settings
        self._keys: dict[str, jwt.PyJWK] = {}
        self._fetched_at: float | None = None
        self._lock = asyncio.Lock()

    def _cache_age(self) -> float | None:
        if self._fetched_at is None:
            return None
        return time.monotonic() - self._fetched_at

    def _needs_fetch(self, kid: str) -> bool:
        age = self._cache_age()
        if age is None or age >= self.settings.jwks_cache_seconds:
            return True
        if kid in self._keys:
            return False
        # Unknown kids refresh the keys at most once per minimum interval
        return age >= self.settings.jwks_min_refetch_seconds

    async def _fetch_keys(self) -> dict[str, jwt.PyJWK]:
        """Download the JWKS and index the keys by kid.

        Raises:
            FirebaseKeyFetchError: If the endpoint fails or returns no usable keys
        """
        try:
            async with httpx.AsyncClient(timeout=self.settings.http_timeout) as client:
                response = await client.get(self.settings.jwks_url)
                response.raise_for_status()
                jwks = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to fetch Firebase signing keys: {e}")
            raise FirebaseKeyFetchError(
                f"Failed to fetch Firebase signing keys: {e}"
            ) from e

        keys: dict[str, jwt.PyJWK] = {}
        for key_data in jwks.get("keys", []):
            kid = key_data.get("kid")
            if not kid:
                continue
            try:
                keys[kid] = jwt.PyJWK(key_data, algorithm="RS256")
            except jwt.PyJWKError as e:
                logger.warning(f"Skipping unusable signing key {kid}: {e}")

        if not keys:
            raise FirebaseKeyFetchError("Firebase JWKS contained no usable keys")

        logger.info(f"Fetched {len(keys)} Firebase signing keys")
        return keys

    async def _get_key(self, kid: str) -> jwt.PyJWK:
        async with self._lock:
            if self._needs_fetch(kid):
                self._keys = await self._fetch_keys()
                self._fetched_at = time.monotonic()

            key = self._keys.get(kid)

        if key is None:
            raise FirebaseTokenError("Token signed with an unknown key")
        return key

    async def verify(self, token: str) -> VerifiedIdentity:
        """Verify an ID token and return the identity it asserts.

        Raises:
            FirebaseTokenError: If the token is invalid or expired
            FirebaseKeyFetchError: If signing keys can't be fetched
        """
        try:
            header = jwt.get_unverified_header(token)
        except jwt.InvalidTokenError as e:
            raise FirebaseTokenError(f"Malformed token: {e}") from e

        if header.get("alg") != "RS256":
            raise FirebaseTokenError("Token must be signed with RS256")

        kid = header.get("kid")
        if not kid:
            raise FirebaseTokenError("Token header has no key ID")

        key = await self._get_key(kid)

        try:
            claims = jwt.decode(
                token,
                key.key,
                algorithms=["RS256"],
                audience=self.settings.project_id,
                issuer=self.settings.issuer,
                leeway=self.settings.clock_skew_seconds,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise FirebaseTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise FirebaseTokenError(f"Invalid token: {e}") from e

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise FirebaseTokenError("Token has an empty subject")

        return identity_from_claims(claims)


# Mock implementation for testing
class MockFirebaseIdentityVerifier(FirebaseIdentityVerifier):
    """Mock verifier for development and testing.

    Accepts tokens of the form `test-token:<uid>` and returns an identity
    with email `<uid>@example.com`. Everything else is rejected.
    """

    PREFIX = "test-token:"

    async def verify(self, token: str) -> VerifiedIdentity:
        """Verify a mock token."""
        if not token.startswith(self.PREFIX) or not token[len(self.PREFIX) :]:
            raise FirebaseTokenError("Invalid token")

        uid = token[len(self.PREFIX) :]
        return identity_from_claims(
            {
                "sub": uid,
                "email": f"{uid}@example.com",
                "name": f"Pilot {uid}",
                "firebase": {"sign_in_provider": AuthProvider.PASSWORD.value},
            }
        )
