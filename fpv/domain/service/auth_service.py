"""Authentication domain service.

Bearer credentials are verified by an external identity provider. The rest of
the core only ever sees the resulting VerifiedIdentity.
"""

from abc import ABC, abstractmethod

import logfire

from fpv.domain.error import AuthenticationError
from fpv.domain.value import VerifiedIdentity

from .base import Service


class IdentityVerifier(ABC):
    """Port for identity providers that validate bearer credentials."""

    @abstractmethod
    async def verify(self, token: str) -> VerifiedIdentity:
        """Verify a credential and return its identity claims.

        Args:
            token: Bearer credential from the client

        Returns:
            Verified identity

        Raises:
            AuthenticationError: If the credential is invalid or expired
        """
        pass


class AuthService(Service):
    """Domain service for credential verification."""

    def __init__(self, identity_verifier: IdentityVerifier) -> None:
        """Initialize auth service.

        Args:
            identity_verifier: Identity provider client
        """
        self.identity_verifier = identity_verifier

    async def verify_token(self, token: str | None) -> VerifiedIdentity:
        """Verify a bearer token.

        Args:
            token: Bearer token (may be missing)

        Returns:
            Verified identity

        Raises:
            AuthenticationError: If the token is missing, invalid or expired
        """
        with logfire.span("auth_service.verify_token"):
            if not token:
                raise AuthenticationError("Access token required")

            try:
                identity = await self.identity_verifier.verify(token)
            except AuthenticationError as e:
                logfire.warn("Token verification failed", error=str(e))
                raise

            logfire.info(
                "Token verified",
                external_id=identity.external_id,
                provider=identity.provider,
            )
            return identity
