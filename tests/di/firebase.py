"""Mock Firebase providers for testing."""

from dishka import Scope, provide

from fpv.adapter.firebase import MockFirebaseIdentityVerifier
from fpv.domain.service import IdentityVerifier
from fpv.util.di.infrastructure.firebase import FirebaseProvider


class MockFirebaseProvider(FirebaseProvider):
    """Mock Firebase provider accepting `test-token:<uid>` tokens."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_identity_verifier(self) -> IdentityVerifier:
        """Provide mock ID token verifier."""
        return MockFirebaseIdentityVerifier()
