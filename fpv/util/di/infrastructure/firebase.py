"""Firebase infrastructure providers."""

from dishka import Scope, provide

from fpv.adapter.firebase import RealFirebaseIdentityVerifier
from fpv.config import Settings
from fpv.domain.service import IdentityVerifier
from fpv.util.di.base import ProviderBase
from fpv.util.error import ConfigurationError
from fpv.util.observability import instrument_httpx

# Placeholder project ID shipped in the default settings
UNSET_PROJECT_ID = "CHANGE_ME_IN_PRODUCTION"


class FirebaseProvider(ProviderBase):
    """Firebase component base."""

    __mock_component__ = "firebase"


class ProdFirebaseProvider(FirebaseProvider):
    """Production Firebase provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_verifier(self, settings: Settings) -> IdentityVerifier:
        """Provide Firebase ID token verifier.

        APP-scoped so the fetched signing keys are shared across requests.

        Raises:
            ConfigurationError: If no Firebase project is configured outside
                development and test
        """
        if settings.firebase.project_id == UNSET_PROJECT_ID and (
            settings.environment in ("staging", "production")
        ):
            raise ConfigurationError(
                "FIREBASE__PROJECT_ID must be set in staging and production"
            )

        instrument_httpx()
        return RealFirebaseIdentityVerifier(settings=settings.firebase)
