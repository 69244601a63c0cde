"""Token-provider (Firebase) infrastructure providers."""

from dishka import Scope, provide

from murmur.adapter.firebase import FirebaseKeySource, RealFirebaseKeySource
from murmur.config import Settings
from murmur.util.di.base import ProviderBase


class FirebaseProvider(ProviderBase):
    """Firebase component base."""

    __mock_component__ = "firebase"


class ProdFirebaseProvider(FirebaseProvider):
    """Production Firebase provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_key_source(self, settings: Settings) -> FirebaseKeySource:
        """Provide the JWKS-backed signing key source.

        APP-scoped so fetched keys are cached across requests.
        """
        return RealFirebaseKeySource(jwks_url=settings.auth.firebase_jwks_url)
