"""Application (tenant) entity.

Applications are created by the admin flow; this service only reads them.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from murmur.domain.model.common import DomainModel
from murmur.domain.value import AppKey, ApplicationId, DomainPattern


class ExternalAuthConfig(DomainModel):
    """How tokens from the embedding site's own auth system are trusted."""

    require_signed_token: bool = False
    shared_secret: Optional[str] = None  # HS256 secret, never exposed
    expected_issuer: Optional[str] = None
    user_sync: bool = False  # Refresh profile fields from claims on each visit


class FirebaseConfig(DomainModel):
    """Public web config of the application's token provider project."""

    project_id: str
    api_key: str  # Public browser key
    auth_domain: str


class SocialAuthConfig(DomainModel):
    """Social sign-in opt-in and provider list."""

    enabled: bool = False
    providers: list[str] = Field(default_factory=list)  # ["google", "github"]
    firebase_config: Optional[FirebaseConfig] = None

    def allows_provider(self, sign_in_provider: str) -> bool:
        """Whether a token's sign-in provider is enabled for this app.

        Token providers report ``google.com`` while apps list ``google``.
        An empty list allows every provider.
        """
        if not self.providers:
            return True
        short_name = sign_in_provider.split(".", 1)[0]
        return sign_in_provider in self.providers or short_name in self.providers


class Application(DomainModel):
    """A tenant of the widget, identified by its public app key."""

    id: ApplicationId
    app_key: AppKey
    name: str = Field(min_length=1, max_length=255)
    allowed_domains: list[DomainPattern] = Field(default_factory=list)
    social_auth: SocialAuthConfig = Field(default_factory=SocialAuthConfig)
    external_auth: Optional[ExternalAuthConfig] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def social_auth_enabled(self) -> bool:
        return self.social_auth.enabled
