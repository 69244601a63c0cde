"""User aggregate root.

A user belongs to exactly one application and carries exactly one identity
payload, selected by ``auth.kind``. The payload is a discriminated union so
a user can never hold two identities at once.
"""

from datetime import datetime, timezone
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from murmur.domain.model.common import DomainModel
from murmur.domain.value import ApplicationId, AuthType, UserId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExternalAuth(DomainModel):
    """Identity vouched for by the embedding site."""

    kind: Literal["external"] = "external"
    system_id: str = Field(min_length=1, max_length=255)  # e.g. "wp-123"
    system_type: Optional[str] = None  # "wordpress", "nextauth", "custom"
    role: Optional[str] = None
    last_seen_at: datetime = Field(default_factory=_utcnow)
    token_validated: bool = False  # Signature was checked against the app secret

    @property
    def natural_key(self) -> str:
        return self.system_id


class SocialAuth(DomainModel):
    """Identity from a social token provider."""

    kind: Literal["social"] = "social"
    provider_uid: str = Field(min_length=1, max_length=255)
    provider_name: str  # "google.com", "github.com", ...
    provider_email: Optional[str] = None
    last_sign_in_at: datetime = Field(default_factory=_utcnow)
    last_id_token: Optional[str] = None

    @property
    def natural_key(self) -> str:
        return self.provider_uid


class GuestAuth(DomainModel):
    """Anonymous browser session."""

    kind: Literal["guest"] = "guest"
    session_id: str = Field(min_length=1, max_length=255)
    email_verified: bool = False
    ip_address: Optional[str] = None  # For moderation

    @property
    def natural_key(self) -> str:
        return self.session_id


AuthPayload = Annotated[
    Union[ExternalAuth, SocialAuth, GuestAuth], Field(discriminator="kind")
]


class User(DomainModel):
    """User aggregate root, unique per (application, auth type, natural key)."""

    id: UserId
    application_id: ApplicationId
    display_name: str = Field(min_length=1, max_length=255)
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    auth: AuthPayload
    reputation: int = Field(default=0, ge=0)
    comments_count: int = Field(default=0, ge=0)
    is_banned: bool = False
    is_active: bool = True
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def auth_type(self) -> AuthType:
        return AuthType(self.auth.kind)

    @property
    def natural_key(self) -> str:
        return self.auth.natural_key

    @property
    def can_post(self) -> bool:
        return self.is_active and not self.is_banned
