"""Domain model entities for Murmur."""

from murmur.domain.model.application import (
    Application,
    ExternalAuthConfig,
    FirebaseConfig,
    SocialAuthConfig,
)
from murmur.domain.model.comment import Comment
from murmur.domain.model.user import (
    AuthPayload,
    ExternalAuth,
    GuestAuth,
    SocialAuth,
    User,
)

__all__ = [
    "Application",
    "ExternalAuthConfig",
    "FirebaseConfig",
    "SocialAuthConfig",
    "User",
    "AuthPayload",
    "ExternalAuth",
    "SocialAuth",
    "GuestAuth",
    "Comment",
]
