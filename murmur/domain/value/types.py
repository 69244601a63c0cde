"""Domain value objects for Murmur.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from datetime import datetime
from enum import Enum

from pydantic import field_validator

from murmur.domain.value.common import RootValueObject, ValueObject

ANONYMOUS_DISPLAY_NAME = "Anonymous"


class AuthType(str, Enum):
    """How a user proved who they are."""

    EXTERNAL = "external"  # Embedding site's own auth (WordPress, NextAuth, ...)
    SOCIAL = "social"  # Token provider sign-in (Google, GitHub, ...)
    GUEST = "guest"  # Anonymous browser session

    @property
    def is_authenticated(self) -> bool:
        """Whether this auth type carries verified claims."""
        return self is not AuthType.GUEST


class CommentStatus(str, Enum):
    """Moderation status of a comment."""

    PUBLISHED = "published"
    PENDING = "pending"
    HIDDEN = "hidden"
    DELETED = "deleted"


class AppKey(RootValueObject[str]):
    """Public application key embedded in client pages."""

    @field_validator("root")
    @classmethod
    def validate_app_key(cls, v: str) -> str:
        """Validate key is non-empty, bounded and has no whitespace."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("App key must be 1-255 characters")
        if any(c.isspace() for c in v):
            raise ValueError("App key must not contain whitespace")
        return v


class DomainPattern(RootValueObject[str]):
    """Entry of an application's embedding allowlist.

    One of:
    - ``*``: any origin
    - ``*.suffix``: ``suffix`` or any subdomain of it
    - an exact hostname
    """

    @field_validator("root")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Validate the pattern shape."""
        if not v or any(c.isspace() for c in v):
            raise ValueError("Domain pattern must be non-empty without whitespace")
        if v == "*":
            return v
        if v.startswith("*."):
            suffix = v[2:]
            if not suffix or "*" in suffix or suffix.startswith("."):
                raise ValueError(f"Invalid wildcard domain pattern: {v}")
            return v
        if "*" in v:
            raise ValueError(f"Wildcard only allowed as leading '*.': {v}")
        return v

    @property
    def is_any(self) -> bool:
        return self.root == "*"

    @property
    def wildcard_suffix(self) -> str | None:
        """Suffix of a ``*.suffix`` pattern, without the leading dot."""
        if self.root.startswith("*."):
            return self.root[2:]
        return None


class ClaimSet(ValueObject):
    """Normalized identity claims extracted from a verified token.

    Provider-specific claim names (``sub``/``user_id``, ``picture``, ...)
    are mapped onto these fields by the token verifier.
    """

    provider_uid: str  # Natural key: Firebase uid or external system id
    provider_name: str  # "google.com", "github.com", "wordpress", ...
    email: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None
    role: str | None = None  # External systems only
    expires_at: datetime | None = None
    signature_verified: bool = False

    def resolve_display_name(self, fallback: str = ANONYMOUS_DISPLAY_NAME) -> str:
        """Pick a display name: provider name, email local part, then fallback."""
        if self.display_name:
            return self.display_name
        if self.email:
            local_part = self.email.split("@", 1)[0]
            if local_part:
                return local_part
        return fallback
