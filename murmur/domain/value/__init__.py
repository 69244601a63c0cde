"""Domain value objects for Murmur."""

from murmur.domain.value.identifiers import ApplicationId, CommentId, UserId
from murmur.domain.value.types import (
    ANONYMOUS_DISPLAY_NAME,
    AppKey,
    AuthType,
    ClaimSet,
    CommentStatus,
    DomainPattern,
)

__all__ = [
    # Identifiers
    "ApplicationId",
    "UserId",
    "CommentId",
    # Types
    "ANONYMOUS_DISPLAY_NAME",
    "AppKey",
    "AuthType",
    "ClaimSet",
    "CommentStatus",
    "DomainPattern",
]
