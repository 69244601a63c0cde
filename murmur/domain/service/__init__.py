"""Domain services."""

from .application_service import ApplicationService
from .base import Service
from .comment_service import CommentService
from .domain_validator import DomainValidator, is_origin_allowed, matches_pattern
from .identity_resolver import IdentityResolver, Resolution, UpgradeOutcome
from .session_service import SessionService
from .token_verifier import SigningKeySource, TokenContext, TokenVerifier
from .user_service import UserService

__all__ = [
    "ApplicationService",
    "CommentService",
    "DomainValidator",
    "IdentityResolver",
    "Resolution",
    "Service",
    "SessionService",
    "SigningKeySource",
    "TokenContext",
    "TokenVerifier",
    "UpgradeOutcome",
    "UserService",
    "is_origin_allowed",
    "matches_pattern",
]
