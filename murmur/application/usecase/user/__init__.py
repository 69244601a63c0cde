"""User use cases."""

from .get_social_user import (
    GetSocialUserRequest,
    GetSocialUserResponse,
    GetSocialUserUseCase,
)

__all__ = [
    "GetSocialUserRequest",
    "GetSocialUserResponse",
    "GetSocialUserUseCase",
]
