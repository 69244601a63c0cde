"""Application (tenant) use cases."""

from .get_social_config import (
    GetSocialConfigRequest,
    GetSocialConfigResponse,
    GetSocialConfigUseCase,
    SocialProviderConfig,
)

__all__ = [
    "GetSocialConfigRequest",
    "GetSocialConfigResponse",
    "GetSocialConfigUseCase",
    "SocialProviderConfig",
]
