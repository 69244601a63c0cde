"""Identity use cases."""

from .resolve_authenticated_user import (
    ResolveAuthenticatedUserRequest,
    ResolveAuthenticatedUserResponse,
    ResolveAuthenticatedUserUseCase,
)
from .resolve_guest_user import (
    ResolveGuestUserRequest,
    ResolveGuestUserResponse,
    ResolveGuestUserUseCase,
)
from .upgrade_guest import UpgradeGuestRequest, UpgradeGuestResponse, UpgradeGuestUseCase

__all__ = [
    "ResolveAuthenticatedUserRequest",
    "ResolveAuthenticatedUserResponse",
    "ResolveAuthenticatedUserUseCase",
    "ResolveGuestUserRequest",
    "ResolveGuestUserResponse",
    "ResolveGuestUserUseCase",
    "UpgradeGuestRequest",
    "UpgradeGuestResponse",
    "UpgradeGuestUseCase",
]
