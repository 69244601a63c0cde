"""Identity resolution routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Request
from pydantic import BaseModel, Field

from murmur.adapter.error import AdapterError
from murmur.application.usecase.identity import (
    ResolveAuthenticatedUserRequest,
    ResolveAuthenticatedUserResponse,
    ResolveAuthenticatedUserUseCase,
    ResolveGuestUserRequest,
    ResolveGuestUserResponse,
    ResolveGuestUserUseCase,
    UpgradeGuestRequest,
    UpgradeGuestResponse,
    UpgradeGuestUseCase,
)
from murmur.domain.error import DomainError
from murmur.domain.value import AuthType
from murmur.interface.api.origin import resolve_origin
from murmur.interface.error import http_error
from murmur.util.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/identity", tags=["identity"], route_class=DishkaRoute)


class AuthenticatedAPIRequest(BaseModel):
    """API request for signing in with an identity token."""

    app_key: str
    auth_type: AuthType
    token: str = Field(min_length=1)
    origin: str | None = None  # Falls back to the Origin header


class GuestAPIRequest(BaseModel):
    """API request for identifying a guest session."""

    app_key: str
    session_id: str = Field(min_length=1, max_length=255)
    origin: str | None = None


class UpgradeAPIRequest(BaseModel):
    """API request for upgrading a guest session."""

    app_key: str
    session_id: str = Field(min_length=1, max_length=255)
    auth_type: AuthType
    token: str = Field(min_length=1)
    origin: str | None = None


@router.post("/authenticated", response_model=ResolveAuthenticatedUserResponse)
async def resolve_authenticated_user(
    request: AuthenticatedAPIRequest,
    use_case: FromDishka[ResolveAuthenticatedUserUseCase],
    origin: str | None = Header(default=None),
) -> ResolveAuthenticatedUserResponse:
    """Find or create the user behind a social or external identity token.

    Example:
        POST /identity/authenticated
        {"app_key": "acme", "auth_type": "social", "token": "eyJ..."}

        Response:
        {"user_id": "...", "is_new": true, "session_token": "eyJ..."}
    """
    try:
        return await use_case.execute(
            ResolveAuthenticatedUserRequest(
                app_key=request.app_key,
                auth_type=request.auth_type,
                token=request.token,
                origin=resolve_origin(request.origin, origin),
            )
        )
    except (DomainError, AdapterError) as e:
        logger.warning(
            f"Authenticated resolution failed for app {request.app_key}: {e}"
        )
        raise http_error(e) from e


@router.post("/guest", response_model=ResolveGuestUserResponse)
async def resolve_guest_user(
    request: GuestAPIRequest,
    http_request: Request,
    use_case: FromDishka[ResolveGuestUserUseCase],
    origin: str | None = Header(default=None),
) -> ResolveGuestUserResponse:
    """Find or create the guest user for a browser session."""
    try:
        return await use_case.execute(
            ResolveGuestUserRequest(
                app_key=request.app_key,
                session_id=request.session_id,
                origin=resolve_origin(request.origin, origin),
                ip_address=http_request.client.host if http_request.client else None,
            )
        )
    except DomainError as e:
        logger.warning(f"Guest resolution failed for app {request.app_key}: {e}")
        raise http_error(e) from e


@router.post("/upgrade", response_model=UpgradeGuestResponse)
async def upgrade_guest(
    request: UpgradeAPIRequest,
    use_case: FromDishka[UpgradeGuestUseCase],
    origin: str | None = Header(default=None),
) -> UpgradeGuestResponse:
    """Attach a verified identity to a guest session.

    If the identity already has a user, the guest's comments and stats are
    merged into it and ``merged`` is true.
    """
    try:
        return await use_case.execute(
            UpgradeGuestRequest(
                app_key=request.app_key,
                session_id=request.session_id,
                auth_type=request.auth_type,
                token=request.token,
                origin=resolve_origin(request.origin, origin),
            )
        )
    except (DomainError, AdapterError) as e:
        logger.warning(f"Guest upgrade failed for app {request.app_key}: {e}")
        raise http_error(e) from e
