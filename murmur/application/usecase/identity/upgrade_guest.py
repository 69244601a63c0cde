"""Upgrade guest use case."""

import logfire
from pydantic import BaseModel, Field

from murmur.config import Settings
from murmur.domain.service import (
    ApplicationService,
    IdentityResolver,
    SessionService,
    TokenVerifier,
    UserService,
)
from murmur.domain.value import AuthType

from .verification import verify_identity_token


class UpgradeGuestRequest(BaseModel):
    """Upgrade guest request."""

    app_key: str
    session_id: str = Field(min_length=1, max_length=255)
    auth_type: AuthType
    token: str = Field(min_length=1)
    origin: str


class UpgradeGuestResponse(BaseModel):
    """Upgrade guest response."""

    user_id: str
    merged: bool
    session_token: str


class UpgradeGuestUseCase:
    """Use case for attaching a verified identity to a guest session."""

    def __init__(
        self,
        application_service: ApplicationService,
        token_verifier: TokenVerifier,
        identity_resolver: IdentityResolver,
        user_service: UserService,
        session_service: SessionService,
        settings: Settings,
    ) -> None:
        """Initialize upgrade guest use case.

        Args:
            application_service: Application lookup and origin gating
            token_verifier: Identity token verifier
            identity_resolver: Identity reconciliation service
            user_service: User domain service
            session_service: Session token service
            settings: Application settings
        """
        self.application_service = application_service
        self.token_verifier = token_verifier
        self.identity_resolver = identity_resolver
        self.user_service = user_service
        self.session_service = session_service
        self.settings = settings

    async def execute(self, request: UpgradeGuestRequest) -> UpgradeGuestResponse:
        """Execute the guest upgrade flow.

        The token is verified before the guest is touched, so a bad token
        leaves the guest row and its comments unchanged.

        Args:
            request: Upgrade request

        Returns:
            Surviving user ID, whether a merge happened, and a session token

        Raises:
            InvalidAppKeyError: If the app key is unknown
            OriginNotAllowedError: If the origin is not allowed
            SocialAuthDisabledError: If social sign-in is not enabled
            InvalidTokenError: If the token fails verification
            GuestNotFoundError: If the session has no guest user
        """
        with logfire.span(
            "upgrade_guest",
            app_key=request.app_key,
            auth_type=request.auth_type.value,
        ):
            application = await self.application_service.get_authorized(
                request.app_key, request.origin
            )
            claims = await verify_identity_token(
                self.token_verifier,
                application,
                request.auth_type,
                request.token,
                self.settings.auth.firebase_issuer_prefix,
            )

            outcome = await self.identity_resolver.upgrade_guest(
                application.id,
                request.session_id,
                request.auth_type,
                claims,
                raw_token=request.token,
            )

            user = await self.user_service.get_by_id(outcome.user_id)
            return UpgradeGuestResponse(
                user_id=str(outcome.user_id),
                merged=outcome.merged,
                session_token=self.session_service.create_token(user),
            )
