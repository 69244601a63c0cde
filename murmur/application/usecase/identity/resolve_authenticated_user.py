"""Resolve authenticated user use case."""

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


class ResolveAuthenticatedUserRequest(BaseModel):
    """Resolve authenticated user request."""

    app_key: str
    auth_type: AuthType  # social or external
    token: str = Field(min_length=1)
    origin: str  # Hostname of the embedding page


class ResolveAuthenticatedUserResponse(BaseModel):
    """Resolve authenticated user response."""

    user_id: str
    is_new: bool
    session_token: str


class ResolveAuthenticatedUserUseCase:
    """Use case for signing in a social or external user."""

    def __init__(
        self,
        application_service: ApplicationService,
        token_verifier: TokenVerifier,
        identity_resolver: IdentityResolver,
        user_service: UserService,
        session_service: SessionService,
        settings: Settings,
    ) -> None:
        """Initialize resolve authenticated user use case.

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

    async def execute(
        self, request: ResolveAuthenticatedUserRequest
    ) -> ResolveAuthenticatedUserResponse:
        """Execute the sign-in flow.

        Steps:
        1. Look up the application and check the origin
        2. Verify the identity token against the app's auth config
        3. Find or create the user
        4. Issue a session token

        Args:
            request: Resolve request

        Returns:
            Resolved user ID, whether it was created, and a session token

        Raises:
            InvalidAppKeyError: If the app key is unknown
            OriginNotAllowedError: If the origin is not allowed
            SocialAuthDisabledError: If social sign-in is not enabled
            InvalidTokenError: If the token fails verification
            ValidationError: If auth_type is guest
        """
        with logfire.span(
            "resolve_authenticated_user",
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

            sync_profile = bool(
                request.auth_type is AuthType.EXTERNAL
                and application.external_auth
                and application.external_auth.user_sync
            )
            resolution = await self.identity_resolver.resolve_authenticated(
                application.id,
                request.auth_type,
                claims,
                raw_token=request.token,
                sync_profile=sync_profile,
            )

            user = await self.user_service.get_by_id(resolution.user_id)
            return ResolveAuthenticatedUserResponse(
                user_id=str(resolution.user_id),
                is_new=resolution.is_new,
                session_token=self.session_service.create_token(user),
            )
