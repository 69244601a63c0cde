"""Resolve guest user use case."""

from pydantic import BaseModel, Field

from murmur.domain.service import (
    ApplicationService,
    IdentityResolver,
    SessionService,
    UserService,
)


class ResolveGuestUserRequest(BaseModel):
    """Resolve guest user request."""

    app_key: str
    session_id: str = Field(min_length=1, max_length=255)
    origin: str
    ip_address: str | None = None


class ResolveGuestUserResponse(BaseModel):
    """Resolve guest user response."""

    user_id: str
    is_new: bool
    session_token: str


class ResolveGuestUserUseCase:
    """Use case for identifying an anonymous browser session."""

    def __init__(
        self,
        application_service: ApplicationService,
        identity_resolver: IdentityResolver,
        user_service: UserService,
        session_service: SessionService,
    ) -> None:
        self.application_service = application_service
        self.identity_resolver = identity_resolver
        self.user_service = user_service
        self.session_service = session_service

    async def execute(self, request: ResolveGuestUserRequest) -> ResolveGuestUserResponse:
        """Find or create the guest user for a session.

        Raises:
            InvalidAppKeyError: If the app key is unknown
            OriginNotAllowedError: If the origin is not allowed
        """
        application = await self.application_service.get_authorized(
            request.app_key, request.origin
        )
        resolution = await self.identity_resolver.resolve_guest(
            application.id, request.session_id, ip_address=request.ip_address
        )
        user = await self.user_service.get_by_id(resolution.user_id)
        return ResolveGuestUserResponse(
            user_id=str(resolution.user_id),
            is_new=resolution.is_new,
            session_token=self.session_service.create_token(user),
        )
