"""Get social user use case."""

from datetime import datetime

from pydantic import BaseModel

from murmur.domain.error import NotFoundError
from murmur.domain.model import SocialAuth
from murmur.domain.service import ApplicationService, UserService


class GetSocialUserRequest(BaseModel):
    """Get social user request."""

    app_key: str
    provider_uid: str


class GetSocialUserResponse(BaseModel):
    """Public profile of a social user."""

    user_id: str
    display_name: str
    avatar_url: str | None
    provider_name: str
    reputation: int
    comments_count: int
    created_at: datetime


class GetSocialUserUseCase:
    """Use case for looking up a social user by token-provider uid."""

    def __init__(
        self, application_service: ApplicationService, user_service: UserService
    ) -> None:
        """Initialize get social user use case.

        Args:
            application_service: Application domain service
            user_service: User domain service
        """
        self.application_service = application_service
        self.user_service = user_service

    async def execute(self, request: GetSocialUserRequest) -> GetSocialUserResponse:
        """Execute the lookup.

        Args:
            request: App key and provider uid

        Returns:
            Public profile (email and tokens are never included)

        Raises:
            InvalidAppKeyError: If the app key is unknown
            NotFoundError: If no social user has this uid
        """
        application = await self.application_service.get_by_app_key(request.app_key)
        user = await self.user_service.get_by_social_uid(
            application.id, request.provider_uid
        )
        if not user or not isinstance(user.auth, SocialAuth):
            raise NotFoundError("User", request.provider_uid)

        return GetSocialUserResponse(
            user_id=str(user.id),
            display_name=user.display_name,
            avatar_url=user.avatar_url,
            provider_name=user.auth.provider_name,
            reputation=user.reputation,
            comments_count=user.comments_count,
            created_at=user.created_at,
        )
