"""User domain service."""

import logfire

from murmur.domain.error import NotFoundError
from murmur.domain.model import User
from murmur.domain.repository import UserRepository
from murmur.domain.value import ApplicationId, AuthType, UserId

from .base import Service


class UserService(Service):
    """Domain service for user reads and counters."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def find_by_ids(self, user_ids: set[UserId]) -> dict[UserId, User]:
        """Get several users by ID, skipping missing ones.

        Args:
            user_ids: User IDs

        Returns:
            Map of ID to user
        """
        users: dict[UserId, User] = {}
        for user_id in user_ids:
            user = await self.user_repository.find_by_id(user_id)
            if user:
                users[user_id] = user
        return users

    async def get_by_social_uid(
        self, application_id: ApplicationId, provider_uid: str
    ) -> User | None:
        """Get a social user by token-provider uid.

        Args:
            application_id: Owning application
            provider_uid: Provider user ID

        Returns:
            User if found, None otherwise
        """
        with logfire.span(
            "user_service.get_by_social_uid",
            application_id=str(application_id),
            provider_uid=provider_uid,
        ):
            return await self.user_repository.find_by_natural_key(
                application_id, AuthType.SOCIAL, provider_uid
            )

    async def increment_comments_count(self, user_id: UserId) -> None:
        """Atomically add one to a user's comment count.

        Args:
            user_id: User ID
        """
        with logfire.span(
            "user_service.increment_comments_count", user_id=str(user_id)
        ):
            await self.user_repository.add_stats(user_id, comments_count=1)
