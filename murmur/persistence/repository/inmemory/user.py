"""In-memory user repository for testing."""

from typing import Optional

from murmur.domain.model.user import User
from murmur.domain.repository.user import UserRepository
from murmur.domain.value import ApplicationId, AuthType, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Enforces natural-key uniqueness like the database constraint does.
    Row locks are a no-op: tests run on a single event loop.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    def _key(self, user: User) -> tuple[ApplicationId, AuthType, str]:
        return (user.application_id, user.auth_type, user.natural_key)

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_natural_key(
        self,
        application_id: ApplicationId,
        auth_type: AuthType,
        natural_key: str,
        for_update: bool = False,
    ) -> Optional[User]:
        """Find a user by natural key."""
        wanted = (application_id, auth_type, natural_key)
        for user in self._users.values():
            if self._key(user) == wanted:
                return user
        return None

    async def find_by_email(
        self, application_id: ApplicationId, email: str
    ) -> list[User]:
        """Find all users of an application with this email."""
        users = [
            u
            for u in self._users.values()
            if u.application_id == application_id and u.email == email
        ]
        users.sort(key=lambda u: u.created_at)
        return users

    async def insert_if_absent(self, user: User) -> tuple[User, bool]:
        """Insert unless the natural key is taken."""
        existing = await self.find_by_natural_key(
            user.application_id, user.auth_type, user.natural_key
        )
        if existing:
            return existing, False
        self._users[user.id] = user
        return user, True

    async def save(self, user: User) -> User:
        """Update a user, keeping the stored counters."""
        for other in self._users.values():
            if other.id != user.id and self._key(other) == self._key(user):
                raise ValueError("Natural key already taken by another user")

        stored = self._users.get(user.id)
        if stored:
            user = user.model_copy(
                update={
                    "reputation": stored.reputation,
                    "comments_count": stored.comments_count,
                }
            )
        self._users[user.id] = user
        return user

    async def add_stats(
        self, user_id: UserId, comments_count: int = 0, reputation: int = 0
    ) -> None:
        """Add to a user's counters."""
        user = self._users.get(user_id)
        if user:
            self._users[user_id] = user.model_copy(
                update={
                    "comments_count": user.comments_count + comments_count,
                    "reputation": user.reputation + reputation,
                }
            )

    async def delete(self, user_id: UserId) -> None:
        """Delete a user."""
        self._users.pop(user_id, None)

    async def count_by_application(self, application_id: ApplicationId) -> int:
        """Count users of an application."""
        return sum(1 for u in self._users.values() if u.application_id == application_id)
