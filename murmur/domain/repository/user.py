"""User repository interface (the User Store)."""

from abc import ABC, abstractmethod
from typing import Optional

from murmur.domain.model.user import User
from murmur.domain.value import ApplicationId, AuthType, UserId


class UserRepository(ABC):
    """Repository for the User aggregate.

    The store is the single source of truth for identity uniqueness: it must
    reject a second row with the same (application_id, auth_type,
    natural_key) and offer an atomic insert-if-absent.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_natural_key(
        self,
        application_id: ApplicationId,
        auth_type: AuthType,
        natural_key: str,
        for_update: bool = False,
    ) -> Optional[User]:
        """Find a user by their auth-type specific natural key.

        Args:
            application_id: Owning application
            auth_type: External, social or guest
            natural_key: System id, provider uid or session id
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(
        self, application_id: ApplicationId, email: str
    ) -> list[User]:
        """Find all users of an application sharing an email address.

        Args:
            application_id: Owning application
            email: Email address

        Returns:
            Matching users (may be empty)
        """
        pass

    @abstractmethod
    async def insert_if_absent(self, user: User) -> tuple[User, bool]:
        """Atomically insert a user unless its natural key is taken.

        Args:
            user: The user to insert

        Returns:
            (stored user, created). When the natural key already exists the
            existing row is returned with created=False.
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Update an existing user in place.

        Counters (reputation, comments_count) are not written; they only
        change through add_stats.

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def add_stats(
        self, user_id: UserId, comments_count: int = 0, reputation: int = 0
    ) -> None:
        """Atomically add to a user's counters.

        Args:
            user_id: The user's unique identifier
            comments_count: Amount added to comments_count
            reputation: Amount added to reputation
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> None:
        """Delete a user row.

        Args:
            user_id: The user to delete
        """
        pass

    @abstractmethod
    async def count_by_application(self, application_id: ApplicationId) -> int:
        """Count users belonging to an application.

        Args:
            application_id: Owning application

        Returns:
            Number of users
        """
        pass
