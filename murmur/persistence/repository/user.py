"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.domain.model import User
from murmur.domain.repository import UserRepository
from murmur.domain.value import ApplicationId, AuthType, UserId
from murmur.persistence.mappers import row_to_user, user_to_dict
from murmur.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository.

    Uniqueness of (application_id, auth_type, natural_key) is enforced by
    the ``uq_users_natural_key`` constraint.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_natural_key(
        self,
        application_id: ApplicationId,
        auth_type: AuthType,
        natural_key: str,
        for_update: bool = False,
    ) -> Optional[User]:
        """Find a user by natural key, optionally taking a row lock."""
        stmt = (
            select(users_table)
            .where(users_table.c.application_id == application_id)
            .where(users_table.c.auth_type == auth_type.value)
            .where(users_table.c.natural_key == natural_key)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(
        self, application_id: ApplicationId, email: str
    ) -> list[User]:
        """Find all users of an application with this email."""
        stmt = (
            select(users_table)
            .where(users_table.c.application_id == application_id)
            .where(users_table.c.email == email)
            .order_by(users_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def insert_if_absent(self, user: User) -> tuple[User, bool]:
        """Insert unless the natural key exists; return the stored row.

        Uses ``INSERT ... ON CONFLICT DO NOTHING`` so concurrent resolutions
        of the same identity converge on a single row.
        """
        stmt = (
            insert(users_table)
            .values(**user_to_dict(user))
            .on_conflict_do_nothing(constraint="uq_users_natural_key")
            .returning(users_table.c.id)
        )
        result = await self.session.execute(stmt)
        inserted_id = result.scalar_one_or_none()
        await self.session.flush()

        if inserted_id is not None:
            return user, True

        existing = await self.find_by_natural_key(
            user.application_id, user.auth_type, user.natural_key
        )
        if existing is None:
            # Conflicting row was deleted between the insert and the read
            raise RuntimeError(
                f"User vanished after insert conflict: {user.auth_type.value}"
            )
        return existing, False

    async def save(self, user: User) -> User:
        """Update an existing user row.

        Counters are left out of the update so a concurrent ``add_stats``
        is never overwritten by a stale copy.
        """
        values = user_to_dict(user)
        for column in ("id", "created_at", "reputation", "comments_count"):
            values.pop(column)
        stmt = users_table.update().where(users_table.c.id == user.id).values(**values)
        await self.session.execute(stmt)
        await self.session.flush()
        return user

    async def add_stats(
        self, user_id: UserId, comments_count: int = 0, reputation: int = 0
    ) -> None:
        """Atomically add to a user's counters."""
        if not comments_count and not reputation:
            return
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(
                comments_count=users_table.c.comments_count + comments_count,
                reputation=users_table.c.reputation + reputation,
                updated_at=func.now(),
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete(self, user_id: UserId) -> None:
        """Delete a user row."""
        stmt = delete(users_table).where(users_table.c.id == user_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def count_by_application(self, application_id: ApplicationId) -> int:
        """Count users of an application."""
        stmt = (
            select(func.count())
            .select_from(users_table)
            .where(users_table.c.application_id == application_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
