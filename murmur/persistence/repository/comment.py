"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import desc, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.domain.model import Comment
from murmur.domain.repository import CommentRepository
from murmur.domain.value import ApplicationId, CommentId, CommentStatus, UserId
from murmur.persistence.mappers import comment_to_dict, row_to_comment
from murmur.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_page(
        self,
        application_id: ApplicationId,
        owner_identifier: str,
        status: CommentStatus = CommentStatus.PUBLISHED,
    ) -> List[Comment]:
        """Find comments on a page, newest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.application_id == application_id)
            .where(comments_table.c.owner_identifier == owner_identifier)
            .where(comments_table.c.status == status.value)
            .order_by(desc(comments_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_by_author(self, author_id: UserId) -> List[Comment]:
        """Find all comments by an author."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.author_id == author_id)
            .order_by(desc(comments_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (upsert on id)."""
        values = comment_to_dict(comment)
        stmt = insert(comments_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[comments_table.c.id],
            set_={
                "body": values["body"],
                "status": values["status"],
                "edited_at": values["edited_at"],
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def reassign_author(self, from_user_id: UserId, to_user_id: UserId) -> int:
        """Bulk-move comments from one author to another."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.author_id == from_user_id)
            .values(author_id=to_user_id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
