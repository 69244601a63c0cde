"""In-memory comment repository for testing."""

from typing import Optional

from murmur.domain.model.comment import Comment
from murmur.domain.repository.comment import CommentRepository
from murmur.domain.value import ApplicationId, CommentId, CommentStatus, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_page(
        self,
        application_id: ApplicationId,
        owner_identifier: str,
        status: CommentStatus = CommentStatus.PUBLISHED,
    ) -> list[Comment]:
        """Find comments on a page, newest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.application_id == application_id
            and c.owner_identifier == owner_identifier
            and c.status == status
        ]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments

    async def find_by_author(self, author_id: UserId) -> list[Comment]:
        """Find comments by a specific author."""
        comments = [c for c in self._comments.values() if c.author_id == author_id]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def reassign_author(self, from_user_id: UserId, to_user_id: UserId) -> int:
        """Move every comment of one author to another."""
        moved = 0
        for comment_id, comment in list(self._comments.items()):
            if comment.author_id == from_user_id:
                self._comments[comment_id] = comment.model_copy(
                    update={"author_id": to_user_id}
                )
                moved += 1
        return moved
