"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from murmur.domain.model.comment import Comment
from murmur.domain.value import ApplicationId, CommentId, CommentStatus, UserId


class CommentRepository(ABC):
    """Repository for Comment entities.

    Only the operations identity reconciliation and attribution need:
    listing a page, saving, and bulk author reassignment.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_page(
        self,
        application_id: ApplicationId,
        owner_identifier: str,
        status: CommentStatus = CommentStatus.PUBLISHED,
    ) -> List[Comment]:
        """Find comments on a page, newest first.

        Args:
            application_id: Owning application
            owner_identifier: The embedding page's logical id
            status: Only comments with this status

        Returns:
            List of comments ordered by created_at descending
        """
        pass

    @abstractmethod
    async def find_by_author(self, author_id: UserId) -> List[Comment]:
        """Find all comments by an author, any status.

        Args:
            author_id: The author's user ID

        Returns:
            List of comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def reassign_author(self, from_user_id: UserId, to_user_id: UserId) -> int:
        """Move every comment of one author to another.

        Safe to repeat: a second call finds nothing left to move.

        Args:
            from_user_id: Current author
            to_user_id: New author

        Returns:
            Number of comments moved
        """
        pass
