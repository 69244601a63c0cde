"""Comment domain service (attribution of comments to resolved users)."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from murmur.domain.error import NotFoundError, UserBannedError, ValidationError
from murmur.domain.model import Comment, User
from murmur.domain.repository import CommentRepository
from murmur.domain.value import ApplicationId, CommentId, CommentStatus

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        application_id: ApplicationId,
        owner_identifier: str,
        author: User,
        body: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a page, or a reply to another comment.

        Args:
            application_id: Owning application
            owner_identifier: The embedding page's logical id
            author: Resolved author
            body: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            UserBannedError: If the author may not post
            ValidationError: If the author belongs to another application
                or the parent is on another page
            NotFoundError: If the parent comment does not exist
        """
        with logfire.span(
            "comment_service.create_comment",
            application_id=str(application_id),
            owner_identifier=owner_identifier,
            author_id=str(author.id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            if author.application_id != application_id:
                raise ValidationError("User does not belong to this application")
            if not author.can_post:
                logfire.warn("Banned user tried to post", author_id=str(author.id))
                raise UserBannedError(str(author.id))

            depth = 0
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent or parent.status is CommentStatus.DELETED:
                    raise NotFoundError("Comment", str(parent_id))
                if (
                    parent.application_id != application_id
                    or parent.owner_identifier != owner_identifier
                ):
                    logfire.error(
                        "Parent comment on another page",
                        parent_id=str(parent_id),
                        parent_owner=parent.owner_identifier,
                        target_owner=owner_identifier,
                    )
                    raise ValidationError("Parent comment does not belong to this page")
                depth = parent.depth + 1

            comment = Comment(
                id=CommentId(uuid4()),
                application_id=application_id,
                owner_identifier=owner_identifier,
                author_id=author.id,
                body=body,
                parent_id=parent_id,
                depth=depth,
                status=CommentStatus.PUBLISHED,
                created_at=datetime.now(timezone.utc),
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                owner_identifier=owner_identifier,
                depth=depth,
            )
            return saved

    async def get_comments_for_page(
        self, application_id: ApplicationId, owner_identifier: str
    ) -> list[Comment]:
        """Get published comments on a page, newest first.

        Args:
            application_id: Owning application
            owner_identifier: The embedding page's logical id

        Returns:
            List of comments
        """
        with logfire.span(
            "comment_service.get_comments_for_page",
            application_id=str(application_id),
            owner_identifier=owner_identifier,
        ):
            comments = await self.comment_repository.find_by_page(
                application_id, owner_identifier, CommentStatus.PUBLISHED
            )
            logfire.info("Comments retrieved for page", count=len(comments))
            return comments
