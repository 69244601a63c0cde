"""Get comments use case."""

from datetime import datetime

from pydantic import BaseModel

from murmur.domain.service import ApplicationService, CommentService, UserService


class CommentAuthor(BaseModel):
    """Public author details shown next to a comment."""

    user_id: str
    display_name: str
    avatar_url: str | None


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    author: CommentAuthor | None  # None once the author row is gone
    body: str
    parent_id: str | None
    depth: int
    created_at: datetime
    edited_at: datetime | None


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    app_key: str
    owner_identifier: str


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    owner_identifier: str
    comments: list[CommentItem]
    total: int


class GetCommentsUseCase:
    """Use case for listing the comments on a page, newest first."""

    def __init__(
        self,
        application_service: ApplicationService,
        comment_service: CommentService,
        user_service: UserService,
    ) -> None:
        """Initialize get comments use case.

        Args:
            application_service: Application domain service
            comment_service: Comment domain service
            user_service: User service for author details
        """
        self.application_service = application_service
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Comments come back flat, with ``parent_id`` and ``depth`` for the
        client to build threads.

        Raises:
            InvalidAppKeyError: If the app key is unknown
        """
        application = await self.application_service.get_by_app_key(request.app_key)
        comments = await self.comment_service.get_comments_for_page(
            application.id, request.owner_identifier
        )
        authors = await self.user_service.find_by_ids({c.author_id for c in comments})

        items = []
        for comment in comments:
            author = authors.get(comment.author_id)
            items.append(
                CommentItem(
                    comment_id=str(comment.id),
                    author=(
                        CommentAuthor(
                            user_id=str(author.id),
                            display_name=author.display_name,
                            avatar_url=author.avatar_url,
                        )
                        if author
                        else None
                    ),
                    body=comment.body,
                    parent_id=str(comment.parent_id) if comment.parent_id else None,
                    depth=comment.depth,
                    created_at=comment.created_at,
                    edited_at=comment.edited_at,
                )
            )

        return GetCommentsResponse(
            owner_identifier=request.owner_identifier,
            comments=items,
            total=len(items),
        )
