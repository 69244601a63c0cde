"""Create comment use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from murmur.domain.error import InvalidTokenError
from murmur.domain.service import (
    ApplicationService,
    CommentService,
    SessionService,
    UserService,
)
from murmur.domain.value import CommentId, UserId
from murmur.util.jwt import JWTError


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    app_key: str
    origin: str
    session_token: str  # Issued by one of the identity use cases
    owner_identifier: str = Field(min_length=1, max_length=512)
    body: str = Field(min_length=1, max_length=10000)
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: str
    owner_identifier: str
    author_id: str
    body: str
    parent_id: str | None
    depth: int
    created_at: datetime


class CreateCommentUseCase:
    """Use case for posting a comment as a resolved user."""

    def __init__(
        self,
        application_service: ApplicationService,
        session_service: SessionService,
        user_service: UserService,
        comment_service: CommentService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            application_service: Application lookup and origin gating
            session_service: Session token service
            user_service: User domain service
            comment_service: Comment domain service
        """
        self.application_service = application_service
        self.session_service = session_service
        self.user_service = user_service
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Look up the application and check the origin
        2. Verify the session token belongs to this application
        3. Create the comment (service checks ban state and parent)
        4. Bump the author's comment count

        Args:
            request: Create comment request

        Returns:
            Created comment

        Raises:
            InvalidAppKeyError: If the app key is unknown
            OriginNotAllowedError: If the origin is not allowed
            InvalidTokenError: If the session token is invalid
            UserBannedError: If the author may not post
            NotFoundError: If the author or parent comment is missing
        """
        application = await self.application_service.get_authorized(
            request.app_key, request.origin
        )

        try:
            payload = self.session_service.verify_token(request.session_token)
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e
        if payload.application_id != str(application.id):
            logfire.warn(
                "Session token used on another application",
                app_key=request.app_key,
                user_id=payload.user_id,
            )
            raise InvalidTokenError("Session token was issued for another application")

        author = await self.user_service.get_by_id(UserId(UUID(payload.user_id)))
        comment = await self.comment_service.create_comment(
            application_id=application.id,
            owner_identifier=request.owner_identifier,
            author=author,
            body=request.body,
            parent_id=CommentId(UUID(request.parent_id)) if request.parent_id else None,
        )
        await self.user_service.increment_comments_count(author.id)

        return CreateCommentResponse(
            comment_id=str(comment.id),
            owner_identifier=comment.owner_identifier,
            author_id=str(comment.author_id),
            body=comment.body,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            depth=comment.depth,
            created_at=comment.created_at,
        )
