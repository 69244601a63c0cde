"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status
from pydantic import BaseModel, Field

from murmur.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from murmur.domain.error import DomainError
from murmur.interface.api.origin import bearer_token, resolve_origin
from murmur.interface.error import http_error

router = APIRouter(prefix="/apps", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    owner_identifier: str = Field(min_length=1, max_length=512)
    body: str = Field(min_length=1, max_length=10000)
    parent_id: str | None = None  # Parent comment ID for replies
    origin: str | None = None  # Falls back to the Origin header


@router.get("/{app_key}/comments", response_model=GetCommentsResponse)
async def get_comments(
    app_key: str,
    owner_identifier: str,
    use_case: FromDishka[GetCommentsUseCase],
) -> GetCommentsResponse:
    """List published comments on a page, newest first.

    Example:
        GET /apps/acme/comments?owner_identifier=/blog/hello-world
    """
    try:
        return await use_case.execute(
            GetCommentsRequest(app_key=app_key, owner_identifier=owner_identifier)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.post(
    "/{app_key}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    app_key: str,
    request: CreateCommentAPIRequest,
    use_case: FromDishka[CreateCommentUseCase],
    authorization: str | None = Header(default=None),
    origin: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Post a comment as the user named by the session token.

    Requires ``Authorization: Bearer <session_token>`` from one of the
    /identity endpoints.
    """
    session_token = bearer_token(authorization)
    if not session_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session token required to create comments",
        )

    try:
        return await use_case.execute(
            CreateCommentRequest(
                app_key=app_key,
                origin=resolve_origin(request.origin, origin),
                session_token=session_token,
                owner_identifier=request.owner_identifier,
                body=request.body,
                parent_id=request.parent_id,
            )
        )
    except DomainError as e:
        logfire.warn("Comment creation failed", app_key=app_key, error=str(e))
        raise http_error(e) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
