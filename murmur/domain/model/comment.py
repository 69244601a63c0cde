"""Comment entity.

Comments belong to a page (``owner_identifier``) of an application and
reference their author by id only. Nesting is flat in storage: ``parent_id``
plus ``depth``; tree assembly is left to the client.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from murmur.domain.model.common import DomainModel
from murmur.domain.value import ApplicationId, CommentId, CommentStatus, UserId


class Comment(DomainModel):
    """Comment entity."""

    id: CommentId
    application_id: ApplicationId
    owner_identifier: str = Field(min_length=1, max_length=512)
    author_id: UserId
    body: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    status: CommentStatus = CommentStatus.PUBLISHED
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    edited_at: Optional[datetime] = None
