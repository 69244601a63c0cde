"""Unit tests for CommentService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from murmur.domain.error import NotFoundError, UserBannedError, ValidationError
from murmur.domain.model import Comment, GuestAuth
from murmur.domain.repository import CommentRepository
from murmur.domain.service import CommentService
from murmur.domain.value import ApplicationId, CommentId, CommentStatus
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def guest_author(app_id, **overrides):
    user = make_user(app_id, GuestAuth(session_id="s1"), display_name="Anonymous")
    return user.model_copy(update=overrides)


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_top_level_comment_has_depth_zero(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        app_id = ApplicationId(uuid4())
        author = guest_author(app_id)

        result = await comment_service.create_comment(
            application_id=app_id,
            owner_identifier="/blog/hello",
            author=author,
            body="First!",
        )

        assert result.depth == 0
        assert result.parent_id is None
        assert result.author_id == author.id
        assert result.status is CommentStatus.PUBLISHED
        assert await comment_repo.find_by_id(result.id) == result

    @pytest.mark.asyncio
    async def test_reply_increments_parent_depth(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        app_id = ApplicationId(uuid4())
        author = guest_author(app_id)
        parent = await comment_service.create_comment(
            app_id, "/blog/hello", author, "Parent"
        )

        reply = await comment_service.create_comment(
            app_id, "/blog/hello", author, "Reply", parent_id=parent.id
        )

        assert reply.depth == 1
        assert reply.parent_id == parent.id

    @pytest.mark.asyncio
    async def test_missing_parent_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        app_id = ApplicationId(uuid4())

        with pytest.raises(NotFoundError):
            await comment_service.create_comment(
                app_id,
                "/blog/hello",
                guest_author(app_id),
                "Reply",
                parent_id=CommentId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_parent_on_other_page_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        app_id = ApplicationId(uuid4())
        author = guest_author(app_id)
        parent = await comment_service.create_comment(
            app_id, "/blog/one", author, "Parent"
        )

        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                app_id, "/blog/two", author, "Reply", parent_id=parent.id
            )

    @pytest.mark.asyncio
    async def test_banned_author_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        app_id = ApplicationId(uuid4())

        with pytest.raises(UserBannedError):
            await comment_service.create_comment(
                app_id, "/blog/hello", guest_author(app_id, is_banned=True), "Hi"
            )

    @pytest.mark.asyncio
    async def test_author_from_other_app_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                ApplicationId(uuid4()),
                "/blog/hello",
                guest_author(ApplicationId(uuid4())),
                "Hi",
            )


class TestGetCommentsForPage:
    """Tests for get_comments_for_page method."""

    @pytest.mark.asyncio
    async def test_returns_published_newest_first(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        app_id = ApplicationId(uuid4())
        author = guest_author(app_id)
        base = datetime.now(timezone.utc)

        for offset, status in [
            (0, CommentStatus.PUBLISHED),
            (1, CommentStatus.HIDDEN),
            (2, CommentStatus.PUBLISHED),
        ]:
            await comment_repo.save(
                Comment(
                    id=CommentId(uuid4()),
                    application_id=app_id,
                    owner_identifier="/page",
                    author_id=author.id,
                    body=f"at {offset}",
                    status=status,
                    created_at=base + timedelta(minutes=offset),
                )
            )

        comments = await comment_service.get_comments_for_page(app_id, "/page")

        assert [c.body for c in comments] == ["at 2", "at 0"]
