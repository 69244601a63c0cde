"""Unit tests for CreateCommentUseCase."""

import pytest

from murmur.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
)
from murmur.domain.error import InvalidTokenError, OriginNotAllowedError
from murmur.domain.model import GuestAuth
from murmur.domain.repository import ApplicationRepository, UserRepository
from murmur.domain.service import SessionService
from tests.conftest import make_application, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def seed(unit_env, app_key: str = "acme"):
    """Save an app and a guest, returning both with a session token."""
    app_repo = await unit_env.get(ApplicationRepository)
    user_repo = await unit_env.get(UserRepository)
    session_service = await unit_env.get(SessionService)
    app = make_application(app_key=app_key)
    await app_repo.save(app)
    user = make_user(app.id, GuestAuth(session_id="s1"), display_name="Anonymous")
    await user_repo.insert_if_absent(user)
    return app, user, session_service.create_token(user)


def comment_request(token: str, **overrides) -> CreateCommentRequest:
    fields = {
        "app_key": "acme",
        "origin": "blog.acme.com",
        "session_token": token,
        "owner_identifier": "/posts/42",
        "body": "Nice post",
    }
    fields.update(overrides)
    return CreateCommentRequest(**fields)


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_creates_comment_and_bumps_count(self, unit_env):
        user_repo = await unit_env.get(UserRepository)
        use_case = await unit_env.get(CreateCommentUseCase)
        _, user, token = await seed(unit_env)

        response = await use_case.execute(comment_request(token))

        assert response.author_id == str(user.id)
        assert response.owner_identifier == "/posts/42"
        assert response.depth == 0
        assert (await user_repo.find_by_id(user.id)).comments_count == 1

    @pytest.mark.asyncio
    async def test_reply_sets_parent_and_depth(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        _, _, token = await seed(unit_env)
        parent = await use_case.execute(comment_request(token))

        reply = await use_case.execute(
            comment_request(token, body="Agreed", parent_id=parent.comment_id)
        )

        assert reply.parent_id == parent.comment_id
        assert reply.depth == 1

    @pytest.mark.asyncio
    async def test_garbage_session_token(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        await seed(unit_env)

        with pytest.raises(InvalidTokenError):
            await use_case.execute(comment_request("garbage"))

    @pytest.mark.asyncio
    async def test_token_from_other_app_rejected(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        await seed(unit_env)
        _, _, other_token = await seed(unit_env, app_key="other")

        with pytest.raises(InvalidTokenError, match="another application"):
            await use_case.execute(comment_request(other_token))

    @pytest.mark.asyncio
    async def test_origin_checked(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        _, _, token = await seed(unit_env)

        with pytest.raises(OriginNotAllowedError):
            await use_case.execute(comment_request(token, origin="evil.test"))
