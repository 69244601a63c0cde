"""Unit tests for UserService and ApplicationService."""

from uuid import uuid4

import pytest

from murmur.domain.error import InvalidAppKeyError, NotFoundError, OriginNotAllowedError
from murmur.domain.model import GuestAuth, SocialAuth
from murmur.domain.repository import ApplicationRepository, UserRepository
from murmur.domain.service import ApplicationService, UserService
from murmur.domain.value import ApplicationId, UserId
from tests.conftest import make_application, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestUserService:
    """Tests for user reads and counters."""

    @pytest.mark.asyncio
    async def test_get_by_id_missing_raises(self, unit_env):
        user_service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await user_service.get_by_id(UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_get_by_social_uid_ignores_guests(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        app_id = ApplicationId(uuid4())
        social = make_user(
            app_id, SocialAuth(provider_uid="u1", provider_name="google.com")
        )
        await user_repo.insert_if_absent(social)
        await user_repo.insert_if_absent(make_user(app_id, GuestAuth(session_id="u1")))

        found = await user_service.get_by_social_uid(app_id, "u1")

        assert found.id == social.id
        assert await user_service.get_by_social_uid(app_id, "u2") is None

    @pytest.mark.asyncio
    async def test_increment_comments_count(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user = make_user(ApplicationId(uuid4()), GuestAuth(session_id="s1"))
        await user_repo.insert_if_absent(user)

        await user_service.increment_comments_count(user.id)
        await user_service.increment_comments_count(user.id)

        assert (await user_repo.find_by_id(user.id)).comments_count == 2

    @pytest.mark.asyncio
    async def test_find_by_ids_skips_missing(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user = make_user(ApplicationId(uuid4()), GuestAuth(session_id="s1"))
        await user_repo.insert_if_absent(user)
        missing = UserId(uuid4())

        found = await user_service.find_by_ids({user.id, missing})

        assert set(found) == {user.id}


class TestApplicationService:
    """Tests for application lookup and origin gating."""

    @pytest.mark.asyncio
    async def test_unknown_key_raises(self, unit_env):
        service = await unit_env.get(ApplicationService)

        with pytest.raises(InvalidAppKeyError, match="Invalid app key"):
            await service.get_by_app_key("missing")

    @pytest.mark.asyncio
    async def test_malformed_key_is_unknown(self, unit_env):
        service = await unit_env.get(ApplicationService)

        assert await service.find_by_app_key("has space") is None

    @pytest.mark.asyncio
    async def test_get_authorized_checks_origin(self, unit_env):
        service = await unit_env.get(ApplicationService)
        app_repo = await unit_env.get(ApplicationRepository)
        app = make_application()
        await app_repo.save(app)

        assert (await service.get_authorized("acme", "blog.acme.com")).id == app.id
        with pytest.raises(OriginNotAllowedError):
            await service.get_authorized("acme", "acme.com.evil.com")
