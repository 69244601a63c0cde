"""Unit tests for ResolveGuestUserUseCase."""

from uuid import UUID

import pytest

from murmur.application.usecase.identity import (
    ResolveGuestUserRequest,
    ResolveGuestUserUseCase,
)
from murmur.domain.error import OriginNotAllowedError
from murmur.domain.repository import ApplicationRepository, UserRepository
from murmur.domain.value import AuthType, UserId
from tests.conftest import make_application
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestResolveGuestUserUseCase:
    """Tests for ResolveGuestUserUseCase."""

    @pytest.mark.asyncio
    async def test_same_session_resolves_to_one_guest(self, unit_env):
        app_repo = await unit_env.get(ApplicationRepository)
        user_repo = await unit_env.get(UserRepository)
        use_case = await unit_env.get(ResolveGuestUserUseCase)
        app = make_application()
        await app_repo.save(app)
        request = ResolveGuestUserRequest(
            app_key="acme",
            session_id="browser-session-1",
            origin="blog.acme.com",
            ip_address="203.0.113.7",
        )

        first = await use_case.execute(request)
        second = await use_case.execute(request)

        assert first.is_new is True
        assert second.is_new is False
        assert second.user_id == first.user_id
        assert first.session_token
        user = await user_repo.find_by_id(UserId(UUID(first.user_id)))
        assert user.auth_type is AuthType.GUEST
        assert user.auth.ip_address == "203.0.113.7"
        assert await user_repo.count_by_application(app.id) == 1

    @pytest.mark.asyncio
    async def test_origin_checked_before_creating_guest(self, unit_env):
        app_repo = await unit_env.get(ApplicationRepository)
        user_repo = await unit_env.get(UserRepository)
        use_case = await unit_env.get(ResolveGuestUserUseCase)
        app = make_application()
        await app_repo.save(app)

        with pytest.raises(OriginNotAllowedError):
            await use_case.execute(
                ResolveGuestUserRequest(
                    app_key="acme", session_id="s1", origin="acme.com.evil.net"
                )
            )

        assert await user_repo.count_by_application(app.id) == 0
