"""Tests for the in-memory user repository's storage rules."""

from datetime import timedelta
from uuid import uuid4

import pytest

from murmur.domain.model import GuestAuth, SocialAuth
from murmur.domain.value import ApplicationId, AuthType
from murmur.persistence.repository.inmemory import InMemoryUserRepository
from tests.conftest import make_user


@pytest.fixture
def repo():
    return InMemoryUserRepository()


@pytest.fixture
def app_id():
    return ApplicationId(uuid4())


class TestInMemoryUserRepository:
    """Natural-key uniqueness and counter handling."""

    @pytest.mark.asyncio
    async def test_insert_if_absent_returns_existing(self, repo, app_id):
        first = make_user(app_id, GuestAuth(session_id="s1"))
        second = make_user(app_id, GuestAuth(session_id="s1"))

        stored, created = await repo.insert_if_absent(first)
        again, created_again = await repo.insert_if_absent(second)

        assert created is True
        assert created_again is False
        assert again.id == stored.id == first.id
        assert await repo.count_by_application(app_id) == 1

    @pytest.mark.asyncio
    async def test_same_key_different_auth_type_is_distinct(self, repo, app_id):
        await repo.insert_if_absent(make_user(app_id, GuestAuth(session_id="x")))
        await repo.insert_if_absent(
            make_user(app_id, SocialAuth(provider_uid="x", provider_name="google.com"))
        )

        assert await repo.count_by_application(app_id) == 2
        found = await repo.find_by_natural_key(app_id, AuthType.SOCIAL, "x")
        assert found.auth_type is AuthType.SOCIAL

    @pytest.mark.asyncio
    async def test_save_rejects_taken_natural_key(self, repo, app_id):
        await repo.insert_if_absent(
            make_user(app_id, SocialAuth(provider_uid="u1", provider_name="google.com"))
        )
        guest = make_user(app_id, GuestAuth(session_id="s1"))
        await repo.insert_if_absent(guest)

        with pytest.raises(ValueError):
            await repo.save(
                guest.model_copy(
                    update={
                        "auth": SocialAuth(provider_uid="u1", provider_name="google.com")
                    }
                )
            )

    @pytest.mark.asyncio
    async def test_save_keeps_counters_and_add_stats_changes_them(self, repo, app_id):
        user = make_user(app_id, GuestAuth(session_id="s1"), comments_count=3)
        await repo.insert_if_absent(user)

        await repo.save(
            user.model_copy(update={"comments_count": 0, "display_name": "New"})
        )
        await repo.add_stats(user.id, comments_count=2, reputation=5)

        stored = await repo.find_by_id(user.id)
        assert stored.display_name == "New"
        assert stored.comments_count == 5
        assert stored.reputation == 5

    @pytest.mark.asyncio
    async def test_find_by_email_oldest_first(self, repo, app_id):
        older = make_user(app_id, GuestAuth(session_id="a"), email="e@x.io")
        newer = make_user(app_id, GuestAuth(session_id="b"), email="e@x.io")
        newer = newer.model_copy(
            update={"created_at": older.created_at + timedelta(days=1)}
        )
        await repo.insert_if_absent(newer)
        await repo.insert_if_absent(older)

        found = await repo.find_by_email(app_id, "e@x.io")

        assert [u.id for u in found] == [older.id, newer.id]
