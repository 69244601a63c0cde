"""Fixtures for API tests against an app wired to in-memory storage."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from murmur.domain.repository import ApplicationRepository
from murmur.interface.api.app import create_app
from tests.conftest import make_application
from tests.di import build_test_container


async def _seed(container) -> None:
    async with container() as request_container:
        repo = await request_container.get(ApplicationRepository)
        await repo.save(make_application())
        await repo.save(make_application(app_key="quiet", social_enabled=False))


@pytest.fixture
def client():
    """TestClient with apps "acme" (social on) and "quiet" (social off)."""
    container = build_test_container()
    asyncio.run(_seed(container))
    with TestClient(create_app(container)) as test_client:
        yield test_client
    asyncio.run(container.close())
