"""In-memory application repository for testing."""

from typing import Optional

from murmur.domain.model.application import Application
from murmur.domain.repository.application import ApplicationRepository
from murmur.domain.value import AppKey, ApplicationId


class InMemoryApplicationRepository(ApplicationRepository):
    """In-memory implementation of ApplicationRepository for testing."""

    def __init__(self) -> None:
        self._apps: dict[ApplicationId, Application] = {}

    async def find_by_id(self, application_id: ApplicationId) -> Optional[Application]:
        """Find an application by ID."""
        return self._apps.get(application_id)

    async def find_by_app_key(self, app_key: AppKey) -> Optional[Application]:
        """Find an application by its public app key."""
        for app in self._apps.values():
            if app.app_key == app_key:
                return app
        return None

    async def save(self, application: Application) -> Application:
        """Save or update an application."""
        self._apps[application.id] = application
        return application
