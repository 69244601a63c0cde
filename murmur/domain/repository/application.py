"""Application repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from murmur.domain.model.application import Application
from murmur.domain.value import AppKey, ApplicationId


class ApplicationRepository(ABC):
    """Repository for Application entities.

    Applications are read on every request; writes only happen from the
    admin flow and test fixtures.
    """

    @abstractmethod
    async def find_by_id(self, application_id: ApplicationId) -> Optional[Application]:
        """Find an application by ID.

        Args:
            application_id: The application's unique identifier

        Returns:
            The application if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_app_key(self, app_key: AppKey) -> Optional[Application]:
        """Find an application by its public app key.

        Args:
            app_key: Public app key

        Returns:
            The application if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, application: Application) -> Application:
        """Save an application (create or update).

        Args:
            application: The application to save

        Returns:
            The saved application
        """
        pass
