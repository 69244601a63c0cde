"""Application domain service."""

import logfire

from murmur.domain.error import InvalidAppKeyError
from murmur.domain.model.application import Application
from murmur.domain.repository import ApplicationRepository
from murmur.domain.value import AppKey

from .base import Service
from .domain_validator import DomainValidator


class ApplicationService(Service):
    """Domain service for application lookup and origin gating."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        domain_validator: DomainValidator,
    ) -> None:
        """Initialize application service.

        Args:
            application_repository: Application repository
            domain_validator: Origin allowlist validator
        """
        self.application_repository = application_repository
        self.domain_validator = domain_validator

    async def find_by_app_key(self, app_key: str) -> Application | None:
        """Get application by app key, or None for unknown/invalid keys.

        Args:
            app_key: Public app key

        Returns:
            Application if found, None otherwise
        """
        try:
            key = AppKey(app_key)
        except ValueError:
            return None
        return await self.application_repository.find_by_app_key(key)

    async def get_by_app_key(self, app_key: str) -> Application:
        """Get application by app key.

        Args:
            app_key: Public app key

        Returns:
            Application entity

        Raises:
            InvalidAppKeyError: If no application matches
        """
        with logfire.span("application_service.get_by_app_key", app_key=app_key):
            application = await self.find_by_app_key(app_key)
            if not application:
                logfire.warn("Unknown app key", app_key=app_key)
                raise InvalidAppKeyError(app_key)
            return application

    async def get_authorized(self, app_key: str, origin: str) -> Application:
        """Get application and check the origin against its allowlist.

        Args:
            app_key: Public app key
            origin: Requesting page hostname

        Returns:
            Application entity

        Raises:
            InvalidAppKeyError: If no application matches
            OriginNotAllowedError: If the origin is not allowed
        """
        application = await self.get_by_app_key(app_key)
        self.domain_validator.ensure_allowed(application, origin)
        return application
