"""Mock persistence providers for testing."""

from dishka import Scope, provide

from murmur.domain.repository import (
    ApplicationRepository,
    CommentRepository,
    UserRepository,
)
from murmur.persistence.repository.inmemory import (
    InMemoryApplicationRepository,
    InMemoryCommentRepository,
    InMemoryUserRepository,
)
from murmur.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    APP scope, so data survives across the requests of one container
    (several HTTP calls in an API test). Each test builds its own container,
    which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_application_repository(self) -> ApplicationRepository:
        """Provide in-memory application repository."""
        return InMemoryApplicationRepository()

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()
