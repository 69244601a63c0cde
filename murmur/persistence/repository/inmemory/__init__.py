"""In-memory repository implementations for testing."""

from .application import InMemoryApplicationRepository
from .comment import InMemoryCommentRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryApplicationRepository",
    "InMemoryCommentRepository",
    "InMemoryUserRepository",
]
