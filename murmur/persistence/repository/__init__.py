"""PostgreSQL repository implementations."""

from murmur.persistence.repository.application import PostgresApplicationRepository
from murmur.persistence.repository.comment import PostgresCommentRepository
from murmur.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresApplicationRepository",
    "PostgresUserRepository",
    "PostgresCommentRepository",
]
