"""Repository interfaces for Murmur domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from murmur.domain.repository.application import ApplicationRepository
from murmur.domain.repository.comment import CommentRepository
from murmur.domain.repository.user import UserRepository

__all__ = [
    "ApplicationRepository",
    "CommentRepository",
    "UserRepository",
]
