"""Strongly typed identifiers for Murmur domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

ApplicationId = NewType("ApplicationId", UUID)
UserId = NewType("UserId", UUID)
CommentId = NewType("CommentId", UUID)
