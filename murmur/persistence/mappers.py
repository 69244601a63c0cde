"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand.
Nested configuration and the user's auth payload live in JSONB columns and
go through Pydantic validation on the way out.
"""

from typing import Any, Dict
from uuid import UUID

from pydantic import TypeAdapter

from murmur.domain.model import (
    Application,
    AuthPayload,
    Comment,
    ExternalAuthConfig,
    SocialAuthConfig,
    User,
)
from murmur.domain.value import (
    AppKey,
    ApplicationId,
    CommentId,
    CommentStatus,
    DomainPattern,
    UserId,
)

_auth_payload_adapter: TypeAdapter[AuthPayload] = TypeAdapter(AuthPayload)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_application(row: Dict[str, Any]) -> Application:
    """Convert database row to Application domain model.

    Args:
        row: Database row as dict

    Returns:
        Application domain model
    """
    external_auth = row.get("external_auth")
    return Application(
        id=ApplicationId(_uuid(row["id"])),
        app_key=AppKey(row["app_key"]),
        name=row["name"],
        allowed_domains=[DomainPattern(d) for d in row.get("allowed_domains") or []],
        social_auth=SocialAuthConfig.model_validate(row.get("social_auth") or {}),
        external_auth=(
            ExternalAuthConfig.model_validate(external_auth) if external_auth else None
        ),
        created_at=row["created_at"],
    )


def application_to_dict(application: Application) -> Dict[str, Any]:
    """Convert Application domain model to database dict.

    Args:
        application: Application domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": application.id,
        "app_key": application.app_key.root,
        "name": application.name,
        "allowed_domains": [d.root for d in application.allowed_domains],
        "social_auth": application.social_auth.model_dump(mode="json"),
        "external_auth": (
            application.external_auth.model_dump(mode="json")
            if application.external_auth
            else None
        ),
        "created_at": application.created_at,
    }


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        application_id=ApplicationId(_uuid(row["application_id"])),
        display_name=row["display_name"],
        email=row.get("email"),
        avatar_url=row.get("avatar_url"),
        auth=_auth_payload_adapter.validate_python(row["auth_payload"]),
        reputation=row["reputation"],
        comments_count=row["comments_count"],
        is_banned=row["is_banned"],
        is_active=row["is_active"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    The auth payload is flattened into ``auth_type`` and ``natural_key``
    columns for the uniqueness constraint, plus the full JSONB document.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "application_id": user.application_id,
        "display_name": user.display_name,
        "email": user.email,
        "avatar_url": user.avatar_url,
        "auth_type": user.auth_type.value,
        "natural_key": user.natural_key,
        "auth_payload": user.auth.model_dump(mode="json"),
        "reputation": user.reputation,
        "comments_count": user.comments_count,
        "is_banned": user.is_banned,
        "is_active": user.is_active,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(_uuid(row["id"])),
        application_id=ApplicationId(_uuid(row["application_id"])),
        owner_identifier=row["owner_identifier"],
        author_id=UserId(_uuid(row["author_id"])),
        body=row["body"],
        parent_id=CommentId(_uuid(parent_id)) if parent_id else None,
        depth=row["depth"],
        status=CommentStatus(row["status"]),
        created_at=row["created_at"],
        edited_at=row.get("edited_at"),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = comment.model_dump()
    data["status"] = comment.status.value
    return data
