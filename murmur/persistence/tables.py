"""SQLAlchemy table definitions for Murmur.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# APPS TABLE (Tenants)
# ============================================================================
apps_table = Table(
    "apps",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("app_key", String(255), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    Column("allowed_domains", JSONB, nullable=False, server_default="[]"),
    Column("social_auth", JSONB, nullable=False, server_default="{}"),
    Column("external_auth", JSONB, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# USERS TABLE (One row per application, auth type and natural key)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "application_id",
        UUID,
        ForeignKey("apps.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("display_name", String(255), nullable=False),
    Column("email", String(255), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column(
        "auth_type",
        postgresql.ENUM(
            "external", "social", "guest", name="auth_type", create_type=False
        ),
        nullable=False,
    ),
    Column("natural_key", String(255), nullable=False),  # system id / uid / session
    Column("auth_payload", JSONB, nullable=False),
    Column("reputation", Integer, nullable=False, server_default="0"),
    Column("comments_count", Integer, nullable=False, server_default="0"),
    Column("is_banned", Boolean, nullable=False, server_default="false"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "application_id", "auth_type", "natural_key", name="uq_users_natural_key"
    ),
    CheckConstraint("reputation >= 0", name="check_users_reputation"),
    CheckConstraint("comments_count >= 0", name="check_users_comments_count"),
)

Index("idx_users_app_email", users_table.c.application_id, users_table.c.email)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "application_id",
        UUID,
        ForeignKey("apps.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("owner_identifier", String(512), nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("body", Text, nullable=False),
    Column(
        "parent_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column(
        "status",
        postgresql.ENUM(
            "published",
            "pending",
            "hidden",
            "deleted",
            name="comment_status",
            create_type=False,
        ),
        nullable=False,
        server_default="published",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("edited_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("depth >= 0", name="check_comment_depth"),
)

Index(
    "idx_comments_page",
    comments_table.c.application_id,
    comments_table.c.owner_identifier,
    comments_table.c.created_at.desc(),
)
Index("idx_comments_author", comments_table.c.author_id)
