"""SQLAlchemy table definitions for Project FPV.

These table definitions are used by the Core-level repositories.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
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
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (one row per Firebase identity)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("external_id", String(128), nullable=False, unique=True),  # Firebase UID
    Column("email", String(255), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    Column("image", Text, nullable=True),  # Avatar URL
    Column("provider", String(50), nullable=False, server_default="firebase"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "last_login_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="NOW()",
    ),
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("title", Text, nullable=False),
    Column("excerpt", String(150), nullable=False),
    Column("content", Text, nullable=False),
    Column("category", String(30), nullable=False),
    Column("tags", ARRAY(Text), nullable=False, server_default="{}"),
    Column("featured_image", Text, nullable=True),
    Column("read_time", Integer, nullable=False, server_default="1"),
    Column("view_count", Integer, nullable=False, server_default="0"),
    Column("status", String(20), nullable=False, server_default="published"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("char_length(excerpt) <= 150", name="excerpt_max_length"),
    CheckConstraint(
        "category IN ('Freestyle', 'Racing', 'Cinematic', 'Builds', 'Reviews', 'Tips')",
        name="category_valid",
    ),
    CheckConstraint("status IN ('published', 'draft')", name="status_valid"),
    CheckConstraint("view_count >= 0", name="view_count_non_negative"),
    CheckConstraint("read_time >= 1", name="read_time_positive"),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index("idx_posts_author_id", posts_table.c.author_id)
Index("idx_posts_status_category", posts_table.c.status, posts_table.c.category)

# ============================================================================
# POST_LIKES TABLE (the like set of each post)
# ============================================================================
post_likes_table = Table(
    "post_likes",
    metadata,
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("post_id", "user_id", name="uq_post_like"),
)

Index("idx_post_likes_user_id", post_likes_table.c.user_id)
