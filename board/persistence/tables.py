"""SQLAlchemy table definitions for the board.

Used with SQLAlchemy Core. They match the schema defined in Alembic
migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

from board.domain.value import DeletionReason, Line, NotificationType

# Metadata object for all tables
metadata = MetaData()


def _in(column: str, values) -> str:
    quoted = ", ".join(f"'{v.value}'" for v in values)
    return f"{column} IN ({quoted})"


# ============================================================================
# ACTORS TABLE
# ============================================================================
actors_table = Table(
    "actors",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("device_id", String(255), nullable=False, unique=True),
    Column("line", String(2), nullable=False),  # Immutable once assigned
    Column("is_admin", Boolean, nullable=False, server_default="false"),
    Column("posts_today", Integer, nullable=False, server_default="0"),
    Column("last_post_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "last_seen_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(_in("line", Line), name="actors_line_valid"),
    CheckConstraint("posts_today >= 0", name="actors_posts_today_non_negative"),
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "author_id", UUID, ForeignKey("actors.id", ondelete="CASCADE"), nullable=False
    ),
    Column("line", String(2), nullable=False),  # Copied from author at creation
    Column("content", Text, nullable=False),
    Column("score", Integer, nullable=False, server_default="0"),
    Column("vote_count", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deletion_reason", String(20), nullable=True),
    CheckConstraint(
        "char_length(content) BETWEEN 1 AND 500", name="posts_content_length"
    ),
    CheckConstraint(_in("line", Line), name="posts_line_valid"),
    CheckConstraint(
        f"deletion_reason IS NULL OR {_in('deletion_reason', DeletionReason)}",
        name="posts_deletion_reason_valid",
    ),
    CheckConstraint(
        "(deleted_at IS NULL) = (deletion_reason IS NULL)",
        name="posts_deletion_consistent",
    ),
)

Index(
    "idx_posts_new",
    posts_table.c.created_at.desc(),
    posts_table.c.id.desc(),
    postgresql_where=posts_table.c.deleted_at.is_(None),
)
Index(
    "idx_posts_hot",
    posts_table.c.score.desc(),
    posts_table.c.created_at.desc(),
    posts_table.c.id.desc(),
    postgresql_where=posts_table.c.deleted_at.is_(None),
)
Index(
    "idx_posts_line_new",
    posts_table.c.line,
    posts_table.c.created_at.desc(),
    postgresql_where=posts_table.c.deleted_at.is_(None),
)
Index("idx_posts_author_id", posts_table.c.author_id)

# ============================================================================
# COMMENTS TABLE (two-level threading)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column(
        "author_id", UUID, ForeignKey("actors.id", ondelete="CASCADE"), nullable=False
    ),
    Column("line", String(2), nullable=False),
    Column("content", Text, nullable=False),
    Column("depth", SmallInteger, nullable=False, server_default="0"),
    Column("score", Integer, nullable=False, server_default="0"),
    Column("vote_count", Integer, nullable=False, server_default="0"),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deletion_reason", String(20), nullable=True),
    CheckConstraint(
        "char_length(content) BETWEEN 1 AND 500", name="comments_content_length"
    ),
    CheckConstraint("depth IN (0, 1)", name="comments_depth_max_one"),
    CheckConstraint(
        "(parent_id IS NULL) = (depth = 0)", name="comments_parent_matches_depth"
    ),
    CheckConstraint(
        "(deleted_at IS NULL) = (deletion_reason IS NULL)",
        name="comments_deletion_consistent",
    ),
)

Index(
    "idx_comments_post_id", comments_table.c.post_id, comments_table.c.created_at
)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# VOTES TABLE (polymorphic - posts and comments)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "actor_id", UUID, ForeignKey("actors.id", ondelete="CASCADE"), nullable=False
    ),
    Column("votable_type", String(10), nullable=False),
    Column("votable_id", UUID, nullable=False),
    Column("value", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("actor_id", "votable_id", name="uq_votes_actor_votable"),
    CheckConstraint("votable_type IN ('post', 'comment')", name="votes_type_valid"),
    CheckConstraint("value IN (-1, 1)", name="votes_value_valid"),
)

Index("idx_votes_votable", votes_table.c.votable_type, votes_table.c.votable_id)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "recipient_id",
        UUID,
        ForeignKey("actors.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("type", String(20), nullable=False),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "comment_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    # Snapshot of the replying actor, never updated
    Column(
        "actor_id", UUID, ForeignKey("actors.id", ondelete="SET NULL"), nullable=True
    ),
    Column("actor_line", String(2), nullable=True),
    Column("preview", String(100), nullable=True),
    Column("read", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("read_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(_in("type", NotificationType), name="notifications_type_valid"),
    CheckConstraint("read = (read_at IS NOT NULL)", name="notifications_read_consistent"),
    CheckConstraint(
        "type NOT LIKE 'milestone_%' OR (actor_id IS NULL AND comment_id IS NULL)",
        name="notifications_milestone_has_no_actor",
    ),
)

Index(
    "idx_notifications_recipient",
    notifications_table.c.recipient_id,
    notifications_table.c.created_at.desc(),
    postgresql_where=notifications_table.c.deleted_at.is_(None),
)
# One milestone per (recipient, post, threshold), ever
Index(
    "uq_notifications_milestone",
    notifications_table.c.recipient_id,
    notifications_table.c.post_id,
    notifications_table.c.type,
    unique=True,
    postgresql_where=notifications_table.c.type.like("milestone_%"),
)
Index(
    "idx_notifications_read_at",
    notifications_table.c.read_at,
    postgresql_where=notifications_table.c.read.is_(True),
)

# ============================================================================
# PUSH SUBSCRIPTIONS TABLE
# ============================================================================
push_subscriptions_table = Table(
    "push_subscriptions",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "actor_id", UUID, ForeignKey("actors.id", ondelete="CASCADE"), nullable=False
    ),
    Column("device_id", String(255), nullable=False),
    Column("endpoint", String(2048), nullable=False),
    Column("keys_p256dh", Text, nullable=False),
    Column("keys_auth", Text, nullable=False),
    Column("user_agent", Text, nullable=True),
    Column("enabled", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("actor_id", "device_id", name="uq_push_subscriptions_actor_device"),
    CheckConstraint("endpoint LIKE 'https://%'", name="push_subscriptions_https"),
)

Index(
    "idx_push_subscriptions_enabled",
    push_subscriptions_table.c.actor_id,
    postgresql_where=push_subscriptions_table.c.enabled.is_(True),
)

# ============================================================================
# PUSH DELIVERY LOG TABLE (append-only)
# ============================================================================
push_delivery_log_table = Table(
    "push_delivery_log",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "notification_id",
        UUID,
        ForeignKey("notifications.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("recipient_id", UUID, nullable=False),
    Column("subscription_id", UUID, nullable=False),  # Subscription may be gone
    Column("status", String(10), nullable=False),
    Column("status_code", Integer, nullable=True),
    Column("error", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "status IN ('sent', 'gone', 'failed')", name="push_delivery_log_status_valid"
    ),
)

Index("idx_push_delivery_log_notification", push_delivery_log_table.c.notification_id)
Index("idx_push_delivery_log_created_at", push_delivery_log_table.c.created_at)

# ============================================================================
# RATE LIMIT EVENTS TABLE
# ============================================================================
rate_limit_events_table = Table(
    "rate_limit_events",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column(
        "actor_id", UUID, ForeignKey("actors.id", ondelete="CASCADE"), nullable=False
    ),
    Column("kind", String(20), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_rate_limit_events_window",
    rate_limit_events_table.c.actor_id,
    rate_limit_events_table.c.kind,
    rate_limit_events_table.c.created_at,
)
