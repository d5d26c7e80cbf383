"""initial_schema

Create the board schema:
- Actors (device-bound anonymous identities with an immutable line)
- Posts and comments (two levels, soft delete, denormalized line and score)
- Votes (one per actor and item, value -1 or +1)
- Notifications (replies and score milestones)
- Push subscriptions and the append-only delivery log
- Rate limit events (sliding window per actor and action kind)

Revision ID: 3f6c2a9d41b7
Revises:
Create Date: 2026-10-16 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f6c2a9d41b7"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LINES = (
    "'1', '2', '3', '4', '5', '6', '7', 'A', 'B', 'C', 'D', 'E', 'F', 'G', "
    "'J', 'L', 'M', 'N', 'Q', 'R', 'W', 'Z', 'T'"
)
DELETION_REASONS = "'auto_low_score', 'user_deleted', 'admin_deleted'"
NOTIFICATION_TYPES = (
    "'reply_to_post', 'reply_to_comment', 'milestone_5', 'milestone_10', "
    "'milestone_25'"
)


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("gen_random_uuid()"),
        nullable=False,
    )


def _timestamp_column(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        server_default=sa.text("NOW()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() is built in from PostgreSQL 13, pgcrypto covers older servers
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ========================================================================
    # ACTORS table
    # ========================================================================
    op.create_table(
        "actors",
        _id_column(),
        sa.Column("device_id", sa.String(255), nullable=False),
        sa.Column("line", sa.String(2), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("posts_today", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_post_at", sa.TIMESTAMP(timezone=True), nullable=True),
        _timestamp_column("last_seen_at"),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("device_id"),
        sa.CheckConstraint(f"line IN ({LINES})", name="actors_line_valid"),
        sa.CheckConstraint(
            "posts_today >= 0", name="actors_posts_today_non_negative"
        ),
    )

    # ========================================================================
    # POSTS table
    # ========================================================================
    op.create_table(
        "posts",
        _id_column(),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("line", sa.String(2), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("vote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        _timestamp_column("created_at"),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("deletion_reason", sa.String(20), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["author_id"], ["actors.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "char_length(content) BETWEEN 1 AND 500", name="posts_content_length"
        ),
        sa.CheckConstraint(f"line IN ({LINES})", name="posts_line_valid"),
        sa.CheckConstraint(
            f"deletion_reason IS NULL OR deletion_reason IN ({DELETION_REASONS})",
            name="posts_deletion_reason_valid",
        ),
        sa.CheckConstraint(
            "(deleted_at IS NULL) = (deletion_reason IS NULL)",
            name="posts_deletion_consistent",
        ),
    )

    # Feed indexes only cover live posts
    op.execute(
        "CREATE INDEX idx_posts_new ON posts (created_at DESC, id DESC) "
        "WHERE deleted_at IS NULL"
    )
    op.execute(
        "CREATE INDEX idx_posts_hot ON posts (score DESC, created_at DESC, id DESC) "
        "WHERE deleted_at IS NULL"
    )
    op.execute(
        "CREATE INDEX idx_posts_line_new ON posts (line, created_at DESC) "
        "WHERE deleted_at IS NULL"
    )
    op.create_index("idx_posts_author_id", "posts", ["author_id"])

    # ========================================================================
    # COMMENTS table (two-level threading)
    # ========================================================================
    op.create_table(
        "comments",
        _id_column(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("line", sa.String(2), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("depth", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("vote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reply_count", sa.Integer(), nullable=False, server_default="0"),
        _timestamp_column("created_at"),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("deletion_reason", sa.String(20), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["actors.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "char_length(content) BETWEEN 1 AND 500", name="comments_content_length"
        ),
        sa.CheckConstraint("depth IN (0, 1)", name="comments_depth_max_one"),
        sa.CheckConstraint(
            "(parent_id IS NULL) = (depth = 0)",
            name="comments_parent_matches_depth",
        ),
        sa.CheckConstraint(
            "(deleted_at IS NULL) = (deletion_reason IS NULL)",
            name="comments_deletion_consistent",
        ),
    )

    op.create_index("idx_comments_post_id", "comments", ["post_id", "created_at"])
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_author_id", "comments", ["author_id"])

    # ========================================================================
    # VOTES table (polymorphic: posts and comments)
    # ========================================================================
    op.create_table(
        "votes",
        _id_column(),
        sa.Column("actor_id", sa.UUID(), nullable=False),
        sa.Column("votable_type", sa.String(10), nullable=False),
        sa.Column("votable_id", sa.UUID(), nullable=False),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["actor_id"], ["actors.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("actor_id", "votable_id", name="uq_votes_actor_votable"),
        sa.CheckConstraint(
            "votable_type IN ('post', 'comment')", name="votes_type_valid"
        ),
        sa.CheckConstraint("value IN (-1, 1)", name="votes_value_valid"),
    )

    op.create_index("idx_votes_votable", "votes", ["votable_type", "votable_id"])

    # ========================================================================
    # NOTIFICATIONS table
    # ========================================================================
    op.create_table(
        "notifications",
        _id_column(),
        sa.Column("recipient_id", sa.UUID(), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("comment_id", sa.UUID(), nullable=True),
        sa.Column("actor_id", sa.UUID(), nullable=True),
        sa.Column("actor_line", sa.String(2), nullable=True),
        sa.Column("preview", sa.String(100), nullable=True),
        sa.Column("read", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp_column("created_at"),
        sa.Column("read_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["recipient_id"], ["actors.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["actor_id"], ["actors.id"], ondelete="SET NULL"),
        sa.CheckConstraint(
            f"type IN ({NOTIFICATION_TYPES})", name="notifications_type_valid"
        ),
        sa.CheckConstraint(
            "read = (read_at IS NOT NULL)", name="notifications_read_consistent"
        ),
        sa.CheckConstraint(
            "type NOT LIKE 'milestone_%' OR (actor_id IS NULL AND comment_id IS NULL)",
            name="notifications_milestone_has_no_actor",
        ),
    )

    op.execute(
        "CREATE INDEX idx_notifications_recipient "
        "ON notifications (recipient_id, created_at DESC) WHERE deleted_at IS NULL"
    )
    # One milestone per (recipient, post, threshold), soft-deleted rows included
    op.execute(
        "CREATE UNIQUE INDEX uq_notifications_milestone "
        "ON notifications (recipient_id, post_id, type) "
        "WHERE type LIKE 'milestone_%'"
    )
    op.execute(
        "CREATE INDEX idx_notifications_read_at ON notifications (read_at) "
        "WHERE read IS TRUE"
    )

    # ========================================================================
    # PUSH SUBSCRIPTIONS table
    # ========================================================================
    op.create_table(
        "push_subscriptions",
        _id_column(),
        sa.Column("actor_id", sa.UUID(), nullable=False),
        sa.Column("device_id", sa.String(255), nullable=False),
        sa.Column("endpoint", sa.String(2048), nullable=False),
        sa.Column("keys_p256dh", sa.Text(), nullable=False),
        sa.Column("keys_auth", sa.Text(), nullable=False),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default="true"),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["actor_id"], ["actors.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "actor_id", "device_id", name="uq_push_subscriptions_actor_device"
        ),
        sa.CheckConstraint("endpoint LIKE 'https://%'", name="push_subscriptions_https"),
    )

    op.execute(
        "CREATE INDEX idx_push_subscriptions_enabled ON push_subscriptions (actor_id) "
        "WHERE enabled IS TRUE"
    )

    # ========================================================================
    # PUSH DELIVERY LOG table (append-only)
    # ========================================================================
    op.create_table(
        "push_delivery_log",
        _id_column(),
        sa.Column("notification_id", sa.UUID(), nullable=False),
        sa.Column("recipient_id", sa.UUID(), nullable=False),
        # No FK: the subscription is deleted when the push service reports it gone
        sa.Column("subscription_id", sa.UUID(), nullable=False),
        sa.Column("status", sa.String(10), nullable=False),
        sa.Column("status_code", sa.Integer(), nullable=True),
        sa.Column("error", sa.Text(), nullable=True),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["notification_id"], ["notifications.id"], ondelete="CASCADE"
        ),
        sa.CheckConstraint(
            "status IN ('sent', 'gone', 'failed')",
            name="push_delivery_log_status_valid",
        ),
    )

    op.create_index(
        "idx_push_delivery_log_notification", "push_delivery_log", ["notification_id"]
    )
    op.create_index(
        "idx_push_delivery_log_created_at", "push_delivery_log", ["created_at"]
    )

    # ========================================================================
    # RATE LIMIT EVENTS table
    # ========================================================================
    op.create_table(
        "rate_limit_events",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        sa.Column("actor_id", sa.UUID(), nullable=False),
        sa.Column("kind", sa.String(20), nullable=False),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["actor_id"], ["actors.id"], ondelete="CASCADE"),
    )

    op.create_index(
        "idx_rate_limit_events_window",
        "rate_limit_events",
        ["actor_id", "kind", "created_at"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("rate_limit_events")
    op.drop_table("push_delivery_log")
    op.drop_table("push_subscriptions")
    op.drop_table("notifications")
    op.drop_table("votes")
    op.drop_table("comments")
    op.drop_table("posts")
    op.drop_table("actors")
