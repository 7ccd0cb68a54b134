"""initial moderation schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-16 00:00:00.000000

Users with unread flags, communities with their membership sets, member
reports and notification records.
"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

member_role = sa.Enum("PARTICIPANT", "MODERATOR", "BANNED", name="memberrole")
report_category = sa.Enum(
    "SPAM", "HARASSMENT", "INAPPROPRIATE", "OTHER", name="reportcategory"
)
report_status = sa.Enum("PENDING", "REVIEWED", "DISMISSED", name="reportstatus")
notification_type = sa.Enum(
    "COMMUNITY", "MESSAGE", "BAN", "OTHER", name="notificationtype"
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column(
            "community_notifs", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column(
            "message_notifs", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "communities",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("admin", sa.String(length=50), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_communities_id", "communities", ["id"])

    op.create_table(
        "community_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "community_id",
            sa.Integer(),
            sa.ForeignKey("communities.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("role", member_role, nullable=False),
        sa.Column("added_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint(
            "community_id", "username", "role", name="uq_community_member_role"
        ),
    )
    op.create_index("ix_community_members_id", "community_members", ["id"])
    op.create_index(
        "ix_community_members_lookup",
        "community_members",
        ["community_id", "username"],
    )

    op.create_table(
        "reports",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "community_id",
            sa.Integer(),
            sa.ForeignKey("communities.id"),
            nullable=False,
        ),
        sa.Column("reported_user", sa.String(length=50), nullable=False),
        sa.Column("reporter_user", sa.String(length=50), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("category", report_category, nullable=False),
        sa.Column("status", report_status, nullable=False),
        sa.Column("reviewed_by", sa.String(length=50), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint(
            "community_id",
            "reporter_user",
            "reported_user",
            name="uq_report_community_reporter_reported",
        ),
    )
    op.create_index("ix_reports_id", "reports", ["id"])
    op.create_index("ix_reports_reported", "reports", ["community_id", "reported_user"])
    op.create_index("ix_reports_status", "reports", ["community_id", "status"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("msg", sa.Text(), nullable=False),
        sa.Column("date_time", sa.DateTime(), nullable=False),
        sa.Column("sender", sa.String(length=50), nullable=False),
        sa.Column("context_id", sa.Integer(), nullable=True),
        sa.Column("type", notification_type, nullable=False),
    )
    op.create_index("ix_notifications_id", "notifications", ["id"])


def downgrade() -> None:
    """Drop every table.

    WARNING: This drops all moderation data.
    """
    op.drop_table("notifications")
    op.drop_table("reports")
    op.drop_table("community_members")
    op.drop_table("communities")
    op.drop_table("users")

    bind = op.get_bind()
    for enum_type in (notification_type, report_status, report_category, member_role):
        enum_type.drop(bind, checkfirst=True)
