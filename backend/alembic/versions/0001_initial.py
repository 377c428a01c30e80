"""initial schema: users, reports, report_updates, report_upvotes

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

# Enum columns store member names
USER_ROLE = sa.Enum("CITIZEN", "OFFICIAL", "ADMIN", name="userrole")
REPORT_TYPE = sa.Enum("ISSUE", "COMPLIMENT", "SUGGESTION", "REQUEST", name="reporttype")
REPORT_PRIORITY = sa.Enum("LOW", "MEDIUM", "HIGH", "URGENT", name="reportpriority")
UPDATE_TYPE = sa.Enum("COMMENT", "STATUS_CHANGE", "OFFICIAL_UPDATE", name="updatetype")
STATUS_NAMES = (
    "NEW",
    "UNDER_REVIEW",
    "IN_PROGRESS",
    "RESOLVED",
    "CLOSED",
    "REJECTED",
)


def _status_enum() -> sa.Enum:
    return sa.Enum(*STATUS_NAMES, name="reportstatus")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("full_name", sa.String(length=100), nullable=True),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("avatar_url", sa.String(), nullable=True),
        sa.Column("role", USER_ROLE, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "reports",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("report_number", sa.String(length=20), nullable=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("report_type", REPORT_TYPE, nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("affected_areas", sa.JSON(), nullable=False),
        sa.Column("priority", REPORT_PRIORITY, nullable=True),
        sa.Column("status", _status_enum(), nullable=False),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False),
        sa.Column("contact_phone", sa.String(length=30), nullable=True),
        sa.Column("contact_email", sa.String(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("upvotes_count", sa.Integer(), nullable=False),
        sa.Column("updates_count", sa.Integer(), nullable=False),
        sa.Column("views_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.CheckConstraint("upvotes_count >= 0", name="ck_reports_upvotes_nonnegative"),
        sa.CheckConstraint("updates_count >= 0", name="ck_reports_updates_nonnegative"),
        sa.CheckConstraint("views_count >= 0", name="ck_reports_views_nonnegative"),
    )
    op.create_index("ix_reports_id", "reports", ["id"])
    op.create_index("ix_reports_report_number", "reports", ["report_number"], unique=True)
    op.create_index("ix_reports_user_id", "reports", ["user_id"])
    op.create_index("ix_reports_category", "reports", ["category"])
    op.create_index("ix_reports_created_at", "reports", ["created_at"])
    op.create_index("ix_reports_updated_at", "reports", ["updated_at"])
    op.create_index("ix_reports_status_created", "reports", ["status", "created_at"])

    op.create_table(
        "report_updates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "report_id",
            sa.Integer(),
            sa.ForeignKey("reports.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("update_type", UPDATE_TYPE, nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("old_status", _status_enum(), nullable=True),
        sa.Column("new_status", _status_enum(), nullable=True),
        sa.Column("is_official", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.CheckConstraint(
            "(update_type = 'STATUS_CHANGE' AND old_status IS NOT NULL AND new_status IS NOT NULL)"
            " OR (update_type != 'STATUS_CHANGE' AND old_status IS NULL AND new_status IS NULL)",
            name="ck_report_updates_status_pair",
        ),
    )
    op.create_index("ix_report_updates_id", "report_updates", ["id"])
    op.create_index(
        "ix_report_updates_report_created", "report_updates", ["report_id", "created_at"]
    )

    op.create_table(
        "report_upvotes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "report_id",
            sa.Integer(),
            sa.ForeignKey("reports.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint(
            "report_id", "user_id", name="uq_report_upvotes_report_user"
        ),
    )
    op.create_index("ix_report_upvotes_id", "report_upvotes", ["id"])
    op.create_index("ix_report_upvotes_user_id", "report_upvotes", ["user_id"])


def downgrade() -> None:
    op.drop_table("report_upvotes")
    op.drop_table("report_updates")
    op.drop_table("reports")
    op.drop_table("users")
