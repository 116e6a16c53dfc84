"""initial schema: users, reports, report_votes, announcements, contacts

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

user_role = sa.Enum("RESIDENT", "ADMIN", name="userrole")
user_status = sa.Enum("PENDING", "VERIFIED", "SUSPENDED", name="userstatus")
report_category = sa.Enum(
    "SECURITY", "ENVIRONMENT", "HEALTH", "OTHER", name="reportcategory"
)
report_status = sa.Enum("PENDING", "IN_PROGRESS", "RESOLVED", name="reportstatus")
announcement_category = sa.Enum(
    "INFORMATION", "WARNING", "URGENT", "EVENT", name="announcementcategory"
)
announcement_priority = sa.Enum("PINNED", "NORMAL", name="announcementpriority")
contact_status = sa.Enum("NEW", "READ", "REPLIED", name="contactstatus")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("full_name", sa.String(150), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(30), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("ward", sa.String(100), nullable=False),
        sa.Column("estate_street", sa.String(200), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("status", user_status, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "reports",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", report_category, nullable=False),
        sa.Column("ward", sa.String(100), nullable=False),
        sa.Column("location_details", sa.Text(), nullable=False),
        sa.Column("image_path", sa.String(255), nullable=False),
        sa.Column("status", report_status, nullable=False),
        sa.Column("is_urgent", sa.Boolean(), nullable=False),
        sa.Column("vote_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_reports_id", "reports", ["id"])
    op.create_index("ix_reports_status", "reports", ["status"])
    op.create_index("ix_reports_ward", "reports", ["ward"])
    op.create_index("ix_reports_category", "reports", ["category"])
    op.create_index("ix_reports_created_at", "reports", ["created_at"])
    op.create_index("ix_reports_vote_count", "reports", ["vote_count"])

    op.create_table(
        "report_votes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "report_id", sa.Integer(), sa.ForeignKey("reports.id"), nullable=False
        ),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("report_id", "user_id", name="uq_vote_report_user"),
    )
    op.create_index("ix_report_votes_id", "report_votes", ["id"])
    op.create_index("ix_report_votes_user", "report_votes", ["user_id"])

    op.create_table(
        "announcements",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("admin_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("title_en", sa.String(200), nullable=False),
        sa.Column("title_sw", sa.String(200), nullable=False),
        sa.Column("message_en", sa.Text(), nullable=False),
        sa.Column("message_sw", sa.Text(), nullable=False),
        sa.Column("category", announcement_category, nullable=False),
        sa.Column("priority", announcement_priority, nullable=False),
        sa.Column("target_ward", sa.String(100), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_announcements_id", "announcements", ["id"])
    op.create_index(
        "ix_announcements_target_ward", "announcements", ["target_ward"]
    )
    op.create_index("ix_announcements_expires_at", "announcements", ["expires_at"])

    op.create_table(
        "contacts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("full_name", sa.String(150), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(30), nullable=False),
        sa.Column("ward", sa.String(100), nullable=False),
        sa.Column("subject", sa.String(200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", contact_status, nullable=False),
        sa.Column("admin_notes", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_contacts_id", "contacts", ["id"])
    op.create_index("ix_contacts_status", "contacts", ["status"])


def downgrade() -> None:
    op.drop_table("contacts")
    op.drop_table("announcements")
    op.drop_table("report_votes")
    op.drop_table("reports")
    op.drop_table("users")
