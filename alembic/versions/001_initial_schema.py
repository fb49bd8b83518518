"""Initial schema: profiles, role tables, subscriptions, unlocks, hiring pipeline.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

user_role = sa.Enum("driver", "recruiter", "admin", name="user_role")
availability_status = sa.Enum("available", "employed", "seeking", name="availability_status")
subscription_type = sa.Enum("starter", "pro", "enterprise", "pay-per-contact", name="subscription_type")
subscription_status = sa.Enum("active", "cancelled", "expired", "trial", name="subscription_status")
application_status = sa.Enum("pending", "reviewed", "interviewed", "hired", "rejected", name="application_status")
interview_type = sa.Enum("phone", "video", "in-person", name="interview_type")
interview_status = sa.Enum("scheduled", "completed", "cancelled", "no-show", name="interview_status")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("location", sa.String(100), nullable=True),
        sa.Column("profile_image", sa.String(500), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_profiles_email", "profiles", ["email"])
    op.create_index("ix_profiles_role", "profiles", ["role"])

    op.create_table(
        "drivers",
        sa.Column("id", UUID(as_uuid=True), sa.ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("experience_years", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("license_types", sa.JSON()),
        sa.Column("twic_card", sa.Boolean(), server_default=sa.false()),
        sa.Column("hazmat_endorsement", sa.Boolean(), server_default=sa.false()),
        sa.Column("availability", availability_status, nullable=False, server_default="available"),
        sa.Column("preferred_routes", sa.JSON()),
        sa.Column("equipment_experience", sa.JSON()),
        sa.Column("fit_score", sa.Float(), nullable=False, server_default="0"),
        sa.Column("profile_completion", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("documents_verified", sa.Boolean(), server_default=sa.false()),
        sa.Column("bio", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("fit_score >= 0 AND fit_score <= 10", name="ck_drivers_fit_score_range"),
        sa.CheckConstraint("profile_completion >= 0 AND profile_completion <= 100", name="ck_drivers_completion_range"),
    )
    op.create_index("idx_drivers_fit_score", "drivers", ["fit_score"])
    op.create_index("idx_drivers_availability", "drivers", ["availability"])

    op.create_table(
        "recruiters",
        sa.Column("id", UUID(as_uuid=True), sa.ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("company_name", sa.String(100), nullable=False),
        sa.Column("company_size", sa.String(50), nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "subscriptions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "recruiter_id",
            UUID(as_uuid=True),
            sa.ForeignKey("recruiters.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("type", subscription_type, nullable=False),
        sa.Column("status", subscription_status, nullable=False),
        sa.Column("contacts_limit", sa.Integer(), nullable=True),
        sa.Column("contacts_used", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("price_monthly", sa.Float(), nullable=True),
        sa.Column("current_period_start", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("current_period_end", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("contacts_used >= 0", name="ck_subscriptions_used_non_negative"),
        sa.CheckConstraint(
            "contacts_limit IS NULL OR contacts_used <= contacts_limit",
            name="ck_subscriptions_used_within_limit",
        ),
    )

    op.create_table(
        "contact_unlocks",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("recruiter_id", UUID(as_uuid=True), sa.ForeignKey("recruiters.id", ondelete="CASCADE"), nullable=False),
        sa.Column("driver_id", UUID(as_uuid=True), sa.ForeignKey("drivers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("unlocked_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("recruiter_id", "driver_id", name="uq_contact_unlocks_pair"),
    )
    op.create_index("ix_contact_unlocks_recruiter_id", "contact_unlocks", ["recruiter_id"])

    op.create_table(
        "job_postings",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("recruiter_id", UUID(as_uuid=True), sa.ForeignKey("recruiters.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("location", sa.String(100), nullable=False),
        sa.Column("job_type", sa.String(50), nullable=False),
        sa.Column("salary_min", sa.Integer(), nullable=True),
        sa.Column("salary_max", sa.Integer(), nullable=True),
        sa.Column("requirements", sa.JSON()),
        sa.Column("benefits", sa.JSON()),
        sa.Column("active", sa.Boolean(), server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_job_postings_recruiter_id", "job_postings", ["recruiter_id"])

    op.create_table(
        "applications",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("driver_id", UUID(as_uuid=True), sa.ForeignKey("drivers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("job_id", UUID(as_uuid=True), sa.ForeignKey("job_postings.id", ondelete="CASCADE"), nullable=False),
        sa.Column("recruiter_id", UUID(as_uuid=True), sa.ForeignKey("recruiters.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", application_status, nullable=False, server_default="pending"),
        sa.Column("cover_letter", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("applied_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("driver_id", "job_id", name="uq_applications_driver_job"),
    )
    op.create_index("idx_applications_recruiter", "applications", ["recruiter_id"])
    op.create_index("idx_applications_status", "applications", ["status"])

    op.create_table(
        "interviews",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("recruiter_id", UUID(as_uuid=True), sa.ForeignKey("recruiters.id", ondelete="CASCADE"), nullable=False),
        sa.Column("driver_id", UUID(as_uuid=True), sa.ForeignKey("drivers.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "application_id",
            UUID(as_uuid=True),
            sa.ForeignKey("applications.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("type", interview_type, nullable=False),
        sa.Column("status", interview_status, nullable=False, server_default="scheduled"),
        sa.Column("meeting_url", sa.String(500), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_interviews_scheduled", "interviews", ["scheduled_at"])
    op.create_index("idx_interviews_recruiter", "interviews", ["recruiter_id"])
    op.create_index("idx_interviews_driver", "interviews", ["driver_id"])

    op.create_table(
        "messages",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("sender_id", UUID(as_uuid=True), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("recipient_id", UUID(as_uuid=True), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "application_id",
            UUID(as_uuid=True),
            sa.ForeignKey("applications.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("read", sa.Boolean(), server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_messages_created_at", "messages", ["created_at"])
    op.create_index("idx_messages_sender", "messages", ["sender_id"])
    op.create_index("idx_messages_recipient", "messages", ["recipient_id"])

    op.create_table(
        "analytics_events",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True),
        sa.Column("event_type", sa.String(50), nullable=False),
        sa.Column("event_data", sa.JSON()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_analytics_events_event_type", "analytics_events", ["event_type"])
    op.create_index("ix_analytics_events_created_at", "analytics_events", ["created_at"])

    op.create_table(
        "audit_logs",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("detail", sa.Text(), server_default=""),
        sa.Column("ip_address", sa.String(45), server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_audit_logs_action", "audit_logs", ["action"])
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"])


def downgrade() -> None:
    for table in (
        "audit_logs",
        "analytics_events",
        "messages",
        "interviews",
        "applications",
        "job_postings",
        "contact_unlocks",
        "subscriptions",
        "recruiters",
        "drivers",
        "profiles",
    ):
        op.drop_table(table)
    bind = op.get_bind()
    for enum in (
        interview_status,
        interview_type,
        application_status,
        subscription_status,
        subscription_type,
        availability_status,
        user_role,
    ):
        enum.drop(bind, checkfirst=True)
