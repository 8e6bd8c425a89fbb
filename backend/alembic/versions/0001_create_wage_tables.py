"""create wage settlement tables

Revision ID: 0001
Revises: None
Create Date: 2026-02-01
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "organizations",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "workers",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("organization_id", sa.String(length=64), nullable=False),
        sa.Column("full_name", sa.String(length=200), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_workers_organization_id"), "workers", ["organization_id"], unique=False)

    op.create_table(
        "attendance_intervals",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("organization_id", sa.String(length=64), nullable=False),
        sa.Column("worker_id", sa.String(length=64), nullable=False),
        sa.Column("clock_in", sa.DateTime(timezone=True), nullable=False),
        sa.Column("clock_out", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"]),
        sa.ForeignKeyConstraint(["worker_id"], ["workers.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_attendance_intervals_organization_id"), "attendance_intervals", ["organization_id"], unique=False
    )
    op.create_index(op.f("ix_attendance_intervals_worker_id"), "attendance_intervals", ["worker_id"], unique=False)
    op.create_index(op.f("ix_attendance_intervals_clock_in"), "attendance_intervals", ["clock_in"], unique=False)

    op.create_table(
        "rate_schedules",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("organization_id", sa.String(length=64), nullable=False),
        sa.Column("worker_id", sa.String(length=64), nullable=False),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("effective_from", sa.Date(), nullable=False),
        sa.Column("effective_to", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"]),
        sa.ForeignKeyConstraint(["worker_id"], ["workers.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_rate_schedules_organization_id"), "rate_schedules", ["organization_id"], unique=False)
    op.create_index(op.f("ix_rate_schedules_worker_id"), "rate_schedules", ["worker_id"], unique=False)

    # No unique constraint on (organization, worker, year, month): reruns append rows.
    op.create_table(
        "wage_calculations",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("organization_id", sa.String(length=64), nullable=False),
        sa.Column("worker_id", sa.String(length=64), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("total_hours", sa.Numeric(10, 2), nullable=False),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("gross_amount", sa.Integer(), nullable=False),
        sa.Column("deductions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("net_amount", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="calculated"),
        sa.Column("approved_by", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"]),
        sa.ForeignKeyConstraint(["worker_id"], ["workers.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_wage_calculations_organization_id"), "wage_calculations", ["organization_id"], unique=False
    )
    op.create_index(op.f("ix_wage_calculations_worker_id"), "wage_calculations", ["worker_id"], unique=False)

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("actor_id", sa.String(length=64), nullable=False),
        sa.Column("organization_id", sa.String(length=64), nullable=False),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("entity", sa.String(length=100), nullable=False),
        sa.Column("entity_id", sa.String(length=100), nullable=False),
        sa.Column("detail", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_audit_logs_organization_id"), "audit_logs", ["organization_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_audit_logs_organization_id"), table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_index(op.f("ix_wage_calculations_worker_id"), table_name="wage_calculations")
    op.drop_index(op.f("ix_wage_calculations_organization_id"), table_name="wage_calculations")
    op.drop_table("wage_calculations")
    op.drop_index(op.f("ix_rate_schedules_worker_id"), table_name="rate_schedules")
    op.drop_index(op.f("ix_rate_schedules_organization_id"), table_name="rate_schedules")
    op.drop_table("rate_schedules")
    op.drop_index(op.f("ix_attendance_intervals_clock_in"), table_name="attendance_intervals")
    op.drop_index(op.f("ix_attendance_intervals_worker_id"), table_name="attendance_intervals")
    op.drop_index(op.f("ix_attendance_intervals_organization_id"), table_name="attendance_intervals")
    op.drop_table("attendance_intervals")
    op.drop_index(op.f("ix_workers_organization_id"), table_name="workers")
    op.drop_table("workers")
    op.drop_table("organizations")
