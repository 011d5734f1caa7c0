"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_MONEY = sa.Numeric(12, 2)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Needed for the payroll no-overlap exclusion constraint (= on text inside GiST).
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")

    op.create_table(
        "department",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("code", sa.String(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("name", name="uq_department_name"),
        sa.UniqueConstraint("code", name="uq_department_code"),
    )
    op.create_table(
        "position",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("department_id", sa.String(), sa.ForeignKey("department.id", ondelete="SET NULL"), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_position_department_id", "position", ["department_id"])

    op.create_table(
        "employee",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("employee_code", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("department_id", sa.String(), sa.ForeignKey("department.id"), nullable=False),
        sa.Column("position_id", sa.String(), sa.ForeignKey("position.id"), nullable=False),
        sa.Column("manager_id", sa.String(), sa.ForeignKey("employee.id", ondelete="SET NULL"), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("employment_type", sa.String(), nullable=False),
        sa.Column("hire_date", sa.Date(), nullable=False),
        sa.Column("termination_date", sa.Date(), nullable=True),
        sa.Column("salary", _MONEY, nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("employee_code", name="uq_employee_employee_code"),
    )
    op.create_index("ix_employee_department_id", "employee", ["department_id"])
    op.create_index("ix_employee_position_id", "employee", ["position_id"])
    op.create_index("ix_employee_manager_id", "employee", ["manager_id"])
    op.create_index("ix_employee_status", "employee", ["status"])
    op.create_index("ux_employee_email_lower", "employee", [sa.text("lower(email)")], unique=True)

    op.create_table(
        "user_account",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("employee_id", sa.String(), sa.ForeignKey("employee.id", ondelete="SET NULL"), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("email", name="uq_user_account_email"),
    )
    op.create_index("ix_user_account_employee_id", "user_account", ["employee_id"])

    op.create_table(
        "job_posting",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("department_id", sa.String(), sa.ForeignKey("department.id"), nullable=False),
        sa.Column("position_id", sa.String(), sa.ForeignKey("position.id"), nullable=False),
        sa.Column("employment_type", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("salary_min", _MONEY, nullable=True),
        sa.Column("salary_max", _MONEY, nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("closed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by_id", sa.String(), sa.ForeignKey("user_account.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_job_posting_department_id", "job_posting", ["department_id"])
    op.create_index("ix_job_posting_status", "job_posting", ["status"])

    op.create_table(
        "job_application",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("job_posting_id", sa.String(), sa.ForeignKey("job_posting.id", ondelete="CASCADE"), nullable=False),
        sa.Column("candidate_name", sa.String(), nullable=False),
        sa.Column("candidate_email", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_job_application_job_posting_id", "job_application", ["job_posting_id"])
    op.create_index("ix_job_application_status", "job_application", ["status"])

    op.create_table(
        "interview",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("application_id", sa.String(), sa.ForeignKey("job_application.id", ondelete="CASCADE"), nullable=False),
        sa.Column("interview_type", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("interviewer_ids", postgresql.ARRAY(sa.String()), nullable=False),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("meeting_link", sa.String(), nullable=True),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by_id", sa.String(), sa.ForeignKey("user_account.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("rating IS NULL OR rating BETWEEN 1 AND 5", name="ck_interview_rating"),
    )
    op.create_index("ix_interview_application_id", "interview", ["application_id"])
    op.create_index("ix_interview_status", "interview", ["status"])
    op.create_index("ix_interview_scheduled_at", "interview", ["scheduled_at"])
    op.create_index("ix_interview_interviewer_ids", "interview", ["interviewer_ids"], postgresql_using="gin")

    op.create_table(
        "onboarding_task",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("employee_id", sa.String(), sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=False),
        sa.Column("assignee_id", sa.String(), sa.ForeignKey("employee.id", ondelete="SET NULL"), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("sort_order", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_onboarding_task_employee_id", "onboarding_task", ["employee_id"])
    op.create_index("ix_onboarding_task_assignee_id", "onboarding_task", ["assignee_id"])
    op.create_index("ix_onboarding_task_status", "onboarding_task", ["status"])
    op.create_index(
        "ux_onboarding_task_open_title",
        "onboarding_task",
        ["employee_id", sa.text("lower(title)")],
        unique=True,
        postgresql_where=sa.text("status IN ('PENDING', 'IN_PROGRESS')"),
    )

    op.create_table(
        "payroll_record",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("employee_id", sa.String(), sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=False),
        sa.Column("pay_period_start", sa.Date(), nullable=False),
        sa.Column("pay_period_end", sa.Date(), nullable=False),
        sa.Column("base_salary", _MONEY, nullable=False),
        sa.Column("overtime", _MONEY, server_default=sa.text("0"), nullable=False),
        sa.Column("bonuses", _MONEY, server_default=sa.text("0"), nullable=False),
        sa.Column("allowances", _MONEY, server_default=sa.text("0"), nullable=False),
        sa.Column("deductions", _MONEY, server_default=sa.text("0"), nullable=False),
        sa.Column("tax", _MONEY, server_default=sa.text("0"), nullable=False),
        sa.Column("gross_pay", _MONEY, nullable=True),
        sa.Column("net_pay", _MONEY, nullable=False),
        sa.Column("currency", sa.String(3), server_default=sa.text("'USD'"), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("processed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("processed_by_id", sa.String(), sa.ForeignKey("user_account.id", ondelete="SET NULL"), nullable=True),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("paid_by_id", sa.String(), sa.ForeignKey("user_account.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("pay_period_start < pay_period_end", name="ck_payroll_record_period"),
    )
    op.create_index("ix_payroll_record_employee_id", "payroll_record", ["employee_id"])
    op.create_index("ix_payroll_record_status", "payroll_record", ["status"])
    op.create_index("ix_payroll_record_employee_period", "payroll_record", ["employee_id", "pay_period_start"])
    op.execute(
        "ALTER TABLE payroll_record ADD CONSTRAINT ex_payroll_record_no_overlap "
        "EXCLUDE USING gist (employee_id WITH =, "
        "daterange(pay_period_start, pay_period_end, '[)') WITH &&) "
        "WHERE (status <> 'CANCELLED')"
    )

    op.create_table(
        "document",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("employee_id", sa.String(), sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("document_type", sa.String(), nullable=False),
        sa.Column("status", sa.String(), server_default=sa.text("'ACTIVE'"), nullable=False),
        sa.Column("file_name", sa.String(), nullable=False),
        sa.Column("mime_type", sa.String(), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("checksum", sa.String(), nullable=False),
        sa.Column("storage_ref", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_confidential", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("uploaded_by_id", sa.String(), sa.ForeignKey("user_account.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("storage_ref", name="uq_document_storage_ref"),
    )
    op.create_index("ix_document_employee_id", "document", ["employee_id"])
    op.create_index("ix_document_document_type", "document", ["document_type"])
    op.create_index("ix_document_checksum", "document", ["checksum"])

    op.create_table(
        "audit_log",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("actor_id", sa.String(), nullable=True),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("resource_type", sa.String(), nullable=False),
        sa.Column("resource_id", sa.String(), nullable=True),
        sa.Column("before_snapshot", postgresql.JSONB(), nullable=True),
        sa.Column("after_snapshot", postgresql.JSONB(), nullable=True),
        sa.Column("ip_address", sa.String(), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("request_id", sa.String(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_audit_log_actor_id", "audit_log", ["actor_id"])
    op.create_index("ix_audit_log_action", "audit_log", ["action"])
    op.create_index("ix_audit_log_timestamp", "audit_log", ["timestamp"])
    op.create_index("ix_audit_log_resource", "audit_log", ["resource_type", "resource_id"])


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        "audit_log",
        "document",
        "payroll_record",
        "onboarding_task",
        "interview",
        "job_application",
        "job_posting",
        "user_account",
        "employee",
        "position",
        "department",
    ):
        op.drop_table(table)
