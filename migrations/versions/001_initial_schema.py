"""Initial schema: organizations, providers, services, working hours, blocks, appointments.

Revision ID: 001_initial
Revises:
Create Date: 2025-06-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "organizations",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("timezone", sa.String(), nullable=True),
        sa.Column("advance_booking_hours", sa.Integer(), nullable=True),
        sa.Column("max_advance_booking_days", sa.Integer(), nullable=True),
        sa.Column("weekend_booking_enabled", sa.Boolean(), nullable=True),
        sa.Column("booking_window_start", sa.Time(), nullable=True),
        sa.Column("booking_window_end", sa.Time(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "providers",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organization_id", sa.String(), nullable=False),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("specialization", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_providers_organization_id"), "providers", ["organization_id"], unique=False)

    op.create_table(
        "services",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organization_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_services_organization_id"), "services", ["organization_id"], unique=False)

    op.create_table(
        "service_providers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("service_id", sa.String(), nullable=False),
        sa.Column("provider_id", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(["service_id"], ["services.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["provider_id"], ["providers.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("service_id", "provider_id"),
    )
    op.create_index(op.f("ix_service_providers_service_id"), "service_providers", ["service_id"], unique=False)
    op.create_index(op.f("ix_service_providers_provider_id"), "service_providers", ["provider_id"], unique=False)

    op.create_table(
        "working_hours",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("provider_id", sa.String(), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("location_id", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.ForeignKeyConstraint(["provider_id"], ["providers.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_working_hours_day_of_week"),
        sa.CheckConstraint("start_time < end_time", name="ck_working_hours_start_before_end"),
    )
    op.create_index(op.f("ix_working_hours_provider_id"), "working_hours", ["provider_id"], unique=False)
    op.create_index(op.f("ix_working_hours_day_of_week"), "working_hours", ["day_of_week"], unique=False)

    op.create_table(
        "availability_blocks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("provider_id", sa.String(), nullable=False),
        sa.Column("start_datetime", sa.DateTime(), nullable=False),
        sa.Column("end_datetime", sa.DateTime(), nullable=False),
        sa.Column("reason", sa.String(), nullable=True),
        sa.Column("block_type", sa.String(), nullable=False, server_default="other"),
        sa.ForeignKeyConstraint(["provider_id"], ["providers.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_availability_blocks_provider_id"), "availability_blocks", ["provider_id"], unique=False)
    op.create_index(op.f("ix_availability_blocks_start_datetime"), "availability_blocks", ["start_datetime"], unique=False)
    op.create_index(op.f("ix_availability_blocks_end_datetime"), "availability_blocks", ["end_datetime"], unique=False)

    op.create_table(
        "appointments",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organization_id", sa.String(), nullable=False),
        sa.Column("provider_id", sa.String(), nullable=False),
        sa.Column("service_id", sa.String(), nullable=True),
        sa.Column("appointment_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="scheduled"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["provider_id"], ["providers.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["service_id"], ["services.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_appointments_organization_id"), "appointments", ["organization_id"], unique=False)
    op.create_index(op.f("ix_appointments_provider_id"), "appointments", ["provider_id"], unique=False)
    op.create_index(op.f("ix_appointments_appointment_date"), "appointments", ["appointment_date"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_appointments_appointment_date"), table_name="appointments")
    op.drop_index(op.f("ix_appointments_provider_id"), table_name="appointments")
    op.drop_index(op.f("ix_appointments_organization_id"), table_name="appointments")
    op.drop_table("appointments")
    op.drop_index(op.f("ix_availability_blocks_end_datetime"), table_name="availability_blocks")
    op.drop_index(op.f("ix_availability_blocks_start_datetime"), table_name="availability_blocks")
    op.drop_index(op.f("ix_availability_blocks_provider_id"), table_name="availability_blocks")
    op.drop_table("availability_blocks")
    op.drop_index(op.f("ix_working_hours_day_of_week"), table_name="working_hours")
    op.drop_index(op.f("ix_working_hours_provider_id"), table_name="working_hours")
    op.drop_table("working_hours")
    op.drop_index(op.f("ix_service_providers_provider_id"), table_name="service_providers")
    op.drop_index(op.f("ix_service_providers_service_id"), table_name="service_providers")
    op.drop_table("service_providers")
    op.drop_index(op.f("ix_services_organization_id"), table_name="services")
    op.drop_table("services")
    op.drop_index(op.f("ix_providers_organization_id"), table_name="providers")
    op.drop_table("providers")
    op.drop_table("organizations")
