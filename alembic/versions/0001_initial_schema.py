"""initial schema: vendor applications, documents, status history, counters

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00
"""
from alembic import op
import sqlalchemy as sa


revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "id_counters",
        sa.Column("name", sa.String(length=50), primary_key=True),
        sa.Column("value", sa.Integer(), nullable=False),
    )

    op.create_table(
        "vendor_applications",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("vendor_id", sa.String(length=32), nullable=False),
        sa.Column("owner_user_id", sa.String(length=64), nullable=True),
        sa.Column("business_name", sa.String(length=255), nullable=False),
        sa.Column("business_category", sa.String(length=50), nullable=False),
        sa.Column("contact_person", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=False),
        sa.Column("address_street", sa.String(length=255), nullable=False),
        sa.Column("address_city", sa.String(length=100), nullable=False),
        sa.Column("address_state", sa.String(length=100), nullable=False),
        sa.Column("address_postal_code", sa.String(length=20), nullable=False),
        sa.Column("address_country", sa.String(length=100), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reviewed_by", sa.String(length=64), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_vendor_applications_vendor_id", "vendor_applications", ["vendor_id"], unique=True)
    op.create_index("ix_vendor_applications_email", "vendor_applications", ["email"], unique=True)
    op.create_index("ix_vendor_applications_owner_user_id", "vendor_applications", ["owner_user_id"])
    op.create_index("ix_vendor_applications_business_name", "vendor_applications", ["business_name"])
    op.create_index("ix_vendor_applications_status", "vendor_applications", ["status"])
    op.create_index("ix_vendor_applications_submitted_at", "vendor_applications", ["submitted_at"])

    op.create_table(
        "vendor_documents",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "application_id",
            sa.String(length=36),
            sa.ForeignKey("vendor_applications.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("document_type", sa.String(length=50), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("file_url", sa.String(length=500), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("uploaded_by", sa.String(length=64), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_vendor_documents_application_id", "vendor_documents", ["application_id"])

    op.create_table(
        "vendor_status_history",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "application_id",
            sa.String(length=36),
            sa.ForeignKey("vendor_applications.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("changed_by", sa.String(length=64), nullable=True),
        sa.Column("changed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("system_generated", sa.Boolean(), nullable=False),
        sa.UniqueConstraint("application_id", "sequence", name="uq_status_history_position"),
    )
    op.create_index("ix_vendor_status_history_application_id", "vendor_status_history", ["application_id"])


def downgrade() -> None:
    op.drop_table("vendor_status_history")
    op.drop_table("vendor_documents")
    op.drop_table("vendor_applications")
    op.drop_table("id_counters")
