"""initial claims schema

Revision ID: 3b1d7e0a9c42
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3b1d7e0a9c42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "claims_claim",
        sa.Column("claim_number", sa.String(length=20), nullable=False),
        sa.Column("organization_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "DRAFT",
                "SUBMITTED",
                "UNDER_REVIEW",
                "APPROVED",
                "DENIED",
                "CLOSED",
                name="claimstatus",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column(
            "type",
            sa.Enum("AUTO", "PROPERTY", "HEALTH", "LIABILITY", name="claimtype", native_enum=False),
            nullable=False,
        ),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("incident_date", sa.Date(), nullable=True),
        sa.Column("filed_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("amount", sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_claims_claim_claim_number"), "claims_claim", ["claim_number"], unique=True
    )
    op.create_index(
        op.f("ix_claims_claim_organization_id"), "claims_claim", ["organization_id"]
    )
    op.create_index(op.f("ix_claims_claim_user_id"), "claims_claim", ["user_id"])
    op.create_index(op.f("ix_claims_claim_status"), "claims_claim", ["status"])
    op.create_index(op.f("ix_claims_claim_type"), "claims_claim", ["type"])

    op.create_table(
        "audit_claim_event",
        sa.Column("claim_id", sa.Uuid(), nullable=False),
        sa.Column("actor_user_id", sa.Uuid(), nullable=False),
        sa.Column("actor_display_name", sa.String(length=255), nullable=True),
        sa.Column(
            "event_type",
            sa.Enum(
                "CREATED",
                "UPDATED",
                "SUBMITTED",
                "REVIEWED",
                "APPROVED",
                "DENIED",
                "CLOSED",
                name="eventtype",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["claim_id"], ["claims_claim.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_audit_claim_event_claim_id"), "audit_claim_event", ["claim_id"])
    op.create_index(
        op.f("ix_audit_claim_event_actor_user_id"), "audit_claim_event", ["actor_user_id"]
    )
    op.create_index(op.f("ix_audit_claim_event_event_type"), "audit_claim_event", ["event_type"])

    op.create_table(
        "notes_claim_note",
        sa.Column("claim_id", sa.Uuid(), nullable=False),
        sa.Column("author_user_id", sa.Uuid(), nullable=False),
        sa.Column("author_display_name", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["claim_id"], ["claims_claim.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_notes_claim_note_claim_id"), "notes_claim_note", ["claim_id"])

    op.create_table(
        "attachments_claim_attachment",
        sa.Column("claim_id", sa.Uuid(), nullable=False),
        sa.Column("filename", sa.String(length=500), nullable=False),
        sa.Column("file_size_bytes", sa.BigInteger(), nullable=False),
        sa.Column("mime_type", sa.String(length=100), nullable=False),
        sa.Column("uploaded_by_user_id", sa.Uuid(), nullable=False),
        sa.Column("uploaded_by_display_name", sa.String(length=255), nullable=False),
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["claim_id"], ["claims_claim.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_attachments_claim_attachment_claim_id"),
        "attachments_claim_attachment",
        ["claim_id"],
    )


def downgrade() -> None:
    op.drop_index(
        op.f("ix_attachments_claim_attachment_claim_id"),
        table_name="attachments_claim_attachment",
    )
    op.drop_table("attachments_claim_attachment")
    op.drop_index(op.f("ix_notes_claim_note_claim_id"), table_name="notes_claim_note")
    op.drop_table("notes_claim_note")
    op.drop_index(op.f("ix_audit_claim_event_event_type"), table_name="audit_claim_event")
    op.drop_index(op.f("ix_audit_claim_event_actor_user_id"), table_name="audit_claim_event")
    op.drop_index(op.f("ix_audit_claim_event_claim_id"), table_name="audit_claim_event")
    op.drop_table("audit_claim_event")
    op.drop_index(op.f("ix_claims_claim_type"), table_name="claims_claim")
    op.drop_index(op.f("ix_claims_claim_status"), table_name="claims_claim")
    op.drop_index(op.f("ix_claims_claim_user_id"), table_name="claims_claim")
    op.drop_index(op.f("ix_claims_claim_organization_id"), table_name="claims_claim")
    op.drop_index(op.f("ix_claims_claim_claim_number"), table_name="claims_claim")
    op.drop_table("claims_claim")
