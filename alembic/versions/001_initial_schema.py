"""Initial schema - permission profiles, payments, invoices, alerts, business events.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "permission_profile",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("is_system", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_permission_profile_name", "permission_profile", ["name"], unique=True)

    op.create_table(
        "permission_grant",
        sa.Column(
            "profile_id",
            sa.UUID(),
            sa.ForeignKey("permission_profile.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("operation_key", sa.String(150), primary_key=True),
        sa.Column("permission_types", postgresql.ARRAY(sa.String(20)), nullable=False),
    )

    op.create_table(
        "user_profile",
        sa.Column("user_id", sa.String(255), primary_key=True),
        sa.Column(
            "profile_id",
            sa.UUID(),
            sa.ForeignKey("permission_profile.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("assigned_by", sa.String(255), nullable=True),
    )

    op.create_table(
        "payment",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("contract_id", sa.String(64), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("method", sa.String(50), nullable=True),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("due_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("external_id", sa.String(255), nullable=True),
    )
    op.create_index("ix_payment_contract_status", "payment", ["contract_id", "status"])
    op.create_index("ix_payment_status_paid_at", "payment", ["status", "paid_at"])

    # gapless numbering: the counter row is updated in the issuing transaction
    op.create_table(
        "invoice_counter",
        sa.Column("point_of_sale", sa.Integer(), primary_key=True),
        sa.Column("last_number", sa.BigInteger(), nullable=False, server_default="0"),
    )
    op.execute("INSERT INTO invoice_counter (point_of_sale, last_number) VALUES (1, 0)")

    op.create_table(
        "invoice",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("payment_id", sa.String(64), sa.ForeignKey("payment.id"), nullable=False),
        sa.Column("contract_id", sa.String(64), nullable=False),
        sa.Column("number", sa.String(20), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
    )
    # one invoice per payment; invoicing relies on ON CONFLICT (payment_id)
    op.create_index("ix_invoice_payment_id", "invoice", ["payment_id"], unique=True)
    op.create_index("ix_invoice_number", "invoice", ["number"], unique=True)

    op.create_table(
        "alert",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("kind", sa.String(50), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("contract_id", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_alert_contract_kind_created", "alert", ["contract_id", "kind", "created_at"])

    op.create_table(
        "business_event",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("operation_key", sa.String(150), nullable=False),
        sa.Column("entity_type", sa.String(100), nullable=False),
        sa.Column("entity_id", sa.String(255), nullable=False),
        sa.Column("payload", postgresql.JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("acting_user_id", sa.String(255), nullable=True),
        sa.Column(
            "parent_event_id",
            sa.UUID(),
            sa.ForeignKey("business_event.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("error", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("processed_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_business_event_status_created", "business_event", ["status", "created_at"])
    op.create_index("ix_business_event_entity", "business_event", ["entity_type", "entity_id"])
    op.create_index("ix_business_event_operation_key", "business_event", ["operation_key"])


def downgrade() -> None:
    op.drop_table("business_event")
    op.drop_table("alert")
    op.drop_table("invoice")
    op.drop_table("invoice_counter")
    op.drop_table("payment")
    op.drop_table("user_profile")
    op.drop_table("permission_grant")
    op.drop_table("permission_profile")
