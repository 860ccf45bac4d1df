"""create payments table

Revision ID: 0007
Revises: 0006
Create Date: 2025-07-01 00:06:00.000000
"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0007"
down_revision = "0006"
branch_labels = None
depends_on = None

payment_status_enum = sa.Enum("paid", "failed", "pending", name="payment_status_enum")


def upgrade() -> None:
    op.create_table(
        "payments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "order_id",
            sa.Uuid(),
            sa.ForeignKey("orders.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column(
            "payment_status",
            payment_status_enum,
            server_default="pending",
            nullable=False,
        ),
        sa.Column(
            "payment_provider", sa.String(50), server_default="stripe", nullable=False
        ),
        sa.Column("provider_charge_id", sa.String(255), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_payments_payment_status", "payments", ["payment_status"])
    op.create_index("ix_payments_payment_provider", "payments", ["payment_provider"])


def downgrade() -> None:
    op.drop_table("payments")
    payment_status_enum.drop(op.get_bind(), checkfirst=True)
