"""create products table

Revision ID: 0002
Revises: 0001
Create Date: 2025-07-01 00:01:00.000000
"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("egg_color", sa.String(50), nullable=True),
        sa.Column("egg_count", sa.Integer(), nullable=False),
        sa.Column("image_url", sa.String(500), nullable=False),
        sa.Column("b2c_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("b2b_price", sa.Numeric(10, 2), nullable=False),
        sa.Column(
            "inventory_by_carton", sa.Integer(), server_default="0", nullable=False
        ),
        sa.Column("inventory_by_box", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_available", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint("b2c_price > 0", name="positive_b2c_price"),
        sa.CheckConstraint("b2b_price > 0", name="positive_b2b_price"),
        sa.CheckConstraint(
            "inventory_by_carton >= 0", name="non_negative_carton_inventory"
        ),
        sa.CheckConstraint("inventory_by_box >= 0", name="non_negative_box_inventory"),
    )
    for column in (
        "name",
        "category",
        "egg_color",
        "egg_count",
        "is_available",
        "is_active",
        "created_at",
    ):
        op.create_index(f"ix_products_{column}", "products", [column])


def downgrade() -> None:
    op.drop_table("products")
