from __future__ import annotations

import sqlalchemy as sa

from alembic import op

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(length=36), primary_key=True)


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True)


def _status() -> sa.Column:
    return sa.Column("status", sa.String(length=1), server_default="A", nullable=False)


def upgrade() -> None:
    op.create_table(
        "brand",
        _id(),
        sa.Column("name", sa.String(length=120), nullable=False, unique=True),
        _status(),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "category",
        _id(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("type", sa.String(length=10), server_default="main", nullable=False),
        sa.Column("parent_id", sa.String(length=36), sa.ForeignKey("category.id"), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        _status(),
        _created_at(),
    )
    op.create_index("ix_category_parent_id", "category", ["parent_id"])
    op.create_index("ix_category_type_name", "category", ["type", "name"])

    op.create_table(
        "part",
        _id(),
        sa.Column("master_part_no", sa.String(length=100), nullable=True),
        sa.Column("part_no", sa.String(length=100), nullable=False),
        sa.Column("brand", sa.String(length=120), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("main_category", sa.String(length=120), nullable=True),
        sa.Column("sub_category", sa.String(length=120), nullable=True),
        sa.Column("application", sa.String(length=200), nullable=True),
        sa.Column("origin", sa.String(length=100), nullable=True),
        sa.Column("grade", sa.String(length=20), nullable=True),
        sa.Column("uom", sa.String(length=20), nullable=True),
        sa.Column("cost", sa.Numeric(15, 2), nullable=True),
        sa.Column("price", sa.Numeric(15, 2), nullable=True),
        _status(),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_part_part_no", "part", ["part_no"])
    op.create_index("ix_part_master_part_no", "part", ["master_part_no"])
    op.create_index("ix_part_brand", "part", ["brand"])

    op.create_table(
        "part_model",
        _id(),
        sa.Column("part_id", sa.String(length=36), sa.ForeignKey("part.id", ondelete="CASCADE"), nullable=False),
        sa.Column("model_no", sa.String(length=100), nullable=False),
        sa.Column("qty_used", sa.Integer(), server_default="1", nullable=False),
        sa.Column("tab", sa.String(length=10), server_default="P1", nullable=False),
    )
    op.create_index("ix_part_model_part_id", "part_model", ["part_id"])

    op.create_table(
        "stock",
        _id(),
        sa.Column(
            "part_id",
            sa.String(length=36),
            sa.ForeignKey("part.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("quantity", sa.Integer(), server_default="0", nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "kit",
        _id(),
        sa.Column("kit_no", sa.String(length=100), nullable=False, unique=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("total_cost", sa.Numeric(15, 2), server_default="0", nullable=False),
        sa.Column("price", sa.Numeric(15, 2), server_default="0", nullable=False),
        _status(),
        _created_at(),
    )
    op.create_table(
        "kit_item",
        _id(),
        sa.Column("kit_id", sa.String(length=36), sa.ForeignKey("kit.id", ondelete="CASCADE"), nullable=False),
        sa.Column("part_id", sa.String(length=36), sa.ForeignKey("part.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), server_default="1", nullable=False),
    )
    op.create_index("ix_kit_item_kit_id", "kit_item", ["kit_id"])
    op.create_index("ix_kit_item_part_id", "kit_item", ["part_id"])

    op.create_table(
        "store",
        _id(),
        sa.Column("code", sa.String(length=50), nullable=False, unique=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        _status(),
        _created_at(),
    )
    op.create_table(
        "rack",
        _id(),
        sa.Column("rack_number", sa.String(length=50), nullable=False),
        sa.Column("store_id", sa.String(length=36), sa.ForeignKey("store.id"), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _status(),
        _created_at(),
        sa.UniqueConstraint("store_id", "rack_number", name="uq_rack_store_number"),
    )
    op.create_index("ix_rack_store_id", "rack", ["store_id"])

    op.create_table(
        "supplier",
        _id(),
        sa.Column("code", sa.String(length=50), nullable=True, unique=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("contact_person", sa.String(length=120), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("state", sa.String(length=100), nullable=True),
        _status(),
        _created_at(),
    )
    op.create_index("ix_supplier_name", "supplier", ["name"])

    op.create_table(
        "purchase_order",
        _id(),
        sa.Column("po_no", sa.String(length=100), nullable=False, unique=True),
        sa.Column("supplier_id", sa.String(length=36), sa.ForeignKey("supplier.id"), nullable=False),
        sa.Column("type", sa.String(length=30), server_default="purchase", nullable=False),
        sa.Column("status", sa.String(length=30), server_default="draft", nullable=False),
        sa.Column("order_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expected_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("total_amount", sa.Numeric(15, 2), server_default="0", nullable=False),
        _created_at(),
    )
    op.create_index("ix_purchase_order_supplier_id", "purchase_order", ["supplier_id"])
    op.create_table(
        "purchase_order_item",
        _id(),
        sa.Column(
            "purchase_order_id",
            sa.String(length=36),
            sa.ForeignKey("purchase_order.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("part_id", sa.String(length=36), sa.ForeignKey("part.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Numeric(15, 2), nullable=True),
        sa.Column("total_price", sa.Numeric(15, 2), nullable=True),
    )
    op.create_index("ix_purchase_order_item_purchase_order_id", "purchase_order_item", ["purchase_order_id"])
    op.create_index("ix_purchase_order_item_part_id", "purchase_order_item", ["part_id"])

    op.create_table(
        "inventory_adjustment",
        _id(),
        sa.Column("adjustment_no", sa.String(length=100), nullable=True, unique=True),
        sa.Column("total", sa.Integer(), server_default="0", nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(length=36), nullable=True),
        _created_at(),
    )
    op.create_index("ix_inventory_adjustment_date", "inventory_adjustment", ["date"])
    op.create_table(
        "inventory_adjustment_item",
        _id(),
        sa.Column(
            "adjustment_id",
            sa.String(length=36),
            sa.ForeignKey("inventory_adjustment.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), server_default="0", nullable=False),
        sa.Column("part_id", sa.String(length=36), sa.ForeignKey("part.id"), nullable=True),
        sa.Column("part_no", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("previous_quantity", sa.Integer(), nullable=True),
        sa.Column("adjusted_quantity", sa.Integer(), nullable=True),
        sa.Column("new_quantity", sa.Integer(), nullable=True),
        sa.Column("reason", sa.Text(), nullable=True),
    )
    op.create_index("ix_inventory_adjustment_item_adjustment_id", "inventory_adjustment_item", ["adjustment_id"])
    op.create_index("ix_inventory_adjustment_item_part_id", "inventory_adjustment_item", ["part_id"])


def downgrade() -> None:
    for table in (
        "inventory_adjustment_item",
        "inventory_adjustment",
        "purchase_order_item",
        "purchase_order",
        "supplier",
        "rack",
        "store",
        "kit_item",
        "kit",
        "stock",
        "part_model",
        "part",
        "category",
        "brand",
    ):
        op.drop_table(table)
