"""
Catalog, stock and adjustment tables.

Parts reference their brand by *name* rather than by foreign key, which is
why brand deletion is guarded by a count of parts carrying that name instead
of relying on the database to refuse it.
"""
from __future__ import annotations

import datetime as dt
from decimal import Decimal

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from partsdesk.db.base_class import Base, new_id, utcnow

ACTIVE = "A"
INACTIVE = "I"


class Brand(Base):
    __tablename__ = "brand"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    status: Mapped[str] = mapped_column(String(1), default=ACTIVE, server_default=ACTIVE)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), onupdate=utcnow, nullable=True)

    def __repr__(self) -> str:
        return f"<Brand(id={self.id}, name='{self.name}')>"


class Category(Base):
    """Main categories and their sub categories (``type`` is ``main`` or ``sub``)."""

    __tablename__ = "category"
    __table_args__ = (Index("ix_category_type_name", "type", "name"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    type: Mapped[str] = mapped_column(String(10), default="main", server_default="main")
    parent_id: Mapped[str | None] = mapped_column(ForeignKey("category.id"), nullable=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(1), default=ACTIVE, server_default=ACTIVE)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    parent: Mapped[Category | None] = relationship(
        "Category",
        remote_side="Category.id",
        back_populates="subcategories",
    )
    subcategories: Mapped[list[Category]] = relationship("Category", back_populates="parent")

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}', type='{self.type}')>"


class Part(Base):
    __tablename__ = "part"
    __table_args__ = (
        Index("ix_part_part_no", "part_no"),
        Index("ix_part_master_part_no", "master_part_no"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    master_part_no: Mapped[str | None] = mapped_column(String(100), nullable=True)
    part_no: Mapped[str] = mapped_column(String(100), nullable=False)
    brand: Mapped[str | None] = mapped_column(String(120), nullable=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    main_category: Mapped[str | None] = mapped_column(String(120), nullable=True)
    sub_category: Mapped[str | None] = mapped_column(String(120), nullable=True)
    application: Mapped[str | None] = mapped_column(String(200), nullable=True)
    origin: Mapped[str | None] = mapped_column(String(100), nullable=True)
    grade: Mapped[str | None] = mapped_column(String(20), nullable=True)
    uom: Mapped[str | None] = mapped_column(String(20), nullable=True)
    cost: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    price: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    status: Mapped[str] = mapped_column(String(1), default=ACTIVE, server_default=ACTIVE)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), onupdate=utcnow, nullable=True)

    stock: Mapped[Stock | None] = relationship("Stock", back_populates="part", uselist=False)
    models: Mapped[list[PartModel]] = relationship(
        "PartModel",
        back_populates="part",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Part(id={self.id}, part_no='{self.part_no}')>"


class PartModel(Base):
    """Vehicle/equipment model a part fits, with the quantity it uses."""

    __tablename__ = "part_model"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    part_id: Mapped[str] = mapped_column(ForeignKey("part.id", ondelete="CASCADE"), nullable=False, index=True)
    model_no: Mapped[str] = mapped_column(String(100), nullable=False)
    qty_used: Mapped[int] = mapped_column(Integer, default=1, server_default="1")
    tab: Mapped[str] = mapped_column(String(10), default="P1", server_default="P1")

    part: Mapped[Part] = relationship("Part", back_populates="models")


class Stock(Base):
    """On-hand quantity, one row per part at most. Negative values are allowed."""

    __tablename__ = "stock"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    part_id: Mapped[str] = mapped_column(ForeignKey("part.id", ondelete="CASCADE"), nullable=False, unique=True)
    quantity: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    part: Mapped[Part] = relationship("Part", back_populates="stock")

    def __repr__(self) -> str:
        return f"<Stock(part_id={self.part_id}, quantity={self.quantity})>"


class Kit(Base):
    __tablename__ = "kit"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    kit_no: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    total_cost: Mapped[Decimal] = mapped_column(Numeric(15, 2), default=0, server_default="0")
    price: Mapped[Decimal] = mapped_column(Numeric(15, 2), default=0, server_default="0")
    status: Mapped[str] = mapped_column(String(1), default=ACTIVE, server_default=ACTIVE)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    items: Mapped[list[KitItem]] = relationship(
        "KitItem",
        back_populates="kit",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Kit(id={self.id}, kit_no='{self.kit_no}')>"


class KitItem(Base):
    __tablename__ = "kit_item"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    kit_id: Mapped[str] = mapped_column(ForeignKey("kit.id", ondelete="CASCADE"), nullable=False, index=True)
    part_id: Mapped[str] = mapped_column(ForeignKey("part.id"), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, default=1, server_default="1")

    kit: Mapped[Kit] = relationship("Kit", back_populates="items")
    part: Mapped[Part] = relationship("Part")


class Store(Base):
    __tablename__ = "store"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    status: Mapped[str] = mapped_column(String(1), default=ACTIVE, server_default=ACTIVE)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    racks: Mapped[list[Rack]] = relationship("Rack", back_populates="store")


class Rack(Base):
    __tablename__ = "rack"
    __table_args__ = (UniqueConstraint("store_id", "rack_number", name="uq_rack_store_number"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    rack_number: Mapped[str] = mapped_column(String(50), nullable=False)
    store_id: Mapped[str] = mapped_column(ForeignKey("store.id"), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(1), default=ACTIVE, server_default=ACTIVE)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    store: Mapped[Store] = relationship("Store", back_populates="racks")

    def __repr__(self) -> str:
        return f"<Rack(id={self.id}, rack_number='{self.rack_number}')>"


class Supplier(Base):
    __tablename__ = "supplier"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    code: Mapped[str | None] = mapped_column(String(50), nullable=True, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    contact_person: Mapped[str | None] = mapped_column(String(120), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(String(1), default=ACTIVE, server_default=ACTIVE)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    purchase_orders: Mapped[list[PurchaseOrder]] = relationship("PurchaseOrder", back_populates="supplier")

    def __repr__(self) -> str:
        return f"<Supplier(id={self.id}, name='{self.name}')>"


class PurchaseOrder(Base):
    __tablename__ = "purchase_order"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    po_no: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    supplier_id: Mapped[str] = mapped_column(ForeignKey("supplier.id"), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(30), default="purchase", server_default="purchase")
    status: Mapped[str] = mapped_column(String(30), default="draft", server_default="draft")
    order_date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    expected_date: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), default=0, server_default="0")
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    supplier: Mapped[Supplier] = relationship("Supplier", back_populates="purchase_orders")
    items: Mapped[list[PurchaseOrderItem]] = relationship(
        "PurchaseOrderItem",
        back_populates="purchase_order",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<PurchaseOrder(id={self.id}, po_no='{self.po_no}')>"


class PurchaseOrderItem(Base):
    __tablename__ = "purchase_order_item"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    purchase_order_id: Mapped[str] = mapped_column(
        ForeignKey("purchase_order.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    part_id: Mapped[str] = mapped_column(ForeignKey("part.id"), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(15, 2), default=0)
    total_price: Mapped[Decimal] = mapped_column(Numeric(15, 2), default=0)

    purchase_order: Mapped[PurchaseOrder] = relationship("PurchaseOrder", back_populates="items")
    part: Mapped[Part] = relationship("Part")


class InventoryAdjustment(Base):
    """
    Manual correction of on-hand quantities.

    Written once together with its items and the matching stock rows; never
    updated in place afterwards.
    """

    __tablename__ = "inventory_adjustment"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    adjustment_no: Mapped[str | None] = mapped_column(String(100), nullable=True, unique=True)
    total: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    items: Mapped[list[InventoryAdjustmentItem]] = relationship(
        "InventoryAdjustmentItem",
        back_populates="adjustment",
        cascade="all, delete-orphan",
        order_by="InventoryAdjustmentItem.position",
    )

    def __repr__(self) -> str:
        return f"<InventoryAdjustment(id={self.id}, total={self.total})>"


class InventoryAdjustmentItem(Base):
    __tablename__ = "inventory_adjustment_item"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    adjustment_id: Mapped[str] = mapped_column(
        ForeignKey("inventory_adjustment.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    part_id: Mapped[str | None] = mapped_column(ForeignKey("part.id"), nullable=True, index=True)
    part_no: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    previous_quantity: Mapped[int] = mapped_column(Integer, default=0)
    adjusted_quantity: Mapped[int] = mapped_column(Integer, default=0)
    new_quantity: Mapped[int] = mapped_column(Integer, default=0)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    adjustment: Mapped[InventoryAdjustment] = relationship("InventoryAdjustment", back_populates="items")
    part: Mapped[Part | None] = relationship("Part")
