"""
Pydantic schemas for the catalog API.

JSON travels in camelCase (``partNo``, ``totalPages``); snake_case is accepted
on input too. Create/update bodies reject unknown fields.
"""
from __future__ import annotations

import datetime as dt
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True, protected_namespaces=())


class InputModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid", protected_namespaces=())


RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Pagination(APIModel):
    page: int
    limit: int
    total: int
    total_pages: int


class MessageResponse(APIModel):
    message: str


# ============================================================================
# Brand Schemas
# ============================================================================

class BrandCreate(InputModel):
    name: RequiredText = Field(..., max_length=120)
    status: str = Field(default="A", max_length=1)


class BrandUpdate(InputModel):
    name: RequiredText | None = Field(None, max_length=120)
    status: str | None = Field(None, max_length=1)


class BrandOut(APIModel):
    id: str
    name: str
    status: str
    created_at: dt.datetime
    updated_at: dt.datetime | None = None


class BrandResponse(APIModel):
    brand: BrandOut


class BrandListResponse(APIModel):
    brands: list[BrandOut]


# ============================================================================
# Category Schemas
# ============================================================================

class CategoryCreate(InputModel):
    name: RequiredText = Field(..., max_length=120)
    type: str = Field(default="main", pattern=r"^(main|sub)$")
    parent_id: str | None = None
    description: str | None = None
    status: str = Field(default="A", max_length=1)


class CategorySummary(APIModel):
    id: str
    name: str
    type: str
    status: str


class CategoryOut(APIModel):
    id: str
    name: str
    type: str
    parent_id: str | None = None
    description: str | None = None
    status: str
    created_at: dt.datetime
    parent: CategorySummary | None = None
    subcategories: list[CategorySummary] = []


class CategoryResponse(APIModel):
    category: CategoryOut


class CategoryListResponse(APIModel):
    categories: list[CategoryOut]


# ============================================================================
# Part Schemas
# ============================================================================

class PartModelIn(InputModel):
    model_no: str = Field(..., min_length=1, max_length=100)
    qty_used: int = Field(default=1, ge=0)
    tab: str = Field(default="P1", max_length=10)


class PartCreate(InputModel):
    master_part_no: str | None = Field(None, max_length=100)
    part_no: RequiredText = Field(..., max_length=100)
    brand: str | None = None
    description: str | None = None
    main_category: str | None = None
    sub_category: str | None = None
    application: str | None = None
    origin: str | None = None
    grade: str | None = None
    uom: str | None = None
    cost: float | None = Field(None, ge=0)
    price: float | None = Field(None, ge=0)
    status: str = Field(default="A", max_length=1)
    models: list[PartModelIn] = []


class StockOut(APIModel):
    id: str
    part_id: str
    quantity: int
    updated_at: dt.datetime | None = None


class PartModelOut(APIModel):
    id: str
    model_no: str
    qty_used: int
    tab: str


class PartSummary(APIModel):
    id: str
    master_part_no: str | None = None
    part_no: str
    brand: str | None = None
    description: str | None = None
    uom: str | None = None
    cost: float | None = None
    price: float | None = None


class PartOut(PartSummary):
    main_category: str | None = None
    sub_category: str | None = None
    application: str | None = None
    origin: str | None = None
    grade: str | None = None
    status: str
    created_at: dt.datetime
    updated_at: dt.datetime | None = None
    stock: StockOut | None = None
    models: list[PartModelOut] = []


class PartResponse(APIModel):
    part: PartOut


class PartListResponse(APIModel):
    parts: list[PartOut]
    pagination: Pagination


# ============================================================================
# Rack Schemas
# ============================================================================

class RackCreate(InputModel):
    rack_number: RequiredText = Field(..., max_length=50)
    store_id: str
    description: str | None = None
    status: str = Field(default="A", max_length=1)


class StoreSummary(APIModel):
    id: str
    code: str
    name: str


class RackOut(APIModel):
    id: str
    rack_number: str
    store_id: str
    description: str | None = None
    status: str
    created_at: dt.datetime
    store: StoreSummary | None = None


class RackResponse(APIModel):
    rack: RackOut


class RackListResponse(APIModel):
    racks: list[RackOut]
    pagination: Pagination


# ============================================================================
# Supplier Schemas
# ============================================================================

class SupplierCreate(InputModel):
    code: str | None = Field(None, max_length=50)
    name: RequiredText = Field(..., max_length=200)
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    status: str = Field(default="A", max_length=1)


class SupplierOut(APIModel):
    id: str
    code: str | None = None
    name: str
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    status: str
    created_at: dt.datetime
    purchase_order_count: int = 0


class SupplierResponse(APIModel):
    supplier: SupplierOut


class SupplierListResponse(APIModel):
    suppliers: list[SupplierOut]
    pagination: Pagination


# ============================================================================
# Kit Schemas
# ============================================================================

class KitItemIn(InputModel):
    part_id: str
    quantity: int = Field(default=1, ge=1)


class KitCreate(InputModel):
    kit_no: RequiredText = Field(..., max_length=100)
    name: RequiredText = Field(..., max_length=200)
    description: str | None = None
    total_cost: float = Field(default=0, ge=0)
    price: float = Field(default=0, ge=0)
    status: str = Field(default="A", max_length=1)
    items: list[KitItemIn] = []


class KitItemOut(APIModel):
    id: str
    part_id: str
    quantity: int
    part: PartSummary | None = None


class KitOut(APIModel):
    id: str
    kit_no: str
    name: str
    description: str | None = None
    total_cost: float
    price: float
    status: str
    created_at: dt.datetime
    items: list[KitItemOut] = []


class KitResponse(APIModel):
    kit: KitOut


class KitListResponse(APIModel):
    kits: list[KitOut]


# ============================================================================
# Purchase Order Schemas
# ============================================================================

class PurchaseOrderItemIn(InputModel):
    part_id: str
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(default=0, ge=0)
    total_price: float | None = Field(None, ge=0)


class PurchaseOrderCreate(InputModel):
    po_no: RequiredText = Field(..., max_length=100)
    supplier_id: str
    type: str = "purchase"
    status: str = "draft"
    order_date: dt.datetime | None = None
    expected_date: dt.datetime | None = None
    total_amount: float | None = Field(None, ge=0)
    items: list[PurchaseOrderItemIn] = []


class SupplierSummary(APIModel):
    id: str
    code: str | None = None
    name: str


class PurchaseOrderItemOut(APIModel):
    id: str
    part_id: str
    quantity: int
    unit_price: float
    total_price: float
    part: PartSummary | None = None


class PurchaseOrderOut(APIModel):
    id: str
    po_no: str
    supplier_id: str
    type: str
    status: str
    order_date: dt.datetime
    expected_date: dt.datetime | None = None
    total_amount: float
    created_at: dt.datetime
    supplier: SupplierSummary | None = None
    items: list[PurchaseOrderItemOut] = []


class PurchaseOrderResponse(APIModel):
    purchase_order: PurchaseOrderOut


class PurchaseOrderListResponse(APIModel):
    purchase_orders: list[PurchaseOrderOut]


# ============================================================================
# Inventory Adjustment Schemas
# ============================================================================

class AdjustmentItemIn(InputModel):
    part_id: str | None = None
    part_no: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    previous_quantity: int = 0
    adjusted_quantity: int = 0
    reason: str | None = None


class AdjustmentCreate(InputModel):
    adjustment_no: str | None = Field(None, max_length=100)
    # Accepted for compatibility; the stored total is derived from the items.
    total: float | None = None
    date: dt.datetime | None = None
    notes: str | None = None
    items: list[AdjustmentItemIn] = []


class AdjustmentItemOut(APIModel):
    id: str
    part_id: str | None = None
    part_no: str
    description: str | None = None
    previous_quantity: int
    adjusted_quantity: int
    new_quantity: int
    reason: str | None = None
    part: PartSummary | None = None


class AdjustmentOut(APIModel):
    id: str
    adjustment_no: str | None = None
    total: int
    date: dt.datetime
    notes: str | None = None
    created_by: str | None = None
    created_at: dt.datetime
    items: list[AdjustmentItemOut] = []


class AdjustmentResponse(APIModel):
    adjustment: AdjustmentOut


class AdjustmentListResponse(APIModel):
    adjustments: list[AdjustmentOut]
    pagination: Pagination


# ============================================================================
# Stats Schemas
# ============================================================================

class StatsCounts(APIModel):
    total_parts: int
    total_categories: int
    total_kits: int
    total_suppliers: int
    total_purchase_orders: int
    parts_change: int
    categories_change: int
    kits_change: int
    suppliers_change: int


class Sparklines(APIModel):
    parts: list[int]
    categories: list[int]
    kits: list[int]
    suppliers: list[int]


class StatsResponse(APIModel):
    stats: StatsCounts
    sparklines: Sparklines


# ============================================================================
# Stock Transfer Schemas (file backed)
# ============================================================================

class StockTransferCreate(InputModel):
    transfer_no: str | None = None
    transfer_date: str | None = None
    status: str | None = None
    notes: str | None = None
    items: list[dict[str, Any]] | None = None
    from_store_id: str | None = None
    to_store_id: str | None = None


class StockTransferListResponse(APIModel):
    transfers: list[dict[str, Any]]
    pagination: Pagination


class StockTransferResponse(APIModel):
    transfer: dict[str, Any]
