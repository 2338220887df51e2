"""
Catalog Service Module.

``CatalogService`` is a facade composing the per-entity services so routes
depend on a single object.

Usage:
    from partsdesk.services.catalog import build_catalog_service

    service = build_catalog_service(db, identity)
    brands = service.brands.list(status="A")
    adjustment = service.adjustments.create(data)
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from partsdesk.core.security import AuthIdentity

from .adjustment_service import AdjustmentService
from .base import BaseCatalogService, page_info, paginate
from .brand_service import BrandService
from .category_service import CategoryService
from .kit_service import KitService
from .part_service import PartFilters, PartService
from .purchase_order_service import PurchaseOrderService
from .rack_service import RackService
from .supplier_service import SupplierService


class CatalogService:
    """Facade for catalog and stock operations."""

    def __init__(self, db: Session, identity: AuthIdentity | None = None):
        self.brands = BrandService(db, identity)
        self.categories = CategoryService(db, identity)
        self.parts = PartService(db, identity)
        self.racks = RackService(db, identity)
        self.suppliers = SupplierService(db, identity)
        self.kits = KitService(db, identity)
        self.purchase_orders = PurchaseOrderService(db, identity)
        self.adjustments = AdjustmentService(db, identity)


def build_catalog_service(db: Session, identity: AuthIdentity | None = None) -> CatalogService:
    return CatalogService(db, identity)


__all__ = [
    "AdjustmentService",
    "BaseCatalogService",
    "BrandService",
    "CatalogService",
    "CategoryService",
    "KitService",
    "PartFilters",
    "PartService",
    "PurchaseOrderService",
    "RackService",
    "SupplierService",
    "build_catalog_service",
    "page_info",
    "paginate",
]
