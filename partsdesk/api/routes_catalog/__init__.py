"""
Catalog API Routes.

Endpoints served straight from the relational store:
- Brands, Categories, Parts
- Racks, Suppliers, Kits
- Purchase Orders
"""
from fastapi import APIRouter

from .brands import router as brands_router
from .categories import router as categories_router
from .kits import router as kits_router
from .parts import router as parts_router
from .purchase_orders import router as purchase_orders_router
from .racks import router as racks_router
from .suppliers import router as suppliers_router

router = APIRouter()
router.include_router(brands_router)
router.include_router(categories_router)
router.include_router(parts_router)
router.include_router(racks_router)
router.include_router(suppliers_router)
router.include_router(kits_router)
router.include_router(purchase_orders_router)

__all__ = ["router"]
