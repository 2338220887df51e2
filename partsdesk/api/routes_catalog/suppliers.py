"""Supplier endpoints."""
from fastapi import APIRouter, Query

from partsdesk.api.dependencies import CatalogServiceDep
from partsdesk.models import catalog_schemas as schemas

router = APIRouter()


def _supplier_out(supplier, purchase_order_count: int = 0) -> schemas.SupplierOut:
    out = schemas.SupplierOut.model_validate(supplier)
    out.purchase_order_count = purchase_order_count
    return out


@router.get("/suppliers", response_model=schemas.SupplierListResponse)
def list_suppliers(
    service: CatalogServiceDep,
    search: str | None = Query(None),
    search_field: str | None = Query(None, alias="searchField"),
    status: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
):
    """List suppliers by name with their purchase order count."""
    rows, pagination = service.suppliers.list(
        search=search,
        search_field=search_field,
        status=status,
        page=page,
        limit=limit,
    )
    return {
        "suppliers": [_supplier_out(supplier, count) for supplier, count in rows],
        "pagination": pagination,
    }


@router.post("/suppliers", response_model=schemas.SupplierResponse, status_code=201)
def create_supplier(data: schemas.SupplierCreate, service: CatalogServiceDep):
    return {"supplier": _supplier_out(service.suppliers.create(data))}


@router.get("/suppliers/{supplier_id}", response_model=schemas.SupplierResponse)
def get_supplier(supplier_id: str, service: CatalogServiceDep):
    supplier = service.suppliers.get(supplier_id)
    count = service.suppliers.purchase_order_counts([supplier.id]).get(supplier.id, 0)
    return {"supplier": _supplier_out(supplier, count)}
