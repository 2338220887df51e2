"""Purchase order endpoints."""
from fastapi import APIRouter, Query

from partsdesk.api.dependencies import CatalogServiceDep
from partsdesk.models import catalog_schemas as schemas

router = APIRouter()


@router.get("/purchase-orders", response_model=schemas.PurchaseOrderListResponse)
def list_purchase_orders(
    service: CatalogServiceDep,
    type: str | None = Query(None),
    status: str | None = Query(None),
):
    return {"purchase_orders": service.purchase_orders.list(po_type=type, status=status)}


@router.post("/purchase-orders", response_model=schemas.PurchaseOrderResponse, status_code=201)
def create_purchase_order(data: schemas.PurchaseOrderCreate, service: CatalogServiceDep):
    return {"purchase_order": service.purchase_orders.create(data)}


@router.get("/purchase-orders/{po_id}", response_model=schemas.PurchaseOrderResponse)
def get_purchase_order(po_id: str, service: CatalogServiceDep):
    return {"purchase_order": service.purchase_orders.get(po_id)}
