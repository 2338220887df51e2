"""Inventory adjustment endpoints."""
import logging

from fastapi import APIRouter, Query

from partsdesk.api.dependencies import CatalogServiceDep
from partsdesk.models import catalog_schemas as schemas

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/inventory-adjustments", response_model=schemas.AdjustmentListResponse)
def list_adjustments(
    service: CatalogServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
):
    """List adjustments, latest adjustment date first."""
    adjustments, pagination = service.adjustments.list(page=page, limit=limit)
    return {"adjustments": adjustments, "pagination": pagination}


@router.get("/inventory-adjustments/{adjustment_id}", response_model=schemas.AdjustmentResponse)
def get_adjustment(adjustment_id: str, service: CatalogServiceDep):
    return {"adjustment": service.adjustments.get(adjustment_id)}


@router.post("/inventory-adjustments", response_model=schemas.AdjustmentResponse, status_code=201)
def create_adjustment(data: schemas.AdjustmentCreate, service: CatalogServiceDep):
    """
    Record an adjustment and set each referenced part's stock to its new quantity.

    Header, items and stock rows are written in one transaction.
    """
    return {"adjustment": service.adjustments.create(data)}
