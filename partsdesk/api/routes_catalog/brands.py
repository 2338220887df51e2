"""Brand endpoints."""
import logging

from fastapi import APIRouter, Query

from partsdesk.api.dependencies import CatalogServiceDep
from partsdesk.models import catalog_schemas as schemas

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/brands", response_model=schemas.BrandListResponse)
def list_brands(
    service: CatalogServiceDep,
    status: str | None = Query(None),
    search: str | None = Query(None),
):
    """List brands by name."""
    return {"brands": service.brands.list(status=status, search=search)}


@router.post("/brands", response_model=schemas.BrandResponse, status_code=201)
def create_brand(data: schemas.BrandCreate, service: CatalogServiceDep):
    return {"brand": service.brands.create(data)}


@router.get("/brands/{brand_id}", response_model=schemas.BrandResponse)
def get_brand(brand_id: str, service: CatalogServiceDep):
    return {"brand": service.brands.get(brand_id)}


@router.put("/brands/{brand_id}", response_model=schemas.BrandResponse)
def update_brand(brand_id: str, data: schemas.BrandUpdate, service: CatalogServiceDep):
    return {"brand": service.brands.update(brand_id, data)}


@router.delete("/brands/{brand_id}", response_model=schemas.MessageResponse)
def delete_brand(brand_id: str, service: CatalogServiceDep):
    """Delete a brand no part refers to."""
    service.brands.delete(brand_id)
    return {"message": "Brand deleted successfully"}
